# flushticks

`flushticks` works out when the next periodic deadline is due. It is meant for
code that collects work in batches and must flush it on a regular schedule,
such as a buffered database writer.

Deadlines sit on a fixed grid that starts when the scheduler is created. If
some deadlines pass without being noticed, the scheduler skips them and gives
the next one that is still ahead. It never fires several times to catch up.
An optional bias moves each deadline by up to a set fraction of the period.
The amount comes from the low bits of the elapsed time, so writers that start
at the same moment do not all flush at the same instant.

## Installation

```
pip install flushticks
```

The package has no dependencies outside the standard library.

## Usage

```python
from datetime import timedelta

from flushticks.ticks import Ticks

ticks = Ticks()
ticks.set_period(timedelta(seconds=10))  # or 10, or 10.0; None disables it
ticks.set_period_bias(0.1)               # shift deadlines by up to ±10%
ticks.reschedule()

# ... later, in the writer's loop ...
if ticks.reached():
    flush_buffer()
    ticks.reschedule()

remaining = ticks.time_left()  # seconds as a float, or None when disabled
```

## API

Everything is in the module `flushticks.ticks`.

### `Ticks(clock=time.monotonic_ns)`

`clock` is a callable that returns the current time in whole nanoseconds.
Pass your own clock to drive the scheduler in tests or simulations. The grid
of deadlines starts at the clock reading taken when the instance is created.
No deadline exists until a period is set and `reschedule()` is called.

- `set_period(period)` sets the period. It accepts a `timedelta`, an `int` of
  seconds or a `float` of seconds. `None` switches the schedule off. A
  negative or non-finite period raises `ValueError`. A period of zero, or of
  `PERIOD_THRESHOLD` (365 days) or more, also switches the schedule off.
- `set_period_bias(max_bias)` sets the largest shift as a fraction of the
  period and clamps it to the range `0.0` to `1.0`. NaN raises `ValueError`.
- `reschedule()` works out the next deadline after the current moment. Call
  it after every flush, and after you change the period or the bias. When the
  schedule is switched off, it clears any pending deadline.
- `time_left()` returns the seconds until the deadline as a `float`, never
  less than `0.0`. It returns `None` when no deadline is scheduled.
- `reached()` returns `True` once the clock has reached the scheduled
  deadline. It returns `False` when no deadline is scheduled.
- `period` is the period in seconds, or `None` when none is set.
- `max_bias` is the current bias fraction.

### `PERIOD_THRESHOLD`

A `timedelta` of 365 days. Periods this long or longer switch the schedule off.

## What it does not do

`Ticks` only computes deadlines. It runs no timers or background threads,
does not sleep and calls no callbacks. Your own code asks `reached()` or
`time_left()` and decides when to flush.

## Running the tests

```
pip install -e ".[test]"
pytest
```