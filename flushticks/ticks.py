"""Periodic deadlines with an optional random-looking bias.

A :class:`Ticks` instance tracks the next moment a periodic action is due.
Deadlines are aligned to multiples of the period from the moment the
instance was created. Each deadline may be shifted by up to ``max_bias``
of the period in either direction. The shift comes from the low bits of the
elapsed time, which spreads many instances apart.
"""

from __future__ import annotations

import math
import time
from datetime import timedelta
from fractions import Fraction
from typing import Callable, Optional, Union

__all__ = ["Ticks", "PERIOD_THRESHOLD"]

_NANOS_PER_SEC = 1_000_000_000

#: Periods of this length or longer disable ticking.
PERIOD_THRESHOLD = timedelta(days=365)

_PERIOD_THRESHOLD_NS = 365 * 24 * 3600 * _NANOS_PER_SEC

PeriodLike = Union[float, int, timedelta]


def _secs_to_nanos(secs: float) -> int:
    """Convert seconds to whole nanoseconds, rounding half to even."""
    if math.isnan(secs) or math.isinf(secs):
        raise ValueError(f"duration must be finite, got {secs!r}")
    if secs < 0:
        raise ValueError(f"duration must not be negative, got {secs!r}")
    return round(Fraction(secs) * _NANOS_PER_SEC)


def _to_nanos(value: PeriodLike) -> int:
    if isinstance(value, timedelta):
        nanos = (
            (value.days * 86_400 + value.seconds) * _NANOS_PER_SEC
            + value.microseconds * 1_000
        )
        if nanos < 0:
            raise ValueError(f"duration must not be negative, got {value!r}")
        return nanos
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"duration must not be negative, got {value!r}")
        return value * _NANOS_PER_SEC
    return _secs_to_nanos(float(value))


def _scale(nanos: int, factor: float) -> int:
    """Multiply a duration in nanoseconds by a float factor."""
    secs = float(nanos // _NANOS_PER_SEC) + float(nanos % _NANOS_PER_SEC) / 1e9
    return _secs_to_nanos(factor * secs)


class Ticks:
    """Schedule of periodic deadlines measured on a monotonic clock.

    ``clock`` returns the current time in integer nanoseconds; it defaults
    to :func:`time.monotonic_ns`. Ticking is disabled until a period
    shorter than :data:`PERIOD_THRESHOLD` is set and :meth:`reschedule`
    is called.
    """

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self._clock = clock
        self._period_ns: Optional[int] = None
        self._max_bias = 0.0
        self._origin = clock()
        self._next_at: Optional[int] = None

    @property
    def period(self) -> Optional[float]:
        """The period in seconds, or ``None`` when unlimited."""
        if self._period_ns is None:
            return None
        return self._period_ns / _NANOS_PER_SEC

    @property
    def max_bias(self) -> float:
        """The largest shift of a deadline, as a fraction of the period."""
        return self._max_bias

    def set_period(self, period: Optional[PeriodLike]) -> None:
        """Set the period in seconds or as a timedelta; ``None`` disables it."""
        self._period_ns = None if period is None else _to_nanos(period)

    def set_period_bias(self, max_bias: float) -> None:
        """Set the maximum bias, clamped to the range 0 to 1."""
        if math.isnan(max_bias):
            raise ValueError("max_bias must not be NaN")
        self._max_bias = min(max(float(max_bias), 0.0), 1.0)

    def time_left(self) -> Optional[float]:
        """Seconds until the next deadline, or ``None`` if none is scheduled."""
        if self._next_at is None:
            return None
        return max(self._next_at - self._clock(), 0) / _NANOS_PER_SEC

    def reached(self) -> bool:
        """Whether the scheduled deadline has passed."""
        return self._next_at is not None and self._clock() >= self._next_at

    def reschedule(self) -> None:
        """Compute the next deadline after the current moment."""
        self._next_at = self._calc_next_at()

    def _calc_next_at(self) -> Optional[int]:
        period = self._period_ns
        if period is None or period >= _PERIOD_THRESHOLD_NS or period == 0:
            return None

        now = self._clock()
        elapsed = now - self._origin

        coef = ((elapsed % _NANOS_PER_SEC) & 0xFFFF) / 65535.0
        max_bias = _scale(period, self._max_bias)
        bias = _scale(max_bias, coef)
        n = elapsed // period

        next_at = self._origin + period * (n + 1) + 2 * bias - max_bias

        # Skipping ahead can land inside the biased zone before now.
        if next_at <= now:
            return next_at + period
        return next_at