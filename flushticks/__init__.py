"""Periodic deadline scheduling with optional bias, for timing batch flushes."""

__version__ = "0.1.0"
__all__ = ["ticks"]