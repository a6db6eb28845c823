"""Wall-clock helpers for timestamps and elapsed-time measurement."""

import time

__all__ = ["system_time_us", "elapsed_millis_since_boot", "ts_format"]


def system_time_us(clock=0):
    """Return the current wall-clock time in microseconds since the epoch.

    The ``clock`` argument is accepted for compatibility and ignored.
    """
    return time.time_ns() // 1000


def elapsed_millis_since_boot():
    """Return the system clock in milliseconds.

    This stands in for the time since boot on platforms without it.
    """
    return system_time_us(0) // 1000


def ts_format(message):
    """Prefix ``message`` with an ``HH:MM:SS.uuuuuu]`` timestamp of the current time."""
    seconds, usec = divmod(system_time_us(0), 1_000_000)
    hours = seconds // 3600 % 24
    minutes = seconds % 3600 // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{usec:06d}]{message}"