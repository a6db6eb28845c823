"""Level-filtered logging and name lookup helpers for the location utilities."""

import enum
import logging
import time
from collections.abc import Mapping

from locutils.clock import system_time_us

__all__ = [
    "LocLogger",
    "loc_logger",
    "logger_init",
    "get_name_from_mask",
    "get_name_from_val",
    "succ_fail_string",
    "get_time",
    "get_timestamp",
    "UNKNOWN_STR",
    "DEFAULT_DEBUG_LEVEL",
    "VERBOSE",
]

UNKNOWN_STR = "UNKNOWN"

# A debug level left at this value means "follow the platform's own levels".
DEFAULT_DEBUG_LEVEL = 0xFF

VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")

BOOL_STR = ("False", "True")
VOID_RET = "None"
FROM_AFW = "===>"
TO_MODEM = "--->"
FROM_MODEM = "<---"
TO_AFW = "<==="
EXIT_TAG = "Exiting"
ENTRY_TAG = "Entering"


class LocLogger:
    """Logger whose output is gated by a numeric debug level from configuration.

    Levels 1..5 enable error, warning, info, debug and verbose output in turn,
    all emitted at error severity. The default level defers to the ordinary
    severities of each kind of message. Any other level silences output.
    """

    def __init__(self, debug_level=DEFAULT_DEBUG_LEVEL, timestamp=0, name="locutils"):
        self.debug_level = debug_level
        self.timestamp = timestamp
        self._log = logging.getLogger(name)

    def init(self, debug, timestamp):
        """Set the debug level and the timestamp flag."""
        self.debug_level = debug
        self.timestamp = timestamp

    def _emit(self, threshold, prefix, default_severity, msg, args):
        if threshold <= self.debug_level <= 5:
            severity = logging.ERROR
        elif self.debug_level == DEFAULT_DEBUG_LEVEL:
            severity = default_severity
        else:
            return None
        text = prefix + (msg % args if args else msg)
        self._log.log(severity, text)
        return text

    def error(self, msg, *args):
        """Log an error; return the emitted text, or None if filtered out."""
        return self._emit(1, "W/", logging.ERROR, msg, args)

    def warning(self, msg, *args):
        """Log a warning; return the emitted text, or None if filtered out."""
        return self._emit(2, "W/", logging.WARNING, msg, args)

    def info(self, msg, *args):
        """Log an informational message; return the emitted text or None."""
        return self._emit(3, "I/", logging.INFO, msg, args)

    def debug(self, msg, *args):
        """Log a debug message; return the emitted text or None."""
        return self._emit(4, "D/", logging.DEBUG, msg, args)

    def verbose(self, msg, *args):
        """Log a verbose message; return the emitted text or None."""
        return self._emit(5, "V/", VERBOSE, msg, args)


loc_logger = LocLogger()


def logger_init(debug, timestamp):
    """Configure the shared logger's debug level and timestamp flag."""
    loc_logger.init(debug, timestamp)


def _pairs(table):
    if isinstance(table, Mapping):
        return table.items()
    if isinstance(table, type) and issubclass(table, enum.Enum):
        return ((member.name, member.value) for member in table)
    return table


def get_name_from_mask(table, mask):
    """Return the first name in ``table`` whose value shares a bit with ``mask``."""
    return next((name for name, val in _pairs(table) if val & mask), UNKNOWN_STR)


def get_name_from_val(table, value):
    """Return the first name in ``table`` whose value equals ``value``."""
    return next((name for name, val in _pairs(table) if val == value), UNKNOWN_STR)


def succ_fail_string(is_succ):
    """Describe an outcome as ``successful`` or ``failed``."""
    return "successful" if is_succ else "failed"


def get_time():
    """Return the local time as ``HH:MM:SS.mmm``."""
    seconds, usec = divmod(system_time_us(0), 1_000_000)
    hms = time.strftime("%H:%M:%S", time.localtime(seconds))
    return f"{hms}.{usec // 1000:03d}"


def get_timestamp():
    """Return the current time of day as ``HH:MM:SS.uuuuuu`` from the epoch clock."""
    seconds, usec = divmod(system_time_us(0), 1_000_000)
    hours = seconds // 3600 % 24
    minutes = seconds % 3600 // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{usec:06d}"