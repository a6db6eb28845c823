"""NMEA sentence checksums and delivery of sentences to a callback."""

import enum
import time
from dataclasses import dataclass

from locutils.log_util import TO_AFW, loc_logger

__all__ = [
    "NMEA_SENTENCE_MAX_LENGTH",
    "GPS_PRN_START",
    "GPS_PRN_END",
    "GLONASS_PRN_START",
    "GLONASS_PRN_END",
    "BLANK_FIX_SENTENCES",
    "PositionMode",
    "LocationExtended",
    "NmeaGenerator",
    "put_checksum",
]

NMEA_SENTENCE_MAX_LENGTH = 200

GPS_PRN_START = 1
GPS_PRN_END = 32
GLONASS_PRN_START = 65
GLONASS_PRN_END = 96

BLANK_FIX_SENTENCES = (
    "$GPGSA,A,1,,,,,,,,,,,,,,,",
    "$GPVTG,,T,,M,,N,,K,N",
    "$GPRMC,,V,,,,,,,,,,N",
    "$GPGGA,,,,,,0,,,,,,,,",
)


class PositionMode(enum.IntEnum):
    """How the engine computes fixes; only standalone fixes count as autonomous."""

    STANDALONE = 0
    MS_BASED = 1
    MS_ASSISTED = 2


@dataclass
class LocationExtended:
    """Extra fix data; a field left as None was not reported."""

    altitude_mean_sea_level: float | None = None
    pdop: float | None = None
    hdop: float | None = None
    vdop: float | None = None
    magnetic_deviation: float | None = None

    @property
    def has_dop(self):
        """Whether all three dilutions of precision were reported."""
        return None not in (self.pdop, self.hdop, self.vdop)


def put_checksum(body):
    """Append ``*XX\\r\\n`` to a sentence, XX being the XOR of all chars after the first."""
    checksum = 0
    for char in body[1:]:
        checksum ^= ord(char) & 0xFF
    return f"{body}*{checksum:02X}\r\n"


class NmeaGenerator:
    """Delivers NMEA sentences to ``callback(timestamp_ms, sentence, length)``.

    It also caches the satellites used in the last fix and the dilutions of
    precision from the last satellite report, for use by position reports.
    The reported length counts the characters after the leading ``$``.
    """

    def __init__(self, callback=None, position_mode=PositionMode.STANDALONE):
        self.callback = callback
        self.position_mode = PositionMode(position_mode)
        self.sv_used_mask = 0
        self.pdop = 0.0
        self.hdop = 0.0
        self.vdop = 0.0

    def send(self, body):
        """Checksum ``body``, hand it to the callback and return the sentence."""
        sentence = put_checksum(body)
        now = time.time_ns() // 1_000_000
        loc_logger.info("%s %s %s", TO_AFW, "nmea_cb", sentence)
        if self.callback is not None:
            self.callback(now, sentence, len(sentence) - 1)
        loc_logger.debug("NMEA <%s", sentence)
        return sentence

    def send_blank_fix(self):
        """Send the empty GSA, VTG, RMC and GGA sentences of a report without a fix."""
        return [self.send(body) for body in BLANK_FIX_SENTENCES]