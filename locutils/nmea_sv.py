"""Satellite-report NMEA sentences: GPGSV and GLGSV."""

from dataclasses import dataclass, field

from locutils.log_util import ENTRY_TAG, EXIT_TAG, loc_logger
from locutils.nmea import (
    GLONASS_PRN_END,
    GLONASS_PRN_START,
    GPS_PRN_END,
    GPS_PRN_START,
    NMEA_SENTENCE_MAX_LENGTH,
    LocationExtended,
)

__all__ = ["SvInfo", "SvStatus", "gsv_sentences", "generate_sv"]

_SVS_PER_SENTENCE = 4


@dataclass
class SvInfo:
    """One satellite in view."""

    prn: int
    snr: float = 0.0
    elevation: float = 0.0
    azimuth: float = 0.0


@dataclass
class SvStatus:
    """The satellites in view and a bit mask of those used in the fix."""

    sv_list: list = field(default_factory=list)
    used_in_fix_mask: int = 0


def _rounded(value):
    return int(0.5 + value)


def _checked(text):
    if len(text) >= NMEA_SENTENCE_MAX_LENGTH:
        loc_logger.error("NMEA Error in string formatting")
        raise ValueError(f"NMEA sentence longer than {NMEA_SENTENCE_MAX_LENGTH - 1} characters")
    return text


def _sv_block(sv):
    block = f",{sv.prn:02d},{_rounded(sv.elevation):02d},{_rounded(sv.azimuth):03d},"
    if sv.snr > 0:
        block += f"{_rounded(sv.snr):02d}"
    return block


def gsv_sentences(talker, svs, prn_start, prn_end):
    """Build the GSV sentence bodies for the satellites whose PRN is in range.

    Four satellites go in each sentence; with none in range a single blank
    sentence is returned. Bodies carry no checksum.
    """
    matching = [sv for sv in svs if prn_start <= sv.prn <= prn_end]
    if not matching:
        return [f"${talker}GSV,1,1,0,"]
    groups = [
        matching[start:start + _SVS_PER_SENTENCE]
        for start in range(0, len(matching), _SVS_PER_SENTENCE)
    ]
    total = len(groups)
    return [
        _checked(
            f"${talker}GSV,{total},{number},{len(matching):02d}"
            + "".join(_sv_block(sv) for sv in group)
        )
        for number, group in enumerate(groups, start=1)
    ]


def generate_sv(generator, sv_status, extended=None):
    """Send the sentences of a satellite report through ``generator``.

    GPS and GLONASS satellites get their own GSV sentences; others are left
    out. If no satellite was used in a fix, blank position sentences follow;
    otherwise the used-in-fix mask and the dilutions of precision are cached
    for the next position report. Returns the sentences sent.
    """
    loc_logger.verbose("%s %s", ENTRY_TAG, "generate_sv")
    extended = extended if extended is not None else LocationExtended()
    svs = sv_status.sv_list
    bodies = gsv_sentences("GP", svs, GPS_PRN_START, GPS_PRN_END)
    bodies += gsv_sentences("GL", svs, GLONASS_PRN_START, GLONASS_PRN_END)
    sent = [generator.send(body) for body in bodies]

    if sv_status.used_in_fix_mask == 0:
        sent += generator.send_blank_fix()
    else:
        generator.sv_used_mask = sv_status.used_in_fix_mask & 0xFFFFFFFF
        if extended.has_dop:
            generator.pdop = extended.pdop
            generator.hdop = extended.hdop
            generator.vdop = extended.vdop
        else:
            generator.pdop = 0.0
            generator.hdop = 0.0
            generator.vdop = 0.0
    loc_logger.verbose("%s %s %d", EXIT_TAG, "generate_sv", 0)
    return sent