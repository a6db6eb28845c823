"""Position-report NMEA sentences: GSA, VTG, RMC and GGA."""

import math
import struct
import time
from dataclasses import dataclass

from locutils.log_util import ENTRY_TAG, EXIT_TAG, loc_logger
from locutils.nmea import (
    NMEA_SENTENCE_MAX_LENGTH,
    LocationExtended,
    PositionMode,
)

__all__ = ["Location", "format_lat_lon", "generate_pos"]

_KNOTS_PER_MPS = 3600.0 / 1852.0
_KMH_PER_MPS = 3.6
_MAX_USED_LISTED = 12


@dataclass
class Location:
    """A position fix; a field left as None was not reported.

    ``timestamp`` is the UTC time of the fix in milliseconds since the epoch.
    """

    timestamp: int = 0
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    speed: float | None = None
    bearing: float | None = None

    @property
    def has_lat_long(self):
        """Whether both latitude and longitude were reported."""
        return self.latitude is not None and self.longitude is not None


def _f32(value):
    """Round a number to single precision, as the report fields are stored."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _checked(*pieces):
    text = "".join(pieces)
    if len(text) >= NMEA_SENTENCE_MAX_LENGTH:
        loc_logger.error("NMEA Error in string formatting")
        raise ValueError(f"NMEA sentence longer than {NMEA_SENTENCE_MAX_LENGTH - 1} characters")
    return text


def format_lat_lon(latitude, longitude):
    """Format a position as ``DDMM.MMMMMM,H,DDDMM.MMMMMM,H,``.

    A latitude of exactly zero is reported as southern.
    """
    lat_hemisphere = "N" if latitude > 0 else "S"
    lon_hemisphere = "W" if longitude < 0 else "E"
    latitude = abs(latitude)
    longitude = abs(longitude)
    lat_minutes = math.fmod(latitude * 60.0, 60.0)
    lon_minutes = math.fmod(longitude * 60.0, 60.0)
    lat_degrees = int(math.floor(latitude)) & 0xFF
    lon_degrees = int(math.floor(longitude)) & 0xFF
    return (
        f"{lat_degrees:02d}{lat_minutes:09.6f},{lat_hemisphere},"
        f"{lon_degrees:03d}{lon_minutes:09.6f},{lon_hemisphere},"
    )


def _utc(timestamp_ms):
    seconds = abs(int(timestamp_ms)) // 1000
    if timestamp_ms < 0:
        seconds = -seconds
    return time.gmtime(seconds)


def _dops(generator, extended):
    if extended.has_dop:
        return _f32(extended.pdop), _f32(extended.hdop), _f32(extended.vdop)
    if generator.pdop > 0 and generator.hdop > 0 and generator.vdop > 0:
        return generator.pdop, generator.hdop, generator.vdop
    return None


def _send_fix(generator, location, extended):
    utc = _utc(location.timestamp)
    hms = f"{utc.tm_hour:02d}{utc.tm_min:02d}{utc.tm_sec:02d}"
    mask = generator.sv_used_mask & 0xFFFFFFFF
    used = [prn for prn in range(1, 33) if (mask >> (prn - 1)) & 1]
    generator.sv_used_mask = 0
    used_count = len(used)

    has_fix = location.has_lat_long
    standalone = generator.position_mode == PositionMode.STANDALONE
    if not has_fix:
        mode, quality = "N", "0"
    elif standalone:
        mode, quality = "A", "1"
    else:
        mode, quality = "D", "2"

    dops = _dops(generator, extended)
    lat_lon = (
        format_lat_lon(location.latitude, location.longitude) if has_fix else ",,,,"
    )
    speed = _f32(location.speed) if location.speed is not None else None
    bearing = _f32(location.bearing) if location.bearing is not None else None
    msl = (
        _f32(extended.altitude_mean_sea_level)
        if extended.altitude_mean_sea_level is not None
        else None
    )
    sent = []

    # GSA: fix type, up to twelve satellites used, dilutions of precision.
    if used_count == 0:
        fix_type = "1"
    elif used_count <= 3:
        fix_type = "2"
    else:
        fix_type = "3"
    listed = used[:_MAX_USED_LISTED]
    sats = "".join(f"{prn:02d}," for prn in listed) + "," * (_MAX_USED_LISTED - len(listed))
    dop_text = ",".join(f"{value:.1f}" for value in dops) if dops else ",,"
    sent.append(generator.send(_checked(f"$GPGSA,A,{fix_type},", sats, dop_text)))

    # VTG: course and speed over ground.
    if bearing is not None:
        # The magnetic track is reported equal to the true track.
        track = f"{bearing:.1f},T,{bearing:.1f},M,"
    else:
        track = ",T,,M,"
    if speed is not None:
        knots = _f32(speed * _KNOTS_PER_MPS)
        kmh = _f32(speed * _KMH_PER_MPS)
        speed_text = f"{knots:.1f},N,{kmh:.1f},K,"
    else:
        speed_text = ",N,,K,"
    sent.append(generator.send(_checked("$GPVTG,", track, speed_text, mode)))

    # RMC: recommended minimum data.
    knots_text = f"{_f32(speed * _KNOTS_PER_MPS):.1f}," if speed is not None else ","
    bearing_text = f"{bearing:.1f}," if bearing is not None else ","
    year = (utc.tm_year - 1900) % 100
    date_text = f"{utc.tm_mday:02d}{utc.tm_mon:02d}{year:02d},"
    if extended.magnetic_deviation is not None:
        variation = _f32(extended.magnetic_deviation)
        direction = "W" if variation < 0.0 else "E"
        variation_text = f"{abs(variation):.1f},{direction},"
    else:
        variation_text = ",,"
    sent.append(generator.send(_checked(
        f"$GPRMC,{hms},A,", lat_lon, knots_text, bearing_text, date_text, variation_text, mode
    )))

    # GGA: fix data.
    if dops:
        quality_text = f"{quality},{used_count:02d},{dops[1]:.1f},"
    else:
        quality_text = f"{quality},{used_count:02d},,"
    msl_text = f"{msl:.1f},M," if msl is not None else ",,"
    if location.altitude is not None and msl is not None:
        separation_text = f"{location.altitude - msl:.1f},M,,"
    else:
        separation_text = ",,,"
    sent.append(generator.send(_checked(
        f"$GPGGA,{hms},", lat_lon, quality_text, msl_text, separation_text
    )))
    return sent


def generate_pos(generator, location, extended=None, generate_nmea=True):
    """Send the sentences of a position report through ``generator``.

    For a final fix (``generate_nmea`` true) GSA, VTG, RMC and GGA sentences
    are built from the fix and the generator's cached satellite data;
    otherwise blank sentences are sent. The cached dilutions of precision
    are cleared afterwards. Returns the sentences sent. A sentence that
    would not fit raises :class:`ValueError`.
    """
    loc_logger.verbose("%s %s", ENTRY_TAG, "generate_pos")
    extended = extended if extended is not None else LocationExtended()
    if generate_nmea:
        sent = _send_fix(generator, location, extended)
    else:
        sent = generator.send_blank_fix()
    generator.pdop = 0.0
    generator.hdop = 0.0
    generator.vdop = 0.0
    loc_logger.verbose("%s %s %d", EXIT_TAG, "generate_pos", 0)
    return sent