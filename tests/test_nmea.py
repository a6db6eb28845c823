import time

import pytest

from locutils.nmea import (
    BLANK_FIX_SENTENCES,
    LocationExtended,
    NmeaGenerator,
    PositionMode,
    put_checksum,
)


def test_checksum_known_sentence():
    body = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,"
    assert put_checksum(body) == body + "*47\r\n"


def test_checksum_of_empty_body_is_zero():
    assert put_checksum("$") == "$*00\r\n"


def test_repeated_chars_cancel_out():
    assert put_checksum("$GPAA")[-5:] == put_checksum("$GP")[-5:]


def test_checksum_ignores_order():
    assert put_checksum("$AB")[-5:] == put_checksum("$BA")[-5:]


def test_checksum_format():
    sentence = put_checksum("$GPVTG,,T,,M,,N,,K,N")
    assert sentence.startswith("$GPVTG,,T,,M,,N,,K,N*")
    assert sentence.endswith("\r\n")
    digits = sentence[-4:-2]
    assert digits == digits.upper()
    assert int(digits, 16) < 256


def test_send_calls_callback():
    calls = []
    generator = NmeaGenerator(lambda *args: calls.append(args))
    before = time.time_ns() // 1_000_000
    sentence = generator.send("$GPGSV,1,1,0,")
    after = time.time_ns() // 1_000_000
    assert len(calls) == 1
    timestamp, sent, length = calls[0]
    assert sent == sentence == put_checksum("$GPGSV,1,1,0,")
    assert length == len(sentence) - 1
    assert before <= timestamp <= after


def test_send_without_callback_returns_sentence():
    generator = NmeaGenerator()
    assert generator.send("$GLGSV,1,1,0,") == put_checksum("$GLGSV,1,1,0,")


def test_send_blank_fix_order():
    sent = []
    generator = NmeaGenerator(lambda ts, sentence, length: sent.append(sentence))
    result = generator.send_blank_fix()
    assert result == sent
    assert [s.split("*")[0] for s in sent] == list(BLANK_FIX_SENTENCES)
    assert sent[0].startswith("$GPGSA,A,1,")
    assert sent[3].startswith("$GPGGA,,,,,,0,")


def test_generator_defaults():
    generator = NmeaGenerator()
    assert generator.position_mode is PositionMode.STANDALONE
    assert generator.sv_used_mask == 0
    assert (generator.pdop, generator.hdop, generator.vdop) == (0.0, 0.0, 0.0)


def test_position_mode_from_int():
    assert NmeaGenerator(position_mode=1).position_mode is PositionMode.MS_BASED


def test_invalid_position_mode():
    with pytest.raises(ValueError):
        NmeaGenerator(position_mode=99)


def test_location_extended_has_dop():
    assert LocationExtended(pdop=1.0, hdop=2.0, vdop=3.0).has_dop is True
    assert LocationExtended(pdop=1.0, hdop=2.0).has_dop is False
    assert LocationExtended().has_dop is False