import pytest

from locutils.nmea import (
    BLANK_FIX_SENTENCES,
    GLONASS_PRN_END,
    GLONASS_PRN_START,
    GPS_PRN_END,
    GPS_PRN_START,
    LocationExtended,
    NmeaGenerator,
    put_checksum,
)
from locutils.nmea_sv import SvInfo, SvStatus, generate_sv, gsv_sentences


def _gps(svs):
    return gsv_sentences("GP", svs, GPS_PRN_START, GPS_PRN_END)


def _glonass(svs):
    return gsv_sentences("GL", svs, GLONASS_PRN_START, GLONASS_PRN_END)


@pytest.fixture
def received():
    return []


@pytest.fixture
def gen(received):
    return NmeaGenerator(lambda ts, sentence, length: received.append(sentence))


def test_blank_sentence_when_none_in_range():
    assert _gps([]) == ["$GPGSV,1,1,0,"]
    assert _glonass([SvInfo(prn=5, snr=30.0)]) == ["$GLGSV,1,1,0,"]


def test_single_satellite():
    sv = SvInfo(prn=7, snr=40.0, elevation=45.0, azimuth=120.0)
    assert _gps([sv]) == ["$GPGSV,1,1,01,07,45,120,40"]


def test_zero_snr_is_omitted():
    sv = SvInfo(prn=7, snr=0.0, elevation=45.0, azimuth=120.0)
    (body,) = _gps([sv])
    fields = body.split(",")
    assert fields[4] == "07"
    assert fields[-1] == ""
    assert len(fields) == 8


def test_values_are_rounded_half_up():
    sv = SvInfo(prn=3, snr=19.5, elevation=44.5, azimuth=9.4)
    assert _gps([sv]) == ["$GPGSV,1,1,01,03,45,009,20"]


def test_satellites_grouped_four_per_sentence():
    gps_prns = [1, 2, 3, 4, 5, 6, 7, 8, 9]
    svs = []
    for prn in gps_prns:
        svs.append(SvInfo(prn=prn, snr=30.0, elevation=10.0, azimuth=20.0))
        svs.append(SvInfo(prn=prn + 64, snr=30.0, elevation=10.0, azimuth=20.0))
    bodies = _gps(svs)
    assert len(bodies) == 3
    headers = [body.split(",")[:4] for body in bodies]
    assert [h[1] for h in headers] == ["3", "3", "3"]
    assert [h[2] for h in headers] == ["1", "2", "3"]
    assert all(h[3] == f"{len(gps_prns):02d}" for h in headers)
    listed = [prn for body in bodies for prn in body.split(",")[4::4]]
    assert listed == [f"{prn:02d}" for prn in gps_prns]
    assert [len(body.split(",")[4:]) // 4 for body in bodies] == [4, 4, 1]


def test_prn_ranges_are_inclusive():
    svs = [SvInfo(prn=prn, snr=25.0) for prn in (1, 32, 33, 64, 65, 96, 97)]
    gps_listed = [p for body in _gps(svs) for p in body.split(",")[4::4]]
    gln_listed = [p for body in _glonass(svs) for p in body.split(",")[4::4]]
    assert gps_listed == ["01", "32"]
    assert gln_listed == ["65", "96"]


def test_no_used_satellites_sends_blank_fix(gen, received):
    status = SvStatus([SvInfo(prn=4, snr=30.0)], used_in_fix_mask=0)
    sent = generate_sv(gen, status)
    assert len(sent) == 6
    assert sent[-4:] == [put_checksum(body) for body in BLANK_FIX_SENTENCES]
    assert sent[0] == put_checksum(_gps(status.sv_list)[0])
    assert received == sent
    assert gen.sv_used_mask == 0


def test_used_mask_and_dops_are_cached(gen):
    extended = LocationExtended(pdop=1.5, hdop=2.0, vdop=2.5)
    sent = generate_sv(gen, SvStatus([], used_in_fix_mask=0b1011), extended)
    assert len(sent) == 2
    assert gen.sv_used_mask == 0b1011
    assert (gen.pdop, gen.hdop, gen.vdop) == (1.5, 2.0, 2.5)


def test_dops_reset_without_extended_dops(gen):
    gen.pdop, gen.hdop, gen.vdop = 1.0, 1.0, 1.0
    generate_sv(gen, SvStatus([], used_in_fix_mask=1))
    assert (gen.pdop, gen.hdop, gen.vdop) == (0, 0, 0)
    assert gen.sv_used_mask == 1


def test_sent_sentences_carry_valid_checksums(gen):
    svs = [SvInfo(prn=prn, snr=20.0, elevation=30.0, azimuth=40.0) for prn in (2, 66, 12, 70, 80)]
    sent = generate_sv(gen, SvStatus(svs, used_in_fix_mask=0))
    for sentence in sent:
        assert put_checksum(sentence[:-5]) == sentence
    assert [s[:6] for s in sent[:2]] == ["$GPGSV", "$GLGSV"]