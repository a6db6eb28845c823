from unittest.mock import patch

from locutils.clock import elapsed_millis_since_boot, system_time_us, ts_format

NS = 1_700_000_000_123_456_789


def test_system_time_is_microseconds():
    with patch("time.time_ns", return_value=NS):
        assert system_time_us(0) == NS // 1000


def test_clock_argument_is_ignored():
    with patch("time.time_ns", return_value=NS):
        assert system_time_us(1) == system_time_us(0)


def test_elapsed_millis_is_system_time_in_ms():
    with patch("time.time_ns", return_value=NS):
        assert elapsed_millis_since_boot() == system_time_us(0) // 1000


def test_elapsed_millis_does_not_go_backwards():
    first = elapsed_millis_since_boot()
    second = elapsed_millis_since_boot()
    assert second >= first


def test_ts_format_prefix():
    with patch("time.time_ns", return_value=(3661 * 1_000_000 + 123) * 1000):
        assert ts_format("hello") == "01:01:01.000123]hello"


def test_ts_format_wraps_at_day():
    with patch("time.time_ns", return_value=(86400 + 5) * 1_000_000_000):
        assert ts_format("x").startswith("00:00:05.")


def test_ts_format_keeps_message_after_bracket():
    result = ts_format("payload")
    assert result.endswith("]payload")
    assert len(result.split("]")[0]) == len("HH:MM:SS.uuuuuu")