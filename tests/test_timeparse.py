"""Tests for 12-hour clock parsing and slot normalization."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from bookings.errors import InvalidRequest
from bookings.timeparse import day_window, normalize, parse_clock, parse_date

IST = ZoneInfo("Asia/Kolkata")


class TestParseClock:
    @pytest.mark.parametrize("hour", range(1, 12))
    @pytest.mark.parametrize("meridiem", ["AM", "PM"])
    def test_hour_mapping(self, hour, meridiem):
        t = parse_clock(f"{hour}:15 {meridiem}")
        assert t.hour == hour % 12 + (12 if meridiem == "PM" else 0)
        assert t.minute == 15

    def test_midnight(self):
        assert parse_clock("12:00 AM").hour == 0

    def test_noon(self):
        """12 PM must not become hour 24."""
        assert parse_clock("12:00 PM").hour == 12

    def test_two_digit_hour(self):
        t = parse_clock("09:30 PM")
        assert (t.hour, t.minute) == (21, 30)

    def test_lowercase_meridiem(self):
        assert parse_clock("3:00 pm").hour == 15

    @pytest.mark.parametrize("value", [
        "", "11:00", "11 AM", "13:00 PM", "0:30 AM", "10:75 AM", "ten:00 AM", "11:00 XM",
    ])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidRequest):
            parse_clock(value)


class TestParseDate:
    def test_valid(self):
        assert parse_date("2025-06-01").isoformat() == "2025-06-01"

    @pytest.mark.parametrize("value", ["2025-02-30", "06/01/2025", "", "tomorrow"])
    def test_invalid(self, value):
        with pytest.raises(InvalidRequest):
            parse_date(value)


class TestNormalize:
    def test_one_hour_slot_in_timezone(self):
        slot = normalize("2025-06-01", "10:00 AM", IST)
        assert slot.start == datetime(2025, 6, 1, 10, 0, tzinfo=IST)
        assert slot.end - slot.start == timedelta(hours=1)
        assert slot.start.utcoffset() == timedelta(hours=5, minutes=30)

    def test_custom_duration(self):
        slot = normalize("2025-06-01", "10:00 AM", IST, duration_minutes=30)
        assert slot.end == datetime(2025, 6, 1, 10, 30, tzinfo=IST)

    def test_late_evening_slot_crosses_midnight(self):
        slot = normalize("2025-06-01", "11:30 PM", IST)
        assert slot.end == datetime(2025, 6, 2, 0, 30, tzinfo=IST)

    def test_malformed_time_is_invalid_request(self):
        with pytest.raises(InvalidRequest):
            normalize("2025-06-01", "25:00 PM", IST)


class TestDayWindow:
    def test_covers_whole_day(self):
        start, end = day_window("2025-06-01", IST)
        assert start == datetime(2025, 6, 1, 0, 0, 0, tzinfo=IST)
        assert end == datetime(2025, 6, 1, 23, 59, 59, tzinfo=IST)
