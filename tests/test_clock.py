"""Tests for civil-time normalization."""

from datetime import date
from zoneinfo import ZoneInfo

import pytest

from courtcal.clock import (
    format_duration,
    local_date,
    local_to_hhmm,
    minutes_to_ampm,
    minutes_to_hhmm,
    strip_offset,
    to_minutes,
    utc_to_local,
)


class TestStripOffset:
    def test_strips_utc_offset(self):
        assert strip_offset("2026-02-21T13:00:00+00:00") == "2026-02-21T13:00:00"

    def test_strips_z_marker(self):
        assert strip_offset("2026-02-21T13:00:00Z") == "2026-02-21T13:00:00"

    def test_strips_compact_and_negative_offsets(self):
        assert strip_offset("2026-02-21T13:00:00-0500") == "2026-02-21T13:00:00"
        assert strip_offset("2026-02-21 13:00:00+00") == "2026-02-21 13:00:00"

    def test_strips_after_fractional_seconds(self):
        assert strip_offset("2026-02-21T13:00:00.000Z") == "2026-02-21T13:00:00.000"

    def test_leaves_plain_local_string(self):
        assert strip_offset("2026-02-21T13:00:00") == "2026-02-21T13:00:00"

    def test_never_eats_day_of_bare_date(self):
        assert strip_offset("2026-02-21") == "2026-02-21"


class TestLocalToHHMM:
    def test_t_delimiter(self):
        assert local_to_hhmm("2026-02-21T13:00:00") == "13:00"

    def test_space_delimiter(self):
        assert local_to_hhmm("2026-02-21 09:45:00") == "09:45"

    def test_digits_used_verbatim_even_with_offset(self):
        """A spurious offset must not shift the clock digits."""
        assert local_to_hhmm("2026-02-21T13:00:00+00:00") == "13:00"

    def test_no_clock_defaults_to_midnight(self):
        assert local_to_hhmm("2026-02-21") == "00:00"
        assert local_to_hhmm("garbage") == "00:00"


class TestLocalDate:
    def test_leading_date(self):
        assert local_date("2026-02-21T13:00:00") == date(2026, 2, 21)

    def test_missing_date(self):
        assert local_date("13:00") is None

    def test_impossible_date(self):
        assert local_date("2026-02-30T13:00:00") is None


class TestUtcToLocal:
    def test_winter_offset(self):
        # EST is UTC-5
        assert utc_to_local("2026-02-21T18:00:00Z") == (date(2026, 2, 21), "13:00")

    def test_summer_offset(self):
        # EDT is UTC-4
        assert utc_to_local("2026-07-04T18:00:00+00:00") == (date(2026, 7, 4), "14:00")

    def test_evening_utc_falls_on_previous_local_day(self):
        assert utc_to_local("2026-02-22T02:30:00Z") == (date(2026, 2, 21), "21:30")

    def test_naive_value_is_utc(self):
        assert utc_to_local("2026-02-21T18:00:00") == (date(2026, 2, 21), "13:00")

    def test_dst_clocks_forward_before_transition(self):
        """06:30Z on 2026-03-08 is 01:30 EST, still before the 2 AM jump."""
        assert utc_to_local("2026-03-08T06:30:00Z") == (date(2026, 3, 8), "01:30")

    def test_dst_clocks_forward_after_transition(self):
        """One hour later the clock has skipped 02:00-03:00: 03:30 EDT."""
        assert utc_to_local("2026-03-08T07:30:00Z") == (date(2026, 3, 8), "03:30")

    def test_other_timezone(self):
        tz = ZoneInfo("America/Chicago")
        assert utc_to_local("2026-02-21T18:00:00Z", tz) == (date(2026, 2, 21), "12:00")

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            utc_to_local("not a timestamp")


class TestToMinutes:
    def test_24_hour(self):
        assert to_minutes("13:30") == 810
        assert to_minutes("00:00") == 0
        assert to_minutes("23:59") == 1439

    def test_12_hour(self):
        assert to_minutes("1:30 PM") == 810
        assert to_minutes("10:00 am") == 600

    def test_midnight_and_noon(self):
        assert to_minutes("12:00 AM") == 0
        assert to_minutes("12:15 PM") == 735

    @pytest.mark.parametrize("text", ["", "13", "25:00", "12:60", "13:00 PM", "noon"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            to_minutes(text)


class TestDisplayHelpers:
    def test_minutes_to_hhmm(self):
        assert minutes_to_hhmm(810) == "13:30"
        assert minutes_to_hhmm(5) == "00:05"

    def test_minutes_to_ampm(self):
        assert minutes_to_ampm(810) == "1:30 PM"
        assert minutes_to_ampm(0) == "12:00 AM"
        assert minutes_to_ampm(720) == "12:00 PM"

    def test_format_duration(self):
        assert format_duration(45) == "45m"
        assert format_duration(60) == "1h"
        assert format_duration(90) == "1h 30m"
