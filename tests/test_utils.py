"""Tests for numeric coercion and week arithmetic."""
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from zoneboard.utils_num import parse_or_zero, round1, round_half_up
from zoneboard.utils_time import as_utc, parse_iso, week_key, week_start, week_window


class TestParseOrZero:
    @pytest.mark.parametrize("value,expected", [
        (12.5, 12.5),
        (3, 3.0),
        (Decimal("7.25"), 7.25),
        ("42.1", 42.1),
        (" 8 ", 8.0),
    ])
    def test_numeric_values(self, value, expected):
        assert parse_or_zero(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "12pts", "nan", "inf", True, [], {}])
    def test_garbage_is_zero(self, value):
        assert parse_or_zero(value) == 0.0

    @pytest.mark.parametrize("value", [Decimal("sNaN"), Decimal("NaN"), Decimal("Infinity")])
    def test_special_decimals_are_zero(self, value):
        assert parse_or_zero(value) == 0.0


class TestRounding:
    @pytest.mark.parametrize("value,expected", [(0.25, 0.3), (2.45, 2.5), (1.04, 1.0), (-0.25, -0.2)])
    def test_round1_half_up(self, value, expected):
        assert round1(value) == expected

    def test_whole_numbers(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-2.5) == -2


class TestWeeks:
    def test_week_starts_on_sunday(self):
        # 2026-01-14 is a Wednesday
        assert week_start(date(2026, 1, 14)) == date(2026, 1, 11)

    def test_sunday_is_its_own_week_start(self):
        assert week_start(date(2026, 1, 11)) == date(2026, 1, 11)

    def test_saturday_belongs_to_previous_sunday(self):
        assert week_start(date(2026, 1, 17)) == date(2026, 1, 11)

    def test_same_week_same_key(self):
        sunday = datetime(2026, 1, 11, 6, 0, tzinfo=timezone.utc)
        saturday = datetime(2026, 1, 17, 22, 0, tzinfo=timezone.utc)
        assert week_key(sunday) == week_key(saturday) == "2026-01-11"

    def test_week_window_spans_seven_days(self):
        start, end = week_window(datetime(2026, 2, 4, 12, tzinfo=timezone.utc))
        assert start == datetime(2026, 2, 1, tzinfo=timezone.utc)
        assert (end - start).days == 7


class TestTimestamps:
    def test_naive_is_treated_as_utc(self):
        assert as_utc(datetime(2026, 1, 1, 12)).tzinfo == timezone.utc

    def test_parse_strava_timestamp(self):
        assert parse_iso("2026-01-05T06:30:00Z") == datetime(2026, 1, 5, 6, 30, tzinfo=timezone.utc)
