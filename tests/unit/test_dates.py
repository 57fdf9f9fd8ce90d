"""
Unit Tests for Date Tokens and Ranges
=====================================
"""

from datetime import datetime, timezone

import pytest

from common.dates import get_date_range, get_dates_from_range, normalize_date
from common.errors import InvalidDateFormat, InvalidDateRange

NOW = datetime(2024, 3, 5, 10, 30, 0, tzinfo=timezone.utc)


class TestNormalizeDate:
    """Tests for normalize_date."""

    def test_today(self):
        assert normalize_date("today", NOW) == "2024-03-05"

    def test_yesterday(self):
        assert normalize_date("yesterday", NOW) == "2024-03-04"

    def test_yesterday_across_month_boundary(self):
        now = datetime(2024, 3, 1, 0, 0, 1, tzinfo=timezone.utc)
        assert normalize_date("yesterday", now) == "2024-02-29"

    def test_today_zero_pads_day(self):
        now = datetime(2024, 1, 7, tzinfo=timezone.utc)
        assert normalize_date("today", now) == "2024-01-07"

    def test_yesterday_stable_within_day(self):
        later = NOW.replace(hour=23, minute=59, second=59)
        assert normalize_date("yesterday", NOW) == normalize_date("yesterday", later)

    def test_yesterday_real_clock(self):
        first = normalize_date("yesterday")
        second = normalize_date("yesterday")
        assert first == second
        assert len(first) == 10

    @pytest.mark.parametrize("token", ["2024-01-01", "2024-01-01T12:30:00Z"])
    def test_explicit_dates_pass_through(self, token):
        assert normalize_date(token) == token

    @pytest.mark.parametrize("token", ["not-a-date", "2024-1-1", "01.01.2024", "", "2024-01-01T12:30"])
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidDateFormat):
            normalize_date(token)


class TestGetDatesFromRange:
    """Tests for get_dates_from_range."""

    def test_single_day(self):
        assert get_dates_from_range("2024-01-01", "2024-01-01") == ["2024-01-01"]

    def test_inclusive_ascending(self):
        assert get_dates_from_range("2024-02-27", "2024-03-02") == [
            "2024-02-27",
            "2024-02-28",
            "2024-02-29",
            "2024-03-01",
            "2024-03-02",
        ]

    def test_length_matches_day_difference(self):
        days = get_dates_from_range("2023-12-01", "2024-01-31")
        assert len(days) == 62
        assert days[0] == "2023-12-01"
        assert days[-1] == "2024-01-31"

    def test_relative_tokens(self):
        assert get_dates_from_range("yesterday", "today", NOW) == ["2024-03-04", "2024-03-05"]

    def test_timestamps_floor_partial_days(self):
        days = get_dates_from_range("2024-01-01T12:00:00Z", "2024-01-03T06:00:00Z")
        assert days == ["2024-01-01", "2024-01-02"]

    def test_reversed_range_is_an_error(self):
        with pytest.raises(InvalidDateRange):
            get_dates_from_range("2024-01-05", "2024-01-01")

    def test_invalid_endpoint(self):
        with pytest.raises(InvalidDateFormat):
            get_dates_from_range("2024-01-01", "tomorrow")

    def test_impossible_calendar_date(self):
        with pytest.raises(InvalidDateFormat):
            get_dates_from_range("2024-02-30", "2024-03-01")


class TestGetDateRange:
    """Tests for get_date_range."""

    def test_last_seven_days(self):
        assert get_date_range(7, NOW) == ("2024-02-27", "2024-03-04")

    def test_range_covers_n_days(self):
        start, end = get_date_range(7, NOW)
        assert len(get_dates_from_range(start, end)) == 7
