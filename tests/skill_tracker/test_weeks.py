"""Tests for week bucketing and timestamp parsing."""

from datetime import date, datetime, timedelta, timezone

import pytest

from skill_tracker.services.weeks import (
    parse_timestamp,
    to_naive_utc,
    utcnow,
    week_bounds,
    week_key,
    week_start,
)


class TestWeekStart:
    """Tests for the Sunday week bucket."""

    @pytest.mark.parametrize(
        "value",
        [
            datetime(2024, 5, 12, 0, 0),
            datetime(2024, 5, 15, 13, 30),
            datetime(2024, 5, 18, 23, 59, 59),
            date(2024, 5, 14),
        ],
    )
    def test_days_of_one_week_share_bucket(self, value):
        """Every day from Sunday to Saturday maps to the same Sunday."""
        assert week_start(value) == date(2024, 5, 12)

    def test_next_sunday_starts_new_bucket(self):
        assert week_start(datetime(2024, 5, 19, 0, 0)) == date(2024, 5, 19)

    def test_idempotent(self):
        once = week_start(datetime(2024, 5, 15, 8))
        assert week_start(once) == once

    def test_aware_datetime_converted_to_utc(self):
        """Sunday 01:00 at UTC+5 is still Saturday in UTC."""
        value = datetime(2024, 5, 12, 1, 0, tzinfo=timezone(timedelta(hours=5)))
        assert week_start(value) == date(2024, 5, 5)

    def test_week_key_is_iso_date(self):
        assert week_key(datetime(2024, 5, 15)) == "2024-05-12"


class TestWeekBounds:
    """Tests for the half-open week span."""

    def test_bounds(self):
        start, end = week_bounds(datetime(2024, 5, 15, 9))
        assert start == datetime(2024, 5, 12)
        assert end == datetime(2024, 5, 19)

    def test_to_naive_utc_leaves_naive_untouched(self):
        value = datetime(2024, 5, 15, 9)
        assert to_naive_utc(value) is value

    def test_utcnow_is_naive(self):
        assert utcnow().tzinfo is None


class TestParseTimestamp:
    """Tests for loosely typed date parsing."""

    def test_iso_date(self):
        assert parse_timestamp("2024-05-15") == datetime(2024, 5, 15)

    def test_iso_with_z_suffix(self):
        assert parse_timestamp("2024-05-15T10:00:00Z") == datetime(2024, 5, 15, 10, 0)

    def test_us_format(self):
        assert parse_timestamp("05/15/2024") == datetime(2024, 5, 15)

    def test_excel_serial(self):
        assert parse_timestamp(45427) == datetime(2024, 5, 15)

    def test_date_object(self):
        assert parse_timestamp(date(2024, 5, 15)) == datetime(2024, 5, 15)

    def test_aware_datetime(self):
        value = datetime(2024, 5, 15, 12, tzinfo=timezone(timedelta(hours=2)))
        assert parse_timestamp(value) == datetime(2024, 5, 15, 10)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", True, 0, -3])
    def test_unparseable_returns_none(self, value):
        assert parse_timestamp(value) is None
