"""Tests for calendar helpers."""

import pytest
from datetime import date, timedelta

from shift_reconcile.dates import (
    make_date,
    parse_iso_date,
    week_dates,
    week_id,
    weekday_index,
)
from shift_reconcile.errors import InvalidDate, InvalidDayOfMonth


class TestWeekId:
    """Tests for Sunday-based week identifiers."""

    @pytest.mark.parametrize(
        "day,expected",
        [
            ("2024-01-07", "2024-01-07"),  # Sunday
            ("2024-01-08", "2024-01-07"),  # Monday
            ("2024-01-13", "2024-01-07"),  # Saturday
            ("2024-01-14", "2024-01-14"),  # next Sunday
            ("2024-03-01", "2024-02-25"),  # across a leap-year month end
            ("2025-01-01", "2024-12-29"),  # across a year end
        ],
    )
    def test_week_id(self, day: str, expected: str):
        assert week_id(day) == expected

    def test_week_id_is_always_a_sunday_and_idempotent(self):
        """For every date in a year, the week id is a Sunday and a fixed point."""
        d = date(2024, 1, 1)
        while d.year == 2024:
            wid = week_id(d)
            assert weekday_index(parse_iso_date(wid)) == 0
            assert week_id(wid) == wid
            assert parse_iso_date(wid) <= d < parse_iso_date(wid) + timedelta(days=7)
            d += timedelta(days=1)

    def test_week_id_rejects_malformed_date(self):
        with pytest.raises(InvalidDate):
            week_id("2024-13-01")


class TestWeekdayIndex:
    """Tests for the Sunday-first weekday index."""

    @pytest.mark.parametrize(
        "d,expected",
        [
            (date(2024, 1, 7), 0),  # Sunday
            (date(2024, 1, 8), 1),  # Monday
            (date(2024, 1, 12), 5),  # Friday
            (date(2024, 1, 13), 6),  # Saturday
        ],
    )
    def test_weekday_index(self, d: date, expected: int):
        assert weekday_index(d) == expected


class TestWeekDates:
    """Tests for expanding a week key into its days."""

    def test_seven_consecutive_days_from_sunday(self):
        dates = week_dates("2024-01-07")
        assert len(dates) == 7
        assert dates[0] == date(2024, 1, 7)
        assert dates[-1] == date(2024, 1, 13)

    def test_non_sunday_week_key_raises(self):
        with pytest.raises(InvalidDate, match="not a Sunday"):
            week_dates("2024-01-08")

    @pytest.mark.parametrize("bad", ["not-a-date", "2024/01/07", "", "07-01-2024"])
    def test_malformed_week_key_raises(self, bad: str):
        with pytest.raises(InvalidDate, match="ISO 8601"):
            week_dates(bad)


class TestMakeDate:
    """Tests for building dates from extracted day numbers."""

    def test_valid_day(self):
        assert make_date(2024, 2, 29) == date(2024, 2, 29)

    @pytest.mark.parametrize(
        "year,month,day",
        [(2023, 2, 29), (2024, 4, 31), (2024, 1, 0), (2024, 1, 32)],
    )
    def test_day_out_of_range_raises(self, year: int, month: int, day: int):
        with pytest.raises(InvalidDayOfMonth, match="out of range"):
            make_date(year, month, day)

    def test_invalid_month_raises_invalid_date(self):
        with pytest.raises(InvalidDate):
            make_date(2024, 13, 1)
