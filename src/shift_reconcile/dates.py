"""
Calendar helpers: ISO dates, Sunday-based weeks and weekday indices.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Any, List

from .errors import InvalidDate, InvalidDayOfMonth


def parse_iso_date(value: Any) -> date:
    """
    Parse an ISO 8601 calendar date (YYYY-MM-DD).

    Raises:
        InvalidDate: If the value is not a valid ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDate(
            f"Date must be in ISO 8601 format (YYYY-MM-DD), got: {value!r}"
        ) from None


def weekday_index(d: date) -> int:
    """Weekday index with 0=Sunday and 6=Saturday."""
    return (d.weekday() + 1) % 7


def week_start(d: Any) -> date:
    """The Sunday on or before the given date."""
    d = parse_iso_date(d)
    return d - timedelta(days=weekday_index(d))


def week_id(d: Any) -> str:
    """WeekId (ISO date of the week's Sunday) for a date."""
    return week_start(d).isoformat()


def week_dates(week: Any) -> List[date]:
    """
    The seven dates of a week, Sunday first.

    Raises:
        InvalidDate: If the week key does not parse or is not a Sunday
    """
    start = parse_iso_date(week)
    if weekday_index(start) != 0:
        raise InvalidDate(f"Week key {start.isoformat()} is not a Sunday")
    return [start + timedelta(days=k) for k in range(7)]


def make_date(year: int, month: int, day: int) -> date:
    """
    Build a date from extracted day/month/year values.

    Raises:
        InvalidDayOfMonth: If the day does not exist in that month
        InvalidDate: If the month or year is out of range
    """
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise InvalidDate(f"Invalid month/year: {month}/{year}")
    days_in_month = calendar.monthrange(year, month)[1]
    if not 1 <= day <= days_in_month:
        raise InvalidDayOfMonth(
            f"Day {day} is out of range for {year}-{month:02d} "
            f"(1-{days_in_month})"
        )
    return date(year, month, day)
