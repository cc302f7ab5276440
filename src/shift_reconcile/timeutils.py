"""
Time-of-day normalization for shift boundaries.
"""

import re
from datetime import time
from typing import Any, Tuple

from .errors import InvalidTimeFormat
from .models import ShiftSlot

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

DEFAULT_MORNING_CUTOFF_HOUR = 12


def parse_time(raw: Any) -> time:
    """
    Parse an "HH:MM" or "HH:MM:SS" string into a time.

    Args:
        raw: Time string, or an existing time object (returned unchanged)

    Returns:
        The parsed time

    Raises:
        InvalidTimeFormat: If the value is not a valid 24-hour time
    """
    if isinstance(raw, time):
        return raw
    if not isinstance(raw, str):
        raise InvalidTimeFormat(f"Expected an HH:MM[:SS] string, got: {raw!r}")

    match = _TIME_RE.match(raw.strip())
    if not match:
        raise InvalidTimeFormat(f"Time must be in HH:MM or HH:MM:SS format, got: {raw!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3)) if match.group(3) else 0
    if hour > 23 or minute > 59 or second > 59:
        raise InvalidTimeFormat(f"Not a valid 24-hour time: {raw!r}")
    return time(hour, minute, second)


def format_time(value: time) -> str:
    """Format a time as HH:MM:SS."""
    return value.strftime("%H:%M:%S")


def order_pair(a: time, b: time) -> Tuple[time, time]:
    """Return (start, end) with start <= end, swapping reversed pairs."""
    if b < a:
        return b, a
    return a, b


def classify(start: time, cutoff_hour: int = DEFAULT_MORNING_CUTOFF_HOUR) -> ShiftSlot:
    """Bucket a shift into a slot by the hour it starts."""
    return ShiftSlot.MORNING if start.hour < cutoff_hour else ShiftSlot.EVENING


def minutes_of_day(value: Any) -> int:
    """Minutes after midnight, ignoring seconds."""
    parsed = parse_time(value)
    return parsed.hour * 60 + parsed.minute


def same_minute(a: Any, b: Any) -> bool:
    """True if both times share hour and minute."""
    return minutes_of_day(a) == minutes_of_day(b)


def duration_hours(start: Any, end: Any) -> float:
    """
    Duration of a shift in decimal hours at minute precision.

    Unparseable boundaries yield 0.0 instead of raising, so a single
    malformed historical shift does not break a whole report.
    """
    try:
        return (minutes_of_day(end) - minutes_of_day(start)) / 60.0
    except InvalidTimeFormat:
        return 0.0
