"""
Build a normalized schedule from raw extracted shift entries.
"""

from typing import Any, Dict, Iterable, Optional

from .dates import make_date
from .errors import InvalidDayOfMonth
from .models import BuildResult, ReconcileConfig, Schedule, ShiftAssignment, SlotCollision
from .schedule import set_assignment
from .timeutils import classify, order_pair, parse_time

# Extraction sources disagree on key names; first present wins.
START_KEYS = ("start", "entryTime")
END_KEYS = ("end", "exitTime")


class ShiftRecordBuilder:
    """Converts day/start/end entries from an extraction source into a Schedule."""

    def __init__(self, config: ReconcileConfig | None = None):
        self.config = config or ReconcileConfig()

    def build(
        self,
        raw_entries: Iterable[Dict[str, Any]],
        month: int,
        year: int,
        employee_id: str,
    ) -> Schedule:
        """
        Build a schedule for one employee from raw entries.

        Args:
            raw_entries: Entries shaped like {"day": 5, "start": "07:00", "end": "16:00"}
            month: Month the entries belong to (1-12)
            year: Four-digit year
            employee_id: Employee every entry is attributed to

        Returns:
            Schedule holding one assignment per classified slot

        Raises:
            InvalidDayOfMonth: If an entry's day does not exist in the month
            InvalidTimeFormat: If an entry's time is malformed
        """
        return self.build_report(raw_entries, month, year, employee_id).schedule

    def build_report(
        self,
        raw_entries: Iterable[Dict[str, Any]],
        month: int,
        year: int,
        employee_id: str,
    ) -> BuildResult:
        """Like build(), also returning slot collisions and the skipped-entry count."""
        result = BuildResult(schedule={})

        for entry in raw_entries or []:
            if not isinstance(entry, dict):
                result.skipped += 1
                continue

            day = entry.get("day")
            raw_start = _first_present(entry, START_KEYS)
            raw_end = _first_present(entry, END_KEYS)
            if _missing(day) or raw_start is None or raw_end is None:
                result.skipped += 1
                continue

            shift_date = make_date(year, month, _day_number(day))
            start, end = order_pair(parse_time(raw_start), parse_time(raw_end))
            slot = classify(start, self.config.morning_cutoff_hour)

            assignment = ShiftAssignment(employee_id=employee_id, start=start, end=end)
            previous = set_assignment(result.schedule, shift_date, slot, assignment)
            if previous is not None:
                result.collisions.append(
                    SlotCollision(
                        date=shift_date,
                        shift_type=slot,
                        replaced=previous,
                        kept=assignment,
                    )
                )

        return result


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _first_present(entry: Dict[str, Any], keys) -> Optional[Any]:
    for key in keys:
        value = entry.get(key)
        if not _missing(value):
            return value
    return None


def _day_number(day: Any) -> int:
    if isinstance(day, bool):
        raise InvalidDayOfMonth(f"Day of month must be a number, got: {day!r}")
    if isinstance(day, int):
        return day
    if isinstance(day, float):
        # JSON decoders may hand back 8.0 for a day
        if day.is_integer():
            return int(day)
        raise InvalidDayOfMonth(f"Day of month must be a whole number, got: {day!r}")
    try:
        return int(str(day).strip())
    except ValueError:
        raise InvalidDayOfMonth(f"Day of month must be a number, got: {day!r}") from None
