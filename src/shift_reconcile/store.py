"""
Schedule persistence adapters and the JSON wire format.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Protocol

from .config import ConfigLoader
from .dates import parse_iso_date, week_id
from .errors import InvalidTimeFormat, StoreError
from .models import UNASSIGNED, Schedule, ShiftAssignment, ShiftSlot
from .timeutils import order_pair, parse_time

INDEX_TO_DAY_KEY = {index: name for name, index in ConfigLoader.DAY_NAME_TO_INDEX.items()}

# Report header cell, e.g. "לחודש 01/24"
REPORT_MONTH_PATTERN = re.compile(r"לחודש\s*(\d{1,2})\s*/\s*(\d{2,4})")
TIME_CELL_PATTERN = re.compile(r"\d{1,2}:\d{2}")
LEADING_DAY_PATTERN = re.compile(r"\s*(\d{1,2})\b")


class ScheduleStore(Protocol):
    """Source and sink of the authoritative schedule."""

    def get(self) -> Schedule: ...

    def put(self, schedule: Schedule) -> None: ...


class JsonScheduleStore:
    """Keeps the authoritative schedule in a single JSON file."""

    def __init__(self, path: str | Path, strict: bool = True):
        """
        Args:
            path: JSON file holding the schedule (may not exist yet)
            strict: If False, unparseable shift times are kept as raw strings
                instead of raising, for read-only reporting on old data
        """
        self.path = Path(path)
        self.strict = strict

    def get(self) -> Schedule:
        if not self.path.exists():
            return {}
        return schedule_from_dict(_json_load(self.path), strict=self.strict)

    def put(self, schedule: Schedule) -> None:
        _json_dump(self.path, schedule_to_dict(schedule))


def schedule_to_dict(schedule: Schedule) -> Dict[str, Any]:
    """Encode a schedule as {week: {day_name: {slot: {employee, start, end}}}}."""
    payload: Dict[str, Any] = {}
    for week in sorted(schedule):
        days = {}
        for day_index in sorted(schedule[week]):
            slots = {
                slot.value: schedule[week][day_index][slot].to_dict()
                for slot in ShiftSlot
                if slot in schedule[week][day_index]
            }
            if slots:
                days[INDEX_TO_DAY_KEY[day_index]] = slots
        payload[week] = days
    return payload


def schedule_from_dict(payload: Any, strict: bool = True) -> Schedule:
    """
    Decode the JSON shape written by schedule_to_dict.

    Raises:
        StoreError: If the structure is not a week/day/slot mapping
        InvalidDate: If a week key is not an ISO date
        InvalidTimeFormat: If a time is malformed and strict is True
    """
    if not isinstance(payload, dict):
        raise StoreError("Schedule file must contain a JSON object keyed by week")

    schedule: Schedule = {}
    for week, days in payload.items():
        week_start = parse_iso_date(week)
        if week_start.isoformat() != week:
            raise StoreError(f"Week key {week} must be a zero-padded YYYY-MM-DD Sunday")
        week_key = week_id(week_start)
        if week_key != week:
            raise StoreError(f"Week key {week} is not a Sunday (expected {week_key})")
        if not isinstance(days, dict):
            raise StoreError(f"Week {week} must map day names to shifts")

        decoded_days = schedule.setdefault(week, {})
        for day_key, slots in days.items():
            day_index = _day_index(day_key)
            if not isinstance(slots, dict):
                raise StoreError(f"{week}/{day_key} must map shift types to assignments")
            for slot_key, raw in slots.items():
                if raw is None:
                    continue
                try:
                    slot = ShiftSlot(slot_key)
                except ValueError:
                    raise StoreError(f"Unknown shift type '{slot_key}' in {week}/{day_key}") from None
                decoded_days.setdefault(day_index, {})[slot] = _decode_assignment(raw, strict)
    return schedule


def load_entries(path: str | Path) -> Dict[str, Any]:
    """
    Read raw extraction entries from a JSON file.

    Accepts either a bare array of entries or an object with an "entries"
    array and optional "month", "year" and "employee" context. An object
    with a "rows" array instead holds decoded report spreadsheet rows,
    structured with entries_from_rows; its explicit context keys win over
    the month detected in the rows.
    """
    payload = _json_load(Path(path))
    if isinstance(payload, list):
        return {"entries": payload}
    if isinstance(payload, dict) and isinstance(payload.get("entries"), list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("rows"), list):
        structured = entries_from_rows(payload["rows"])
        for key in ("month", "year", "employee"):
            if payload.get(key) is not None:
                structured[key] = payload[key]
        return structured
    raise StoreError(f"{path} must contain a JSON array or an object with 'entries' or 'rows'")


def entries_from_rows(rows: List[Any]) -> Dict[str, Any]:
    """
    Structure decoded report spreadsheet rows into raw entries.

    A row whose first cell is a day of month (1-31) becomes an entry, with
    its first two H:MM cells as start and end. Rows with fewer than two
    times are ignored. Month and year come from the "לחודש MM/YY" header
    cell; a two-digit year means 20YY. When no header is found the result
    has no "month" or "year" key.

    Returns:
        {"month", "year", "entries"} in the shape load_entries returns
    """
    payload: Dict[str, Any] = {"entries": []}
    for row in rows:
        if not isinstance(row, (list, tuple)) or not row:
            continue

        if "month" not in payload:
            context = _report_month(row)
            if context is not None:
                payload["month"], payload["year"] = context

        day = _row_day(row[0])
        if day is None:
            continue
        times = [
            match.group(0)
            for match in (TIME_CELL_PATTERN.search(cell) for cell in row if isinstance(cell, str))
            if match
        ]
        if len(times) >= 2:
            payload["entries"].append({"day": day, "start": times[0], "end": times[1]})
    return payload


def _report_month(row) -> tuple[int, int] | None:
    for cell in row:
        if not isinstance(cell, str):
            continue
        match = REPORT_MONTH_PATTERN.search(cell)
        if match:
            year = int(match.group(2))
            return int(match.group(1)), 2000 + year if year < 100 else year
    return None


def _row_day(cell: Any) -> int | None:
    if isinstance(cell, bool):
        return None
    if isinstance(cell, (int, float)):
        day = int(cell) if float(cell).is_integer() else None
    else:
        match = LEADING_DAY_PATTERN.match(str(cell))
        day = int(match.group(1)) if match else None
    return day if day is not None and 1 <= day <= 31 else None


def _decode_assignment(raw: Any, strict: bool) -> ShiftAssignment:
    if not isinstance(raw, dict):
        raise StoreError(f"Assignment must be an object, got: {raw!r}")
    employee = raw.get("employee", raw.get("employee_id")) or UNASSIGNED
    start, end = raw.get("start"), raw.get("end")
    try:
        start, end = order_pair(parse_time(start), parse_time(end))
    except InvalidTimeFormat:
        if strict:
            raise
    return ShiftAssignment(employee_id=str(employee), start=start, end=end)


def _day_index(day_key: str) -> int:
    key = str(day_key).strip().lower()
    if key in ConfigLoader.DAY_NAME_TO_INDEX:
        return ConfigLoader.DAY_NAME_TO_INDEX[key]
    if key.isdigit() and 0 <= int(key) <= 6:
        return int(key)
    raise StoreError(f"Unknown day key '{day_key}'")


def _json_dump(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, ensure_ascii=False)


def _json_load(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as e:
        raise StoreError(f"{path} is not valid JSON: {e}") from e


def differences_to_json(records: List[Any], day_names) -> List[Dict[str, Any]]:
    return [record.to_dict(day_names) for record in records]
