"""
Helpers for reading and writing the nested Schedule mapping.
"""

import copy
from dataclasses import replace
from datetime import date
from typing import Dict, Iterator, Optional, Tuple

from .dates import week_dates, week_id, weekday_index
from .models import Schedule, ShiftAssignment, ShiftSlot
from .timeutils import order_pair, parse_time

SlotKey = Tuple[date, ShiftSlot]


def iter_slots(
    schedule: Schedule,
) -> Iterator[Tuple[date, int, ShiftSlot, ShiftAssignment]]:
    """
    Flatten a schedule to (date, day_index, slot, assignment) tuples.

    Weeks are expanded to their seven dates; slots are yielded morning
    before evening.

    Raises:
        InvalidDate: If a week key is malformed
    """
    for week in schedule:
        days = schedule[week]
        for day_date in week_dates(week):
            slots = days.get(weekday_index(day_date)) or {}
            for slot in ShiftSlot:
                assignment = slots.get(slot)
                if assignment is not None:
                    yield day_date, weekday_index(day_date), slot, assignment


def slot_map(schedule: Schedule) -> Dict[SlotKey, ShiftAssignment]:
    """Index a schedule by (date, slot)."""
    return {(d, slot): a for d, _, slot, a in iter_slots(schedule)}


def get_assignment(
    schedule: Schedule, day: date, slot: ShiftSlot
) -> Optional[ShiftAssignment]:
    days = schedule.get(week_id(day), {})
    return days.get(weekday_index(day), {}).get(slot)


def set_assignment(
    schedule: Schedule, day: date, slot: ShiftSlot, assignment: ShiftAssignment
) -> Optional[ShiftAssignment]:
    """
    Write an assignment in place, creating week/day maps as needed.

    Returns:
        The assignment previously held by the slot, if any
    """
    days = schedule.setdefault(week_id(day), {})
    slots = days.setdefault(weekday_index(day), {})
    previous = slots.get(slot)
    slots[slot] = assignment
    return previous


def copy_schedule(schedule: Schedule) -> Schedule:
    """Fully independent copy of a schedule."""
    return copy.deepcopy(schedule)


def restrict_to_employee(schedule: Schedule, employee_id: str) -> Schedule:
    """
    Project a schedule onto the slots held by one employee.

    Reversed start/end pairs are re-ordered on the way out, since stored
    data may carry the same column-order mistakes as extracted data.
    """
    projected: Schedule = {}
    for day, _, slot, assignment in iter_slots(schedule):
        if assignment.employee_id != employee_id:
            continue
        start, end = order_pair(parse_time(assignment.start), parse_time(assignment.end))
        set_assignment(projected, day, slot, replace(assignment, start=start, end=end))
    return projected
