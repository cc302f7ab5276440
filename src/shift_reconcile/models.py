"""
Data models for the schedule reconciliation engine.
"""

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

UNASSIGNED = "none"

DEFAULT_DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

FRIDAY = 5
SATURDAY = 6


class ShiftSlot(str, Enum):
    """One of the two addressable shifts of a working day."""

    MORNING = "morning"
    EVENING = "evening"


class DiffType(str, Enum):
    """Classification of a difference between the two schedules."""

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class ShiftAssignment:
    """A single shift held by an employee (or the explicit unassigned marker)."""

    employee_id: str
    start: time
    end: time

    @property
    def is_unassigned(self) -> bool:
        return self.employee_id == UNASSIGNED

    def describe(self) -> str:
        """Short "employee (HH:MM-HH:MM)" label used in reports and exports."""
        return f"{self.employee_id} ({_hhmm(self.start)}-{_hhmm(self.end)})"

    def to_dict(self) -> Dict[str, str]:
        return {
            "employee": self.employee_id,
            "start": _hhmmss(self.start),
            "end": _hhmmss(self.end),
        }


# WeekId -> weekday index (0=Sun) -> slot -> assignment
Schedule = Dict[str, Dict[int, Dict[ShiftSlot, ShiftAssignment]]]


@dataclass(frozen=True)
class DifferenceRecord:
    """One classified discrepancy between the authoritative and external schedules."""

    id: str
    type: DiffType
    date: date
    day_index: int  # 0=Sun, 6=Sat
    shift_type: ShiftSlot
    authoritative: Optional[ShiftAssignment] = None
    external: Optional[ShiftAssignment] = None

    def day_name(self, day_names: Sequence[str] = DEFAULT_DAY_NAMES) -> str:
        """Locale day name for presentation."""
        return day_names[self.day_index]

    def to_dict(self, day_names: Sequence[str] = DEFAULT_DAY_NAMES) -> Dict[str, Any]:
        """Transport shape handed to a hosting UI."""
        return {
            "id": self.id,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "dayName": self.day_name(day_names),
            "shiftType": self.shift_type.value,
            "authoritative": (
                self.authoritative.to_dict() if self.authoritative else None
            ),
            "external": self.external.to_dict() if self.external else None,
        }


@dataclass(frozen=True)
class SlotCollision:
    """Two extracted entries classified into the same slot; the later one won."""

    date: date
    shift_type: ShiftSlot
    replaced: ShiftAssignment
    kept: ShiftAssignment


@dataclass
class BuildResult:
    """Outcome of building a schedule from raw extraction entries."""

    schedule: Schedule
    collisions: List[SlotCollision] = field(default_factory=list)
    skipped: int = 0


@dataclass
class MergeResult:
    """Outcome of applying selected differences onto a schedule."""

    updated: Schedule
    applied_count: int
    skipped_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ShiftDetail:
    """A shift contributing to a monthly summary."""

    date: date
    day_index: int
    shift_type: ShiftSlot
    start: time
    end: time
    duration: float


@dataclass
class MonthlySummary:
    """Per-month shift counts and hours for one employee."""

    month: str  # YYYY-MM
    morning: int = 0
    evening: int = 0
    total_hours: float = 0.0
    shifts: List[ShiftDetail] = field(default_factory=list)

    @property
    def total_shifts(self) -> int:
        return self.morning + self.evening

    def add(self, detail: ShiftDetail) -> None:
        if detail.shift_type is ShiftSlot.MORNING:
            self.morning += 1
        else:
            self.evening += 1
        self.total_hours += detail.duration
        self.shifts.append(detail)


def _default_excluded_slots() -> Dict[int, FrozenSet[ShiftSlot]]:
    return {
        FRIDAY: frozenset({ShiftSlot.EVENING}),
        SATURDAY: frozenset({ShiftSlot.MORNING, ShiftSlot.EVENING}),
    }


@dataclass
class ReconcileConfig:
    """Policy and presentation settings for reconciliation."""

    day_names: Tuple[str, ...] = DEFAULT_DAY_NAMES
    morning_cutoff_hour: int = 12
    # day index (0=Sun) -> slots that are never worked
    excluded_slots: Dict[int, FrozenSet[ShiftSlot]] = field(
        default_factory=_default_excluded_slots
    )
    compare_employee: bool = False

    def __post_init__(self):
        if len(self.day_names) != 7:
            raise ValueError(
                f"day_names must list exactly 7 days, got {len(self.day_names)}"
            )
        if not 0 <= self.morning_cutoff_hour <= 23:
            raise ValueError(
                f"Morning cutoff hour must be between 0 and 23, got {self.morning_cutoff_hour}"
            )

    def is_excluded(self, day_index: int, slot: ShiftSlot) -> bool:
        """Check if a slot is a policy non-working slot (Saturday, Friday evening)."""
        return slot in self.excluded_slots.get(day_index, frozenset())

    def day_name(self, day_index: int) -> str:
        return self.day_names[day_index]


def _hhmm(value: Any) -> str:
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return str(value)[:5]


def _hhmmss(value: Any) -> str:
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    return str(value)
