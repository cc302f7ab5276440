"""
Slot-by-slot comparison of an authoritative schedule against an external one.
"""

from typing import List

from .dates import weekday_index
from .models import (
    DiffType,
    DifferenceRecord,
    ReconcileConfig,
    Schedule,
    ShiftAssignment,
    ShiftSlot,
)
from .schedule import slot_map
from .timeutils import same_minute

_SLOT_ORDER = {slot: i for i, slot in enumerate(ShiftSlot)}


def difference_id(day, slot: ShiftSlot) -> str:
    """Stable identifier for the difference at a (date, slot) position."""
    return f"{day.isoformat()}-{slot.value}"


class DiffEngine:
    """Computes classified differences between two schedules."""

    def __init__(self, config: ReconcileConfig | None = None):
        self.config = config or ReconcileConfig()

    def compare(
        self, authoritative: Schedule, external: Schedule
    ) -> List[DifferenceRecord]:
        """
        Compare the two schedules over the union of their dates.

        Slots only in the authoritative schedule are REMOVED, slots only in
        the external schedule are ADDED, and slots in both whose start or end
        differ at minute resolution are CHANGED. Policy-excluded slots are
        never reported.

        Returns:
            Differences ordered by date, morning before evening

        Raises:
            InvalidDate: If either schedule has a malformed week key
        """
        # Both sides are fully expanded before any record is produced.
        auth_slots = slot_map(authoritative)
        ext_slots = slot_map(external)

        keys = sorted(
            set(auth_slots) | set(ext_slots),
            key=lambda k: (k[0], _SLOT_ORDER[k[1]]),
        )

        differences: List[DifferenceRecord] = []
        for day, slot in keys:
            day_idx = weekday_index(day)
            if self.config.is_excluded(day_idx, slot):
                continue

            auth = auth_slots.get((day, slot))
            ext = ext_slots.get((day, slot))

            if auth is not None and ext is None:
                diff_type = DiffType.REMOVED
            elif auth is None and ext is not None:
                diff_type = DiffType.ADDED
            elif self._differs(auth, ext):
                diff_type = DiffType.CHANGED
            else:
                continue

            differences.append(
                DifferenceRecord(
                    id=difference_id(day, slot),
                    type=diff_type,
                    date=day,
                    day_index=day_idx,
                    shift_type=slot,
                    authoritative=auth,
                    external=ext,
                )
            )

        return differences

    def _differs(self, auth: ShiftAssignment, ext: ShiftAssignment) -> bool:
        if not same_minute(auth.start, ext.start) or not same_minute(auth.end, ext.end):
            return True
        return self.config.compare_employee and auth.employee_id != ext.employee_id
