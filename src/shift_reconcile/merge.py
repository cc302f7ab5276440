"""
Selective merge-import of computed differences into a schedule.
"""

from typing import Iterable, List

from .models import DiffType, DifferenceRecord, MergeResult, Schedule
from .schedule import copy_schedule, set_assignment

APPLICABLE_TYPES = (DiffType.ADDED, DiffType.CHANGED)


class MergeApplier:
    """Applies user-selected ADDED/CHANGED differences onto a copy of a schedule."""

    def apply(
        self,
        base: Schedule,
        differences: Iterable[DifferenceRecord],
        selected_ids: Iterable[str],
    ) -> MergeResult:
        """
        Write the external side of each selected difference into a copy of base.

        REMOVED differences are never applied: deleting authoritative data
        takes an explicit separate action. Selected REMOVED ids are reported
        in skipped_ids.

        Args:
            base: Authoritative schedule (left untouched)
            differences: Records from DiffEngine.compare
            selected_ids: Ids chosen by the user

        Returns:
            MergeResult with the updated copy and the number of slots written
        """
        selected = set(selected_ids)
        updated = copy_schedule(base)
        applied = 0
        skipped: List[str] = []

        for record in differences:
            if record.id not in selected:
                continue
            if record.type not in APPLICABLE_TYPES or record.external is None:
                skipped.append(record.id)
                continue
            set_assignment(updated, record.date, record.shift_type, record.external)
            applied += 1

        return MergeResult(updated=updated, applied_count=applied, skipped_ids=skipped)
