"""
Monthly per-employee projection of a schedule, used for reporting.
"""

from typing import Dict

from .dates import week_dates, weekday_index
from .models import MonthlySummary, Schedule, ShiftDetail, ShiftSlot
from .timeutils import duration_hours


class MonthlyAggregator:
    """Builds read-only monthly shift summaries for one employee."""

    def aggregate(self, schedule: Schedule, employee_id: str) -> Dict[str, MonthlySummary]:
        """
        Count shifts and hours per YYYY-MM for an employee.

        Every month touched by a week of the schedule gets an entry, even if
        the employee has no shift in it. A shift whose boundaries cannot be
        parsed counts with a duration of 0.

        Returns:
            Summaries keyed by month, in ascending month order
        """
        summaries: Dict[str, MonthlySummary] = {}

        for week in schedule:
            days = schedule[week]
            for day_date in week_dates(week):
                month_key = day_date.strftime("%Y-%m")
                summary = summaries.setdefault(month_key, MonthlySummary(month=month_key))

                day_idx = weekday_index(day_date)
                slots = days.get(day_idx) or {}
                for slot in ShiftSlot:
                    assignment = slots.get(slot)
                    if assignment is None or assignment.employee_id != employee_id:
                        continue
                    summary.add(
                        ShiftDetail(
                            date=day_date,
                            day_index=day_idx,
                            shift_type=slot,
                            start=assignment.start,
                            end=assignment.end,
                            duration=duration_hours(assignment.start, assignment.end),
                        )
                    )

        for summary in summaries.values():
            summary.shifts.sort(key=lambda s: (s.date, s.shift_type is ShiftSlot.EVENING))

        return {key: summaries[key] for key in sorted(summaries)}
