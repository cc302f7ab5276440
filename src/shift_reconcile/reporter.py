"""
Reporting and output formatting for reconciliation results.
"""

import pandas as pd
from typing import Dict, List

from .models import (
    DiffType,
    DifferenceRecord,
    MonthlySummary,
    ReconcileConfig,
    SlotCollision,
)


class ReconciliationReporter:
    """Formats and displays comparison results and monthly summaries."""

    def __init__(self, config: ReconcileConfig | None = None):
        self.config = config or ReconcileConfig()

    def _print_title(self, title: str) -> None:
        print("=" * 80)
        print(title)
        print("=" * 80)

    def print_differences(self, differences: List[DifferenceRecord]) -> None:
        """Print the difference table with per-type counts."""
        self._print_title("SCHEDULE DIFFERENCES")

        if not differences:
            print("\n✓ Schedules match, no differences found")
            print()
            return

        counts = {t: 0 for t in DiffType}
        for diff in differences:
            counts[diff.type] += 1
        print(
            f"\nAdded: {counts[DiffType.ADDED]}  "
            f"Removed: {counts[DiffType.REMOVED]}  "
            f"Changed: {counts[DiffType.CHANGED]}\n"
        )

        print(self.differences_frame(differences).to_string())
        print()

    def differences_frame(self, differences: List[DifferenceRecord]) -> pd.DataFrame:
        """Differences as a DataFrame indexed by difference id."""
        data = [
            {
                "Id": diff.id,
                "Type": diff.type.value,
                "Date": diff.date.isoformat(),
                "Day": diff.day_name(self.config.day_names),
                "Shift": diff.shift_type.value,
                "Authoritative": diff.authoritative.describe() if diff.authoritative else "-",
                "External": diff.external.describe() if diff.external else "-",
            }
            for diff in differences
        ]
        columns = ["Id", "Type", "Date", "Day", "Shift", "Authoritative", "External"]
        return pd.DataFrame(data, columns=columns).set_index("Id")

    def print_collisions(self, collisions: List[SlotCollision]) -> None:
        """Warn about extracted entries that overwrote each other."""
        if not collisions:
            return

        self._print_title("SLOT COLLISIONS")
        for collision in collisions:
            print(
                f"  Warning: {collision.date.isoformat()} {collision.shift_type.value}: "
                f"{collision.replaced.describe()} replaced by {collision.kept.describe()}"
            )
        print()

    def print_monthly_summary(
        self, summaries: Dict[str, MonthlySummary], employee_id: str
    ) -> None:
        """Print per-month shift counts and hours for an employee."""
        self._print_title(f"MONTHLY SUMMARY: {employee_id}")

        frame = self.monthly_frame(summaries)
        if frame.empty:
            print(f"\n  No data found for {employee_id}")
            print()
            return

        pd.options.display.float_format = "{:.2f}".format
        print(frame.to_string())
        print(f"\nTotal hours: {frame['Total Hours'].sum():.2f}")
        print()

    def monthly_frame(self, summaries: Dict[str, MonthlySummary]) -> pd.DataFrame:
        """Monthly summaries as a DataFrame indexed by YYYY-MM."""
        data = [
            {
                "Month": month,
                "Morning": summary.morning,
                "Evening": summary.evening,
                "Total Shifts": summary.total_shifts,
                "Total Hours": summary.total_hours,
            }
            for month, summary in sorted(summaries.items())
        ]
        columns = ["Month", "Morning", "Evening", "Total Shifts", "Total Hours"]
        return pd.DataFrame(data, columns=columns).set_index("Month")
