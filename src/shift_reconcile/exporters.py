"""
Export strategies for reconciliation data.

This module implements the Strategy Pattern for exporting comparison
results and monthly summaries. Each exporter encapsulates one CSV layout.
"""

import csv
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from .models import DiffType, DifferenceRecord, MonthlySummary, ReconcileConfig, ShiftAssignment
from .timeutils import format_time

MISSING = "-"


class ExportStrategy(ABC):
    """Abstract base class for export strategies.

    Subclasses implement specific layouts. Files are written as UTF-8 with
    a BOM so spreadsheet tools pick up non-Latin day and employee names.
    """

    encoding = "utf-8-sig"

    def __init__(self, config: ReconcileConfig | None = None):
        """Initialize the export strategy.

        Args:
            config: Supplies locale day names for the Day column
        """
        self.config = config or ReconcileConfig()

    @abstractmethod
    def header(self) -> List[str]:
        """Column names of the CSV file."""

    @abstractmethod
    def rows(self) -> List[List[str]]:
        """Data rows, in output order."""

    def export(self, filepath: str) -> None:
        """Export to the specified CSV file.

        Args:
            filepath: Path to the output file
        """
        with open(filepath, "w", newline="", encoding=self.encoding) as f:
            writer = csv.writer(f)
            writer.writerow(self.header())
            writer.writerows(self.rows())

        print(f"\n✓ Exported to {filepath}")


class DifferencesCSVExporter(ExportStrategy):
    """Exports comparison differences, one row per difference.

    Output format: Type, Date, Day, Shift, Authoritative, External
    Each schedule side is rendered as "employee (HH:MM-HH:MM)" or "-".
    """

    TYPE_LABELS: Dict[DiffType, str] = {
        DiffType.ADDED: "Added in external",
        DiffType.REMOVED: "Missing in external",
        DiffType.CHANGED: "Changed",
    }

    def __init__(
        self,
        differences: Sequence[DifferenceRecord],
        config: ReconcileConfig | None = None,
    ):
        super().__init__(config)
        self.differences = list(differences)

    def header(self) -> List[str]:
        return ["Type", "Date", "Day", "Shift", "Authoritative", "External"]

    def rows(self) -> List[List[str]]:
        return [
            [
                self.TYPE_LABELS[diff.type],
                diff.date.isoformat(),
                diff.day_name(self.config.day_names),
                diff.shift_type.value,
                _describe(diff.authoritative),
                _describe(diff.external),
            ]
            for diff in self.differences
        ]


class MonthlySummaryCSVExporter(ExportStrategy):
    """Exports every shift contributing to a set of monthly summaries.

    Output format: Date, Day, Shift Type, Start Time, End Time, Duration (Hours)
    Months in ascending order, shifts in date order within each month.
    """

    def __init__(
        self,
        summaries: Dict[str, MonthlySummary],
        config: ReconcileConfig | None = None,
    ):
        super().__init__(config)
        self.summaries = summaries

    def header(self) -> List[str]:
        return ["Date", "Day", "Shift Type", "Start Time", "End Time", "Duration (Hours)"]

    def rows(self) -> List[List[str]]:
        rows: List[List[str]] = []
        for month in sorted(self.summaries):
            for shift in self.summaries[month].shifts:
                rows.append(
                    [
                        shift.date.isoformat(),
                        self.config.day_name(shift.day_index),
                        shift.shift_type.value,
                        _time_cell(shift.start),
                        _time_cell(shift.end),
                        f"{shift.duration:.2f}",
                    ]
                )
        return rows


def _describe(assignment: ShiftAssignment | None) -> str:
    return assignment.describe() if assignment is not None else MISSING


def _time_cell(value) -> str:
    try:
        return format_time(value)
    except AttributeError:
        return str(value)
