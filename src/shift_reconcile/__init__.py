"""
Shift Reconcile - Compare and merge an authoritative shift schedule with extracted shifts.
"""

__version__ = "0.1.0"

from .aggregator import MonthlyAggregator
from .builder import ShiftRecordBuilder
from .config import ConfigLoader
from .diff import DiffEngine
from .errors import (
    ConfigurationError,
    InvalidDate,
    InvalidDayOfMonth,
    InvalidTimeFormat,
    ReconciliationError,
    StoreError,
)
from .merge import MergeApplier
from .models import (
    UNASSIGNED,
    BuildResult,
    DiffType,
    DifferenceRecord,
    MergeResult,
    MonthlySummary,
    ReconcileConfig,
    Schedule,
    ShiftAssignment,
    ShiftDetail,
    ShiftSlot,
    SlotCollision,
)
from .reporter import ReconciliationReporter
from .store import JsonScheduleStore, ScheduleStore

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "ReconciliationError",
    "InvalidDate",
    "InvalidDayOfMonth",
    "InvalidTimeFormat",
    "StoreError",
    "ReconcileConfig",
    "Schedule",
    "ShiftAssignment",
    "ShiftSlot",
    "DiffType",
    "DifferenceRecord",
    "SlotCollision",
    "BuildResult",
    "MergeResult",
    "MonthlySummary",
    "ShiftDetail",
    "UNASSIGNED",
    "ShiftRecordBuilder",
    "DiffEngine",
    "MergeApplier",
    "MonthlyAggregator",
    "ReconciliationReporter",
    "ScheduleStore",
    "JsonScheduleStore",
]
