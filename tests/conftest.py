"""Shared fixtures for shift-reconcile tests."""

import pytest
from datetime import time

from shift_reconcile.models import (
    ReconcileConfig,
    Schedule,
    ShiftAssignment,
    ShiftSlot,
)

# Week of 2024-01-07 (Sunday) .. 2024-01-13 (Saturday)
WEEK = "2024-01-07"
SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)


@pytest.fixture
def config() -> ReconcileConfig:
    """Default policy: Friday evening and Saturday excluded."""
    return ReconcileConfig()


@pytest.fixture
def morning_a() -> ShiftAssignment:
    """Employee A, default morning hours."""
    return ShiftAssignment(employee_id="A", start=time(7, 0), end=time(16, 0))


@pytest.fixture
def evening_b() -> ShiftAssignment:
    """Employee B, default evening hours."""
    return ShiftAssignment(employee_id="B", start=time(13, 0), end=time(22, 0))


@pytest.fixture
def authoritative(morning_a: ShiftAssignment) -> Schedule:
    """A week with A on Monday and Wednesday mornings and Wednesday evening."""
    return {
        WEEK: {
            MONDAY: {ShiftSlot.MORNING: morning_a},
            WEDNESDAY: {
                ShiftSlot.MORNING: morning_a,
                ShiftSlot.EVENING: ShiftAssignment(
                    employee_id="A", start=time(13, 0), end=time(22, 0)
                ),
            },
        }
    }


@pytest.fixture
def full_week() -> Schedule:
    """Every slot of a week filled, including Friday evening and Saturday."""
    return {
        WEEK: {
            day: {
                ShiftSlot.MORNING: ShiftAssignment("A", time(7, 0), time(16, 0)),
                ShiftSlot.EVENING: ShiftAssignment("B", time(13, 0), time(22, 0)),
            }
            for day in range(7)
        }
    }
