"""Tests for the monthly aggregation view."""

import copy
import pytest
from datetime import date, time

from shift_reconcile.aggregator import MonthlyAggregator
from shift_reconcile.models import ShiftAssignment, ShiftSlot


@pytest.fixture
def aggregator() -> MonthlyAggregator:
    return MonthlyAggregator()


class TestAggregate:
    """Tests for MonthlyAggregator.aggregate."""

    def test_counts_and_hours(self, aggregator, authoritative):
        """A has two mornings (9h each) and one evening (9h) in January 2024."""
        summaries = aggregator.aggregate(authoritative, "A")

        assert list(summaries) == ["2024-01"]
        january = summaries["2024-01"]
        assert january.morning == 2
        assert january.evening == 1
        assert january.total_shifts == 3
        assert january.total_hours == pytest.approx(27.0)

    def test_shifts_ordered_by_date_and_slot(self, aggregator, authoritative):
        shifts = aggregator.aggregate(authoritative, "A")["2024-01"].shifts
        assert [(s.date, s.shift_type) for s in shifts] == [
            (date(2024, 1, 8), ShiftSlot.MORNING),
            (date(2024, 1, 10), ShiftSlot.MORNING),
            (date(2024, 1, 10), ShiftSlot.EVENING),
        ]
        assert shifts[0].duration == pytest.approx(9.0)
        assert shifts[0].day_index == 1

    def test_other_employees_excluded(self, aggregator, full_week):
        summary = aggregator.aggregate(full_week, "B")["2024-01"]
        assert summary.morning == 0
        assert summary.evening == 7

    def test_week_spanning_two_months(self, aggregator, morning_a):
        """Week of 2024-01-28 runs into February; both months get keys."""
        schedule = {
            "2024-01-28": {
                1: {ShiftSlot.MORNING: morning_a},  # Jan 29
                4: {ShiftSlot.MORNING: morning_a},  # Feb 1
            }
        }
        summaries = aggregator.aggregate(schedule, "A")

        assert list(summaries) == ["2024-01", "2024-02"]
        assert summaries["2024-01"].morning == 1
        assert summaries["2024-02"].morning == 1

    def test_months_without_shifts_have_zero_entries(self, aggregator, morning_a):
        schedule = {"2024-01-07": {1: {ShiftSlot.MORNING: morning_a}}}
        summary = aggregator.aggregate(schedule, "nobody")["2024-01"]
        assert summary.total_shifts == 0
        assert summary.total_hours == 0.0
        assert summary.shifts == []

    def test_malformed_boundary_counts_zero_hours(self, aggregator):
        """Raw historical strings that fail to parse contribute no hours."""
        broken = ShiftAssignment(employee_id="A", start="7h", end="16:00")
        schedule = {
            "2024-01-07": {
                1: {ShiftSlot.MORNING: broken},
                2: {ShiftSlot.MORNING: ShiftAssignment("A", time(7, 0), time(15, 30))},
            }
        }
        summary = aggregator.aggregate(schedule, "A")["2024-01"]
        assert summary.morning == 2
        assert summary.total_hours == pytest.approx(8.5)

    def test_months_sorted(self, aggregator, morning_a):
        schedule = {
            "2024-03-03": {1: {ShiftSlot.MORNING: morning_a}},
            "2024-01-07": {1: {ShiftSlot.MORNING: morning_a}},
        }
        assert list(aggregator.aggregate(schedule, "A")) == ["2024-01", "2024-03"]

    def test_schedule_not_mutated(self, aggregator, authoritative):
        snapshot = copy.deepcopy(authoritative)
        aggregator.aggregate(authoritative, "A")
        assert authoritative == snapshot
