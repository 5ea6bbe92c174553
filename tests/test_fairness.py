"""Tests for fairness tracking."""

from datetime import date

import pytest

from stablescheduler.domain.models import FairnessCounters, Person, Schedule
from stablescheduler.scheduling.fairness import FairnessMetrics, FairnessTracker


@pytest.fixture
def people():
    return [Person(id=1, name="Elin"), Person(id=2, name="Anne")]


class TestFairnessTracker:
    """Tests for FairnessTracker."""

    def test_starts_at_zero(self, people):
        tracker = FairnessTracker(people)
        for p in people:
            assert tracker.total_days(p.id) == 0
            assert tracker.anchor_days(p.id) == 0

    def test_record_anchor_increments_both(self, people):
        tracker = FairnessTracker(people)
        tracker.record_anchor(1)
        assert tracker.total_days(1) == 1
        assert tracker.anchor_days(1) == 1
        assert tracker.total_days(2) == 0

    def test_record_fill_increments_total_only(self, people):
        tracker = FairnessTracker(people)
        tracker.record_fill(2)
        tracker.record_fill(2)
        assert tracker.total_days(2) == 2
        assert tracker.anchor_days(2) == 0

    def test_sort_keys(self, people):
        tracker = FairnessTracker(people)
        tracker.record_anchor(1)
        tracker.record_fill(1)
        assert tracker.anchor_sort_key(1) == (1, 2)
        assert tracker.fill_sort_key(1) == 2

    def test_snapshot_is_a_copy(self, people):
        tracker = FairnessTracker(people)
        tracker.record_fill(1)
        snapshot = tracker.snapshot()
        snapshot[1].total_days = 99
        assert tracker.total_days(1) == 1
        assert snapshot[2] == FairnessCounters(total_days=0, anchor_days=0)

    def test_from_schedule_recounts(self, people):
        schedule = Schedule({
            "2024-03-01": 1,  # Friday
            "2024-03-02": 2,  # Saturday
            "2024-03-03": 1,
            "2024-03-04": None,
            "2024-03-05": 42,  # not on roster
        })
        tracker = FairnessTracker.from_schedule(schedule, people)
        assert tracker.total_days(1) == 2
        assert tracker.anchor_days(1) == 0
        assert tracker.total_days(2) == 1
        assert tracker.anchor_days(2) == 1


class TestFairnessMetrics:
    """Tests for FairnessMetrics."""

    def test_spread(self):
        counters = {
            1: FairnessCounters(total_days=5, anchor_days=2),
            2: FairnessCounters(total_days=3, anchor_days=1),
        }
        metrics = FairnessMetrics.calculate(counters)
        assert metrics.total_spread == 2
        assert metrics.anchor_spread == 1

    def test_empty(self):
        metrics = FairnessMetrics.calculate({})
        assert metrics.total_spread == 0
        assert metrics.anchor_spread == 0

    def test_tracker_metrics(self, people):
        tracker = FairnessTracker(people)
        tracker.record_anchor(1)
        assert tracker.metrics().max_anchor == 1
        assert tracker.metrics().min_anchor == 0
