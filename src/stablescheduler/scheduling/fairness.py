"""Fairness tracking for assignment passes.

The tracker holds per-person running totals. Both passes read it inside
their sort keys and write it exactly once per successful assignment.
"""

import copy
from dataclasses import dataclass
from typing import Optional

from stablescheduler.domain.models import (
    FairnessCounters,
    Person,
    PersonId,
    Schedule,
)
from stablescheduler.domain.policies import DefaultWeekendPolicy, WeekendPolicy


class FairnessTracker:
    """Per-person counters of total and anchor-day assignments.

    A fresh tracker is created for every generation run; counters are never
    carried over between runs.

    Example:
        >>> tracker = FairnessTracker(people)
        >>> tracker.record_anchor(person.id)
        >>> tracker.anchor_days(person.id)
        1
    """

    def __init__(self, people: list[Person]):
        self._counters: dict[PersonId, FairnessCounters] = {
            p.id: FairnessCounters() for p in people
        }

    @classmethod
    def from_schedule(
        cls,
        schedule: Schedule,
        people: list[Person],
        policy: Optional[WeekendPolicy] = None,
    ) -> "FairnessTracker":
        """Recount totals from an existing schedule.

        Used to refresh display statistics after manual overrides. Days held
        by people missing from ``people`` are ignored.
        """
        policy = policy or DefaultWeekendPolicy()
        tracker = cls(people)
        for day in schedule.days:
            person_id = schedule.get(day)
            if person_id not in tracker._counters:
                continue
            if policy.is_anchor_day(day):
                tracker.record_anchor(person_id)
            else:
                tracker.record_fill(person_id)
        return tracker

    def total_days(self, person_id: PersonId) -> int:
        return self._counters[person_id].total_days

    def anchor_days(self, person_id: PersonId) -> int:
        return self._counters[person_id].anchor_days

    def anchor_sort_key(self, person_id: PersonId) -> tuple[int, int]:
        """Sort key for the anchor pass: anchor load first, then total load."""
        counters = self._counters[person_id]
        return (counters.anchor_days, counters.total_days)

    def fill_sort_key(self, person_id: PersonId) -> int:
        """Sort key for the fill pass: total load only."""
        return self._counters[person_id].total_days

    def record_anchor(self, person_id: PersonId) -> None:
        """Record an anchor-day assignment (counts toward both totals)."""
        counters = self._counters[person_id]
        counters.total_days += 1
        counters.anchor_days += 1

    def record_fill(self, person_id: PersonId) -> None:
        """Record a non-anchor assignment."""
        self._counters[person_id].total_days += 1

    def snapshot(self) -> dict[PersonId, FairnessCounters]:
        """Copy of all counters, safe to hand out for display."""
        return copy.deepcopy(self._counters)

    def metrics(self) -> "FairnessMetrics":
        return FairnessMetrics.calculate(self._counters)


@dataclass
class FairnessMetrics:
    """Spread of assignment counts across people.

    Attributes:
        min_total: Fewest days given to anyone.
        max_total: Most days given to anyone.
        min_anchor: Fewest anchor days given to anyone.
        max_anchor: Most anchor days given to anyone.
    """

    min_total: int = 0
    max_total: int = 0
    min_anchor: int = 0
    max_anchor: int = 0

    @property
    def total_spread(self) -> int:
        return self.max_total - self.min_total

    @property
    def anchor_spread(self) -> int:
        return self.max_anchor - self.min_anchor

    @classmethod
    def calculate(cls, counters: dict[PersonId, FairnessCounters]) -> "FairnessMetrics":
        if not counters:
            return cls()

        totals = [c.total_days for c in counters.values()]
        anchors = [c.anchor_days for c in counters.values()]
        return cls(
            min_total=min(totals),
            max_total=max(totals),
            min_anchor=min(anchors),
            max_anchor=max(anchors),
        )
