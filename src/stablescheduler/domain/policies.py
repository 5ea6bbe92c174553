"""Policy definitions for calendar rules.

This module contains the predicates the assignment passes use to decide
which days are anchor days, which days belong to a weekend, and whether a
person worked the previous weekend. Policies are kept separate from the
scheduling engine to allow independent testing and easy modification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Mapping, Optional

from stablescheduler.domain.calendar import DayLike, format_day, to_day

SUNDAY = 6


class WeekendPolicy(ABC):
    """Abstract base class for anchor-day and weekend rules."""

    @abstractmethod
    def is_anchor_day(self, day: date) -> bool:
        """Whether the day is assigned in the anchor pass."""
        pass

    @abstractmethod
    def is_weekend_window(self, day: date) -> bool:
        """Whether the day falls inside the weekend window."""
        pass

    @abstractmethod
    def last_completed_weekend(self, day: date) -> list[date]:
        """Days of the most recent weekend that lie strictly before ``day``."""
        pass

    def previous_anchor_day(self, day: date) -> date:
        """The anchor day one week earlier."""
        return day - timedelta(days=7)

    def worked_last_weekend(
        self,
        assignments: Mapping[str, Optional[object]],
        day: DayLike,
        person_id: object,
    ) -> bool:
        """Check if a person was assigned on any day of the last weekend.

        Args:
            assignments: Day key -> person id mapping built so far.
            day: Day currently being assigned.
            person_id: Candidate to check.
        """
        return any(
            assignments.get(format_day(d)) == person_id
            for d in self.last_completed_weekend(to_day(day))
        )


@dataclass
class DefaultWeekendPolicy(WeekendPolicy):
    """Default weekend policy.

    - Anchor day: Saturday
    - Weekend window: Friday, Saturday and Sunday

    The last completed weekend is found by walking back from the current day
    (inclusive) to the nearest Sunday and taking the Friday-Sunday triple
    ending there. Days on or after the current day are dropped, so on a
    Sunday only the Friday and Saturday just before it are considered.
    """

    anchor_weekday: int = 5  # Saturday
    weekend_weekdays: tuple[int, ...] = (4, 5, 6)  # Fri, Sat, Sun

    def is_anchor_day(self, day: date) -> bool:
        return day.weekday() == self.anchor_weekday

    def is_weekend_window(self, day: date) -> bool:
        return day.weekday() in self.weekend_weekdays

    def last_completed_weekend(self, day: date) -> list[date]:
        sunday = day - timedelta(days=(day.weekday() - SUNDAY) % 7)
        triple = [sunday - timedelta(days=2), sunday - timedelta(days=1), sunday]
        return [d for d in triple if d < day]
