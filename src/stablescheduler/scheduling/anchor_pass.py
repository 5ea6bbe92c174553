"""First assignment pass: anchor days.

Anchor days (Saturdays by default) are assigned before anything else and
ranked on anchor-day load first.
"""

import logging
from datetime import date
from typing import Optional

from stablescheduler.domain.calendar import format_day
from stablescheduler.domain.models import UNASSIGNED, PersonId
from stablescheduler.domain.policies import WeekendPolicy
from stablescheduler.scheduling.candidate_generator import CandidateGenerator, without
from stablescheduler.scheduling.fairness import FairnessTracker

logger = logging.getLogger(__name__)


class AnchorPass:
    """Assigns every anchor day in ascending order.

    For each anchor day:
    1. Keep people who have not blocked the day
    2. Drop whoever had the previous anchor day, unless that empties the pool
    3. Mark the day unassigned if nobody is left
    4. Rank by (anchor days, total days) with random tie-breaks
    5. Assign the first candidate and record it in the tracker
    """

    def __init__(self, policy: WeekendPolicy, candidate_generator: CandidateGenerator):
        self.policy = policy
        self.candidate_generator = candidate_generator

    def run(
        self,
        days: list[date],
        assignments: dict[str, Optional[PersonId]],
        tracker: FairnessTracker,
    ) -> None:
        """Assign all anchor days among ``days`` into ``assignments``."""
        for day in days:
            if self.policy.is_anchor_day(day):
                self.assign_day(day, assignments, tracker)

    def assign_day(
        self,
        day: date,
        assignments: dict[str, Optional[PersonId]],
        tracker: FairnessTracker,
    ) -> Optional[PersonId]:
        """Assign a single anchor day and return the chosen id (or None)."""
        key = format_day(day)
        candidates = self.candidate_generator.eligible(day)

        previous = assignments.get(format_day(self.policy.previous_anchor_day(day)))
        rested = without(candidates, previous)
        if rested:
            candidates = rested

        if not candidates:
            logger.debug("No eligible candidate for anchor day %s", key)
            assignments[key] = UNASSIGNED
            return UNASSIGNED

        ranked = self.candidate_generator.rank(candidates, tracker.anchor_sort_key)
        chosen = ranked[0]
        assignments[key] = chosen.id
        tracker.record_anchor(chosen.id)
        return chosen.id
