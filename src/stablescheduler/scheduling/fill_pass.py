"""Second assignment pass: every remaining day.

Runs after the anchor pass, so the day after the one being filled may
already hold an anchor assignment.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from stablescheduler.domain.calendar import format_day
from stablescheduler.domain.models import UNASSIGNED, PersonId
from stablescheduler.domain.policies import WeekendPolicy
from stablescheduler.scheduling.candidate_generator import CandidateGenerator, without
from stablescheduler.scheduling.fairness import FairnessTracker

logger = logging.getLogger(__name__)


class FillPass:
    """Assigns all non-anchor days in ascending order.

    For each day:
    1. Keep people who have not blocked the day
    2. Hard: drop the people on the previous and following day. If nobody is
       left, only the following-day person is dropped. If still nobody is
       left, the day is unassigned.
    3. Soft (weekend window only): drop anyone who worked the last completed
       weekend, unless that empties the pool
    4. Rank by total days with random tie-breaks
    5. Assign the first candidate and record it in the tracker

    Adjacency is always resolved before the weekend rule; the two are never
    relaxed together.
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
        """Assign all non-anchor days among ``days`` into ``assignments``."""
        for day in days:
            if not self.policy.is_anchor_day(day):
                self.assign_day(day, assignments, tracker)

    def assign_day(
        self,
        day: date,
        assignments: dict[str, Optional[PersonId]],
        tracker: FairnessTracker,
    ) -> Optional[PersonId]:
        """Assign a single day and return the chosen id (or None)."""
        key = format_day(day)
        candidates = self.candidate_generator.eligible(day)

        yesterday = assignments.get(format_day(day - timedelta(days=1)))
        tomorrow = assignments.get(format_day(day + timedelta(days=1)))

        apart = without(candidates, yesterday, tomorrow)
        if apart:
            candidates = apart
        else:
            candidates = without(candidates, tomorrow)
            if candidates:
                logger.debug(
                    "Relaxed adjacency on %s: re-admitting previous-day person %s",
                    key,
                    yesterday,
                )

        if not candidates:
            logger.debug("No eligible candidate for %s", key)
            assignments[key] = UNASSIGNED
            return UNASSIGNED

        if self.policy.is_weekend_window(day):
            fresh = [
                p for p in candidates
                if not self.policy.worked_last_weekend(assignments, day, p.id)
            ]
            if fresh:
                candidates = fresh

        ranked = self.candidate_generator.rank(candidates, tracker.fill_sort_key)
        chosen = ranked[0]
        assignments[key] = chosen.id
        tracker.record_fill(chosen.id)
        return chosen.id
