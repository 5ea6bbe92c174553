"""Main scheduler interface.

This module provides the high-level Scheduler class that expands the date
range and runs the anchor and fill passes in order.
"""

import logging
import random
from typing import Optional

from stablescheduler.domain.models import (
    DateRange,
    GenerationResult,
    Person,
    PersonId,
    Schedule,
    SchedulerConfig,
)
from stablescheduler.domain.policies import DefaultWeekendPolicy, WeekendPolicy
from stablescheduler.scheduling.anchor_pass import AnchorPass
from stablescheduler.scheduling.candidate_generator import CandidateGenerator
from stablescheduler.scheduling.fairness import FairnessTracker
from stablescheduler.scheduling.fill_pass import FillPass

logger = logging.getLogger(__name__)


class Scheduler:
    """High-level scheduler for generating duty rosters.

    Generation is a single greedy sweep without backtracking: anchor days
    first, then every other day. Inputs are never modified and every call
    starts from zeroed fairness counters.

    Tie-breaks between equally loaded people are random. Output is only
    reproducible when a seeded ``rng`` or ``config.seed`` is supplied.

    Example:
        >>> scheduler = Scheduler(rng=random.Random(42))
        >>> result = scheduler.generate_schedule(
        ...     DateRange(date(2024, 3, 1), date(2024, 3, 31)),
        ...     people,
        ... )
        >>> result.schedule.get("2024-03-02")
    """

    def __init__(
        self,
        policy: Optional[WeekendPolicy] = None,
        config: Optional[SchedulerConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize scheduler.

        Args:
            policy: Anchor-day and weekend rules.
            config: Scheduler configuration. Its weekday settings are used
                when no policy is given.
            rng: Random source for tie-breaking, shared by every run of this
                scheduler. Overrides ``config.seed``, which otherwise seeds a
                fresh source at the start of each run.
        """
        self.config = config or SchedulerConfig()
        self.policy = policy or DefaultWeekendPolicy(
            anchor_weekday=self.config.anchor_weekday,
            weekend_weekdays=tuple(self.config.weekend_weekdays),
        )
        self.rng = rng

    def generate_schedule(
        self,
        date_range: DateRange,
        people: list[Person],
    ) -> GenerationResult:
        """Generate a complete schedule for the date range.

        Args:
            date_range: Inclusive range of days to staff.
            people: Roster, in the order used for display and overrides.

        Returns:
            GenerationResult whose schedule has exactly one entry per day.
        """
        days = date_range.days
        tracker = FairnessTracker(people)
        # Reseeded per run: same config.seed, same schedule
        rng = self.rng if self.rng is not None else random.Random(self.config.seed)
        candidate_generator = CandidateGenerator(people, rng=rng)
        assignments: dict[str, Optional[PersonId]] = {}

        AnchorPass(self.policy, candidate_generator).run(days, assignments, tracker)
        FillPass(self.policy, candidate_generator).run(days, assignments, tracker)

        schedule = Schedule(assignments)
        unassigned = schedule.unassigned_days()
        logger.info(
            "Generated schedule %s..%s for %d people: %d days, %d unassigned",
            date_range.start,
            date_range.end,
            len(people),
            len(days),
            len(unassigned),
        )
        if unassigned:
            logger.warning(
                "Days without anyone on duty: %s",
                ", ".join(d.isoformat() for d in unassigned),
            )

        return GenerationResult(
            schedule=schedule,
            counters=tracker.snapshot(),
            date_range=date_range,
        )

    def generate_schedule_with_stats(
        self,
        date_range: DateRange,
        people: list[Person],
    ) -> tuple[GenerationResult, dict]:
        """Generate schedule and return statistics.

        Returns:
            Tuple of (result, stats_dict).
        """
        result = self.generate_schedule(date_range, people)
        stats = self._calculate_stats(result, people)
        return result, stats

    def _calculate_stats(
        self,
        result: GenerationResult,
        people: list[Person],
    ) -> dict:
        """Calculate schedule statistics."""
        summary = result.get_summary()
        per_person = {
            p.id: {
                "name": p.name,
                "total": result.counters[p.id].total_days,
                "anchor": result.counters[p.id].anchor_days,
            }
            for p in people
        }

        return {
            **summary,
            "total_people": len(people),
            "per_person": per_person,
            "unassigned_dates": result.unassigned_days,
        }
