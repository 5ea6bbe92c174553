"""Candidate generation for daily assignments.

This module builds the pool of people who may be assigned on a given day
and orders that pool for the greedy passes.
"""

import random
from typing import Callable, Optional

from stablescheduler.domain.models import Person, PersonId


class CandidateGenerator:
    """Produces and ranks eligible people for a day.

    Ranking shuffles the pool with the injected random source before a
    stable sort, so people with equal keys win with equal probability
    instead of in roster order.

    Args:
        people: Full roster, in roster order.
        rng: Random source used for tie-breaking. Pass a seeded
            ``random.Random`` for reproducible output.
    """

    def __init__(self, people: list[Person], rng: Optional[random.Random] = None):
        self.people = list(people)
        self.rng = rng or random.Random()

    def eligible(self, day) -> list[Person]:
        """People whose blocked dates do not include the day, in roster order."""
        return [p for p in self.people if p.is_available(day)]

    def rank(
        self,
        candidates: list[Person],
        key: Callable[[PersonId], object],
    ) -> list[Person]:
        """Order candidates by ascending key, breaking ties randomly.

        Args:
            candidates: Pool to rank. Not modified.
            key: Maps a person id to its sort key.

        Returns:
            New list, best candidate first.
        """
        shuffled = list(candidates)
        self.rng.shuffle(shuffled)
        return sorted(shuffled, key=lambda p: key(p.id))


def without(candidates: list[Person], *person_ids: Optional[PersonId]) -> list[Person]:
    """Filter out the given ids. ``None`` entries are ignored."""
    excluded = {pid for pid in person_ids if pid is not None}
    return [p for p in candidates if p.id not in excluded]
