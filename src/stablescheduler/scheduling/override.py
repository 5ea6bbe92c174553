"""Manual correction of single days after generation.

Cycling ignores fairness counters and adjacency or weekend rules. It only
respects blocked dates, and always returns a new schedule.
"""

import logging
from typing import Optional

from stablescheduler.domain.calendar import DayLike, format_day
from stablescheduler.domain.models import UNASSIGNED, Person, PersonId, Schedule

logger = logging.getLogger(__name__)


def eligible_cycle(day: DayLike, people: list[Person]) -> list[Optional[PersonId]]:
    """Cycle order for a day: eligible ids in roster order, then unassigned."""
    return [p.id for p in people if p.is_available(day)] + [UNASSIGNED]


def cycle_assignment(
    schedule: Schedule,
    day: DayLike,
    people: list[Person],
) -> Schedule:
    """Advance a day to the next eligible person, wrapping through unassigned.

    A current assignee that is no longer eligible (blocked the day or left
    the roster) counts as not found, so the day moves to the first eligible
    person.

    Args:
        schedule: Current schedule. Not modified.
        day: Day to change.
        people: Current roster.

    Returns:
        New schedule with only that day changed.
    """
    cycle = eligible_cycle(day, people)
    current = schedule.get(day)

    try:
        index = cycle.index(current)
    except ValueError:
        logger.debug("Assignee %s on %s is no longer eligible", current, format_day(day))
        index = -1

    next_id = cycle[(index + 1) % len(cycle)]
    logger.debug("Override %s: %s -> %s", format_day(day), current, next_id)
    return schedule.with_assignment(day, next_id)
