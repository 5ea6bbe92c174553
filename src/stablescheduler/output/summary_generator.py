"""Plain-text roster output.

This module creates a text view of a generated schedule showing:
- Every day grouped by month, with weekend days marked
- Per-person totals and anchor-day counts
- Days nobody could take
"""

from collections import defaultdict
from pathlib import Path
from typing import Optional, Union

from stablescheduler.domain.models import (
    FairnessCounters,
    Person,
    PersonId,
    Schedule,
    people_map,
)
from stablescheduler.domain.policies import DefaultWeekendPolicy, WeekendPolicy
from stablescheduler.scheduling.fairness import FairnessTracker

UNASSIGNED_LABEL = "(unassigned)"


class SummaryGenerator:
    """Generates a human-readable roster and fairness summary.

    Counters are recomputed from the schedule when not supplied, so the
    summary stays correct after manual overrides.
    """

    def __init__(self, policy: Optional[WeekendPolicy] = None):
        self.policy = policy or DefaultWeekendPolicy()

    def generate(
        self,
        schedule: Schedule,
        people: list[Person],
        output_path: Union[str, Path],
        counters: Optional[dict[PersonId, FairnessCounters]] = None,
    ) -> str:
        """Generate summary text and save to file.

        Returns:
            The generated text content.
        """
        content = self.generate_to_string(schedule, people, counters)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(
        self,
        schedule: Schedule,
        people: list[Person],
        counters: Optional[dict[PersonId, FairnessCounters]] = None,
    ) -> str:
        """Generate summary text and return it as a string."""
        if counters is None:
            counters = FairnessTracker.from_schedule(schedule, people, self.policy).snapshot()

        people_by_id = people_map(people)
        lines = []

        lines.append("=" * 60)
        if schedule.days:
            lines.append(f"DUTY ROSTER {schedule.days[0]} - {schedule.days[-1]}")
        else:
            lines.append("DUTY ROSTER (empty)")
        lines.append("=" * 60)

        by_month = defaultdict(list)
        for day in schedule.days:
            by_month[(day.year, day.month)].append(day)

        for (year, month) in sorted(by_month):
            lines.append("")
            lines.append(by_month[(year, month)][0].strftime("%B %Y"))
            lines.append("-" * 60)
            for day in by_month[(year, month)]:
                person_id = schedule.get(day)
                if person_id is None:
                    name = UNASSIGNED_LABEL
                elif person_id in people_by_id:
                    name = people_by_id[person_id].name
                else:
                    name = f"{person_id} (not on roster)"
                marker = "*" if self.policy.is_weekend_window(day) else " "
                lines.append(f"{marker} {day.isoformat()} {day.strftime('%a'):<4} {name}")

        lines.append("")
        lines.append("-" * 60)
        lines.append(f"{'Name':<24} {'Total':>6} {'Anchor':>7}")
        lines.append("-" * 60)
        for person in people:
            c = counters.get(person.id, FairnessCounters())
            lines.append(f"{person.name[:24]:<24} {c.total_days:>6} {c.anchor_days:>7}")

        unassigned = schedule.unassigned_days()
        lines.append("")
        lines.append(f"Unassigned days: {len(unassigned)}")
        for day in unassigned:
            lines.append(f"  {day.isoformat()} ({day.strftime('%A')})")

        return "\n".join(lines) + "\n"
