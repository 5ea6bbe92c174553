"""Domain models for the scheduling system.

This module contains the core data structures used throughout the scheduling
system: people and their blocked dates, date ranges, schedules, fairness
counters and calendar events.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from stablescheduler.domain.calendar import DayLike, expand_range, format_day, to_day
from stablescheduler.domain.errors import InvalidRangeError, RosterError

PersonId = Union[int, str]

# Explicit "nobody could take this day" marker. A day that has not been
# processed yet is simply absent from the schedule.
UNASSIGNED = None


@dataclass
class Person:
    """Someone who can be put on duty.

    Attributes:
        id: Opaque unique identifier.
        name: Display name.
        blocked_dates: Days on which this person cannot be assigned.
    """

    id: PersonId
    name: str
    blocked_dates: set[date] = field(default_factory=set)

    def __post_init__(self):
        self.blocked_dates = {to_day(d) for d in self.blocked_dates}

    def is_available(self, day: DayLike) -> bool:
        """Check whether the person can be assigned on a day."""
        return to_day(day) not in self.blocked_dates

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "blocked_dates": sorted(d.isoformat() for d in self.blocked_dates),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Person":
        """Build a person from a JSON-style dict."""
        try:
            person_id = data["id"]
        except KeyError as exc:
            raise RosterError(f"Person entry is missing an id: {dict(data)!r}") from exc
        return cls(
            id=person_id,
            name=str(data.get("name", person_id)),
            blocked_dates=set(data.get("blocked_dates", [])),
        )


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of whole calendar days.

    Datetime inputs are truncated to midnight before comparison.

    Raises:
        InvalidRangeError: If start is after end.
    """

    start: date
    end: date

    def __post_init__(self):
        start = to_day(self.start)
        end = to_day(self.end)
        if start > end:
            raise InvalidRangeError(start, end)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def for_month(cls, year: int, month: int) -> "DateRange":
        """Range covering one whole calendar month."""
        start = date(year, month, 1)
        if month == 12:
            next_month = date(year + 1, 1, 1)
        else:
            next_month = date(year, month + 1, 1)
        return cls(start=start, end=next_month - timedelta(days=1))

    @property
    def days(self) -> list[date]:
        """All days in the range, ascending."""
        return expand_range(self.start, self.end)

    @property
    def num_days(self) -> int:
        """Number of days in the range."""
        return (self.end - self.start).days + 1

    def contains(self, day: DayLike) -> bool:
        return self.start <= to_day(day) <= self.end


@dataclass(frozen=True, eq=False)
class Schedule:
    """Immutable mapping of ``YYYY-MM-DD`` day keys to a person id.

    A value of ``UNASSIGNED`` means the day was processed but nobody could
    take it. A missing key means the day was never processed.

    Attributes:
        assignments: Read-only view of day key -> person id (or None).
    """

    assignments: Mapping[str, Optional[PersonId]] = field(default_factory=dict)

    def __post_init__(self):
        normalized = {format_day(k): v for k, v in self.assignments.items()}
        object.__setattr__(
            self, "assignments", MappingProxyType(dict(sorted(normalized.items())))
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return dict(self.assignments) == dict(other.assignments)

    def __len__(self) -> int:
        return len(self.assignments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.assignments)

    def __contains__(self, day: DayLike) -> bool:
        return self.is_processed(day)

    def __getitem__(self, day: DayLike) -> Optional[PersonId]:
        return self.assignments[format_day(day)]

    def get(self, day: DayLike) -> Optional[PersonId]:
        """Person assigned on a day (None if unassigned or not processed)."""
        return self.assignments.get(format_day(day))

    def is_processed(self, day: DayLike) -> bool:
        """Whether the day has an entry, assigned or explicitly unassigned."""
        return format_day(day) in self.assignments

    def is_assigned(self, day: DayLike) -> bool:
        """Whether the day has a real person assigned."""
        return self.get(day) is not UNASSIGNED

    def items(self):
        return self.assignments.items()

    @property
    def days(self) -> list[date]:
        """All days that have an entry, ascending."""
        return [to_day(k) for k in self.assignments]

    def with_assignment(self, day: DayLike, person_id: Optional[PersonId]) -> "Schedule":
        """Return a copy with a single day changed."""
        updated = dict(self.assignments)
        updated[format_day(day)] = person_id
        return Schedule(updated)

    def assigned_days(self, person_id: PersonId) -> list[date]:
        """Days assigned to one person, ascending."""
        return [to_day(k) for k, v in self.assignments.items() if v == person_id]

    def unassigned_days(self) -> list[date]:
        """Days that were processed but left without anyone."""
        return [to_day(k) for k, v in self.assignments.items() if v is UNASSIGNED]

    def to_dict(self) -> dict[str, Optional[PersonId]]:
        return dict(self.assignments)

    @classmethod
    def from_dict(cls, data: Mapping[str, Optional[PersonId]]) -> "Schedule":
        return cls(dict(data))


@dataclass
class FairnessCounters:
    """Running totals for one person during a generation run.

    Attributes:
        total_days: Days assigned in either pass.
        anchor_days: Anchor days (Saturdays) assigned.
    """

    total_days: int = 0
    anchor_days: int = 0


@dataclass(frozen=True)
class CalendarEvent:
    """One all-day calendar invitation for a person on duty.

    Attributes:
        date: The duty day.
        person_id: Id of the person on duty.
        display_name: Display name of the person.
        title: Event title (SUMMARY).
        description: Event description (DESCRIPTION).
    """

    date: date
    person_id: PersonId
    display_name: str
    title: str
    description: str = ""


@dataclass
class SchedulerConfig:
    """Configuration for schedule generation and export.

    Attributes:
        event_title: Title used for exported calendar events.
        event_description: Description used for exported calendar events.
        seed: Seed for tie-break shuffling. None draws from OS entropy, which
            makes runs with equally ranked candidates non-reproducible.
        anchor_weekday: Weekday (Monday=0) prioritized in the first pass.
        weekend_weekdays: Weekdays forming the weekend window.
    """

    event_title: str = "Stallvakt"
    event_description: str = "Du er satt opp på stallvakt i dag."
    seed: Optional[int] = None
    anchor_weekday: int = 5  # Saturday
    weekend_weekdays: tuple[int, ...] = (4, 5, 6)  # Fri, Sat, Sun


@dataclass
class GenerationResult:
    """Output of a full generation run.

    Attributes:
        schedule: Day -> person assignments covering every day of the range.
        counters: Final fairness counters per person id.
        date_range: The range that was scheduled.
    """

    schedule: Schedule
    counters: dict[PersonId, FairnessCounters]
    date_range: DateRange

    @property
    def unassigned_days(self) -> list[date]:
        return self.schedule.unassigned_days()

    def get_summary(self) -> dict:
        """Summary statistics for display."""
        totals = [c.total_days for c in self.counters.values()]
        anchors = [c.anchor_days for c in self.counters.values()]
        return {
            "total_days": self.date_range.num_days,
            "assigned_days": self.date_range.num_days - len(self.unassigned_days),
            "unassigned_days": len(self.unassigned_days),
            "min_total": min(totals) if totals else 0,
            "max_total": max(totals) if totals else 0,
            "min_anchor": min(anchors) if anchors else 0,
            "max_anchor": max(anchors) if anchors else 0,
        }


def people_map(people: list[Person]) -> dict[PersonId, Person]:
    """Index people by id."""
    return {p.id: p for p in people}
