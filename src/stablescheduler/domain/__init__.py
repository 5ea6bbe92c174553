"""Domain models and calendar rules for scheduling."""

from stablescheduler.domain.calendar import expand_range, format_day, to_day
from stablescheduler.domain.errors import (
    InvalidRangeError,
    RosterError,
    StableSchedulerError,
)
from stablescheduler.domain.models import (
    UNASSIGNED,
    CalendarEvent,
    DateRange,
    FairnessCounters,
    GenerationResult,
    Person,
    PersonId,
    Schedule,
    SchedulerConfig,
    people_map,
)
from stablescheduler.domain.policies import DefaultWeekendPolicy, WeekendPolicy

__all__ = [
    # Models
    "CalendarEvent",
    "DateRange",
    "FairnessCounters",
    "GenerationResult",
    "Person",
    "PersonId",
    "Schedule",
    "SchedulerConfig",
    "UNASSIGNED",
    "people_map",
    # Calendar helpers
    "expand_range",
    "format_day",
    "to_day",
    # Errors
    "InvalidRangeError",
    "RosterError",
    "StableSchedulerError",
    # Policies
    "DefaultWeekendPolicy",
    "WeekendPolicy",
]
