"""Validation module for verifying schedule correctness.

This module checks a schedule, generated or manually overridden, against
the roster and the calendar rules. A schedule straight from the generator
should always pass; overrides may introduce errors that are worth showing
before export.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Optional, Union

from stablescheduler.domain.calendar import format_day
from stablescheduler.domain.models import (
    DateRange,
    GenerationResult,
    Person,
    PersonId,
    Schedule,
    people_map,
)
from stablescheduler.domain.policies import DefaultWeekendPolicy, WeekendPolicy


class ValidationErrorType(Enum):
    """Types of validation errors."""

    MISSING_DAY = "missing_day"
    DAY_OUTSIDE_RANGE = "day_outside_range"
    UNKNOWN_PERSON = "unknown_person"
    BLOCKED_DATE = "blocked_date"
    CONSECUTIVE_DAYS = "consecutive_days"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    day: Optional[date] = None
    person_id: Optional[PersonId] = None

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.day is not None:
            parts.append(f"{self.day.isoformat()}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a schedule."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def errors_of_type(self, error_type: ValidationErrorType) -> list[ValidationError]:
        return [e for e in self.errors if e.error_type == error_type]


class ScheduleValidator:
    """Validates schedules against the roster and calendar rules.

    Checks:
    - Every day of the range has an entry and no day lies outside it
    - Every assignee is on the roster and has not blocked the day
    - Nobody works two days in a row, except where the fill pass had to
      re-admit the previous day's person (reported as a warning)

    Unassigned days and back-to-back weekends are reported as warnings.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate(schedule, date_range, people)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, policy: Optional[WeekendPolicy] = None):
        self.policy = policy or DefaultWeekendPolicy()

    def validate(
        self,
        schedule: Union[Schedule, GenerationResult],
        date_range: DateRange,
        people: list[Person],
    ) -> ValidationResult:
        """Validate a complete schedule.

        Args:
            schedule: Schedule (or generation result) to check.
            date_range: Range the schedule should cover.
            people: Current roster.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        if isinstance(schedule, GenerationResult):
            schedule = schedule.schedule

        result = ValidationResult(is_valid=True)
        people_by_id = people_map(people)

        self._validate_coverage(schedule, date_range, result)

        for day in schedule.days:
            person_id = schedule.get(day)
            if person_id is None:
                result.add_warning(f"{day.isoformat()}: nobody assigned")
                continue

            person = people_by_id.get(person_id)
            if person is None:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.UNKNOWN_PERSON,
                        message=f"Unknown person ID: {person_id}",
                        day=day,
                        person_id=person_id,
                    )
                )
                continue

            if not person.is_available(day):
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.BLOCKED_DATE,
                        message=f"{person.name} has blocked this date",
                        day=day,
                        person_id=person_id,
                    )
                )

        self._validate_consecutive_days(schedule, people, result)
        self._validate_weekends(schedule, people_by_id, result)

        return result

    def _validate_coverage(
        self,
        schedule: Schedule,
        date_range: DateRange,
        result: ValidationResult,
    ) -> None:
        """Check that the schedule has exactly the days of the range."""
        for day in date_range.days:
            if not schedule.is_processed(day):
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.MISSING_DAY,
                        message="Day has no entry",
                        day=day,
                    )
                )

        for day in schedule.days:
            if not date_range.contains(day):
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.DAY_OUTSIDE_RANGE,
                        message=f"Day is outside {date_range.start}..{date_range.end}",
                        day=day,
                    )
                )

    def _validate_consecutive_days(
        self,
        schedule: Schedule,
        people: list[Person],
        result: ValidationResult,
    ) -> None:
        """Check that nobody holds two days in a row.

        A repeat is tolerated on a non-anchor day when every available person
        was ruled out by adjacency at fill time: the previous day's person,
        plus the next day's person if the next day is an anchor day.
        """
        for day in schedule.days:
            person_id = schedule.get(day)
            previous = day - timedelta(days=1)
            if person_id is None or schedule.get(previous) != person_id:
                continue

            if self._adjacency_was_relaxed(schedule, people, day):
                result.add_warning(
                    f"{day.isoformat()}: {person_id} also works "
                    f"{previous.isoformat()} (no one else was available)"
                )
                continue

            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.CONSECUTIVE_DAYS,
                    message=f"Person {person_id} also works {previous.isoformat()}",
                    day=day,
                    person_id=person_id,
                )
            )

    def _adjacency_was_relaxed(
        self,
        schedule: Schedule,
        people: list[Person],
        day: date,
    ) -> bool:
        if self.policy.is_anchor_day(day):
            return False

        excluded = {schedule.get(day - timedelta(days=1))}
        following = day + timedelta(days=1)
        if self.policy.is_anchor_day(following):
            excluded.add(schedule.get(following))

        return all(p.id in excluded for p in people if p.is_available(day))

    def _validate_weekends(
        self,
        schedule: Schedule,
        people_by_id: dict[PersonId, Person],
        result: ValidationResult,
    ) -> None:
        """Warn where the weekend-repeat rule had to be broken."""
        for day in schedule.days:
            person_id = schedule.get(day)
            if person_id is None or not self.policy.is_weekend_window(day):
                continue
            if self.policy.worked_last_weekend(schedule.assignments, day, person_id):
                person = people_by_id.get(person_id)
                name = person.name if person else person_id
                result.add_warning(
                    f"{format_day(day)}: {name} already worked the last weekend"
                )
