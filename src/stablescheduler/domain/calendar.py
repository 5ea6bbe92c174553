"""Calendar day helpers.

All arithmetic here works on ``date`` objects, never on wall-clock time, so
results do not shift across daylight-saving transitions.
"""

from datetime import date, datetime, timedelta
from typing import Union

from stablescheduler.domain.errors import InvalidRangeError, RosterError

DayLike = Union[date, datetime, str]


def to_day(value: DayLike) -> date:
    """Normalize a date, datetime or ISO string to a calendar day.

    Datetimes are truncated to their date (time of day dropped). Strings may
    be plain ``YYYY-MM-DD`` or a full ISO timestamp.
    """
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError as exc:
            raise RosterError(f"Not a valid ISO date: {value!r}") from exc
    raise TypeError(f"Cannot convert {type(value).__name__} to a date")


def format_day(value: DayLike) -> str:
    """Format a day as the ``YYYY-MM-DD`` key used in schedules."""
    return to_day(value).isoformat()


def expand_range(start: DayLike, end: DayLike) -> list[date]:
    """Expand an inclusive date range into its calendar days.

    Args:
        start: First day of the range.
        end: Last day of the range (inclusive).

    Returns:
        Ascending list with one entry per day. ``start == end`` yields one day.

    Raises:
        InvalidRangeError: If start is after end.
    """
    first = to_day(start)
    last = to_day(end)
    if first > last:
        raise InvalidRangeError(first, last)

    return [first + timedelta(days=i) for i in range((last - first).days + 1)]
