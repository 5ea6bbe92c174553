"""iCalendar (.ics) export for duty schedules.

This module turns calendar events into an RFC 5545 VCALENDAR document:
- One all-day VEVENT per duty day
- TEXT values escaped for backslash, semicolon, comma and newline
- Content lines folded at 75 octets
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from stablescheduler.domain.models import (
    CalendarEvent,
    Person,
    PersonId,
    Schedule,
    people_map,
)

CRLF = "\r\n"
MAX_LINE_OCTETS = 75


def escape_text(text: Optional[str]) -> str:
    """Escape a TEXT property value.

    Backslash, semicolon, comma and newline are escaped in that order. A
    CRLF pair or a lone carriage return counts as one newline.
    """
    if not text:
        return ""
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\n", "\\n")
    )


def fold_line(line: str) -> str:
    """Fold a content line longer than 75 octets.

    The first segment holds up to 75 octets; each continuation is CRLF plus
    one space plus up to 74 octets. Multi-byte UTF-8 characters are never
    split, so a segment may come out shorter than the limit.
    """
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line

    segments = []
    current = ""
    current_octets = 0
    limit = MAX_LINE_OCTETS
    for char in line:
        octets = len(char.encode("utf-8"))
        if current_octets + octets > limit:
            segments.append(current)
            current = ""
            current_octets = 0
            limit = MAX_LINE_OCTETS - 1
        current += char
        current_octets += octets
    segments.append(current)

    return (CRLF + " ").join(segments)


def format_ical_date(value) -> str:
    """Format a date as YYYYMMDD."""
    return value.strftime("%Y%m%d")


def format_timestamp(value: datetime) -> str:
    """Format a datetime as a UTC YYYYMMDDTHHMMSSZ stamp."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y%m%dT%H%M%SZ")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_events(
    schedule: Schedule,
    people: list[Person],
    title: str,
    description: str = "",
    person_id: Optional[PersonId] = None,
) -> list[CalendarEvent]:
    """Build one event per assigned day.

    Unassigned days and days held by people missing from the roster produce
    no event.

    Args:
        schedule: Schedule to export.
        people: Roster used to resolve display names.
        title: Event title for every event.
        description: Event description for every event.
        person_id: If given, only that person's days are exported.

    Returns:
        Events in ascending date order.
    """
    people_by_id = people_map(people)
    events = []
    for day in schedule.days:
        assignee = schedule.get(day)
        if assignee is None or assignee not in people_by_id:
            continue
        if person_id is not None and assignee != person_id:
            continue
        events.append(
            CalendarEvent(
                date=day,
                person_id=assignee,
                display_name=people_by_id[assignee].name,
                title=title,
                description=description,
            )
        )
    return events


class ICalGenerator:
    """Generates VCALENDAR documents from calendar events.

    Example:
        >>> generator = ICalGenerator()
        >>> content = generator.generate_to_string(events)
        >>> generator.generate(events, "stallvakt.ics")
    """

    def __init__(
        self,
        prodid: str = "-//Stable Scheduler//EN",
        uid_domain: str = "stablescheduler",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize generator.

        Args:
            prodid: PRODID written in the calendar header.
            uid_domain: Domain part of each event UID.
            clock: Returns the current time for DTSTAMP. Defaults to UTC now.
        """
        self.prodid = prodid
        self.uid_domain = uid_domain
        self.clock = clock or _utc_now

    def generate(
        self,
        events: Iterable[CalendarEvent],
        output_path: Union[str, Path],
    ) -> str:
        """Serialize events and write them to a file.

        Returns:
            The generated document.
        """
        content = self.generate_to_string(events)
        # newline="" keeps the CRLF terminators untouched on every platform
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return content

    def generate_to_string(self, events: Iterable[CalendarEvent]) -> str:
        """Serialize events to a VCALENDAR document.

        All events share one DTSTAMP taken at the start of the call. The
        document has no trailing line break after END:VCALENDAR.
        """
        timestamp = format_timestamp(self.clock())

        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:{self.prodid}",
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
        ]
        for event in events:
            lines.extend(self._event_lines(event, timestamp))
        lines.append("END:VCALENDAR")

        return CRLF.join(fold_line(line) for line in lines)

    def _event_lines(self, event: CalendarEvent, timestamp: str) -> list[str]:
        """Content lines for one VEVENT, unfolded."""
        start = event.date
        end = start + timedelta(days=1)
        uid = f"{start.isoformat()}-{event.person_id}@{self.uid_domain}"

        return [
            "BEGIN:VEVENT",
            f"DTSTART;VALUE=DATE:{format_ical_date(start)}",
            f"DTEND;VALUE=DATE:{format_ical_date(end)}",
            f"DTSTAMP:{timestamp}",
            f"UID:{uid}",
            f"SUMMARY:{escape_text(event.title)}",
            f"DESCRIPTION:{escape_text(event.description)}",
            "STATUS:CONFIRMED",
            "END:VEVENT",
        ]
