"""Exception types raised by the scheduling system.

Only input validation problems are raised. A day that cannot be staffed is
not an error: it is recorded as unassigned in the schedule.
"""


class StableSchedulerError(Exception):
    """Base class for all scheduler errors."""


class InvalidRangeError(StableSchedulerError, ValueError):
    """Raised when a date range starts after it ends."""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: start {start} is after end {end}")


class RosterError(StableSchedulerError):
    """Raised when roster or schedule data cannot be parsed."""
