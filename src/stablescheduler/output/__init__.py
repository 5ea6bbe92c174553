"""Output generation for schedules (iCalendar, PDF, text)."""

from stablescheduler.output.ical_generator import (
    ICalGenerator,
    build_events,
    escape_text,
    fold_line,
)
from stablescheduler.output.pdf_generator import PDFGenerator
from stablescheduler.output.summary_generator import SummaryGenerator

__all__ = [
    "ICalGenerator",
    "PDFGenerator",
    "SummaryGenerator",
    "build_events",
    "escape_text",
    "fold_line",
]
