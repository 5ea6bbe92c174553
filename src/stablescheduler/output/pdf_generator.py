"""PDF generation for printable duty rosters.

This module creates a printable roster with one page per month, listing
each day, its weekday and the person on duty.
"""

from collections import defaultdict
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from stablescheduler.domain.models import Person, Schedule, people_map
from stablescheduler.domain.policies import DefaultWeekendPolicy, WeekendPolicy

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "header": (0.02, 0.59, 0.41),  # Emerald
    "weekend_row": (0.98, 0.98, 0.98),  # Near white
    "weekend_text": (0.86, 0.15, 0.15),  # Red
    "assigned": (0.02, 0.59, 0.41),  # Emerald
    "unassigned": (0.86, 0.15, 0.15),  # Red
    "grid": (0.9, 0.9, 0.92),  # Light gray
}


class PDFGenerator:
    """Generates printable roster PDFs.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(schedule, people, "roster.pdf")
    """

    def __init__(
        self,
        title: str = "Stallvaktplan",
        unassigned_label: str = "Ikke tildelt",
        policy: Optional[WeekendPolicy] = None,
        page_width: float = 595,  # A4 portrait width
        page_height: float = 842,  # A4 portrait height
        margin: float = 40,
    ):
        self.title = title
        self.unassigned_label = unassigned_label
        self.policy = policy or DefaultWeekendPolicy()
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        schedule: Schedule,
        people: list[Person],
        output_path: Union[str, Path],
    ) -> None:
        """Generate the roster PDF and save it to a file."""
        canvas = self._import_canvas()
        c = canvas.Canvas(str(output_path), pagesize=(self.page_width, self.page_height))
        self._draw_month_pages(c, schedule, people)
        c.save()

    def generate_to_buffer(self, schedule: Schedule, people: list[Person]) -> BytesIO:
        """Generate the roster PDF and return it as a bytes buffer."""
        canvas = self._import_canvas()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        self._draw_month_pages(c, schedule, people)
        c.save()
        buffer.seek(0)
        return buffer

    @staticmethod
    def _import_canvas():
        try:
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )
        return canvas

    def _draw_month_pages(self, c, schedule: Schedule, people: list[Person]) -> None:
        """Draw one page per calendar month in the schedule."""
        people_by_id = people_map(people)

        by_month = defaultdict(list)
        for day in schedule.days:
            by_month[(day.year, day.month)].append(day)

        if not by_month:
            self._draw_header(c, self.title)
            c.showPage()
            return

        for key in sorted(by_month):
            days = by_month[key]
            self._draw_header(c, f"{self.title} - {days[0].strftime('%B %Y')}")

            row_height = 22
            y = self.page_height - self.margin - 70
            self._draw_column_titles(c, y)

            for day in days:
                y -= row_height
                self._draw_day_row(c, schedule, people_by_id, day, y, row_height)

            c.setFont("Helvetica", 8)
            c.setFillColorRGB(0.6, 0.6, 0.6)
            c.drawRightString(
                self.page_width - self.margin,
                self.margin - 10,
                "Generated by Stable Scheduler",
            )
            c.showPage()

    def _draw_header(self, c, text: str) -> None:
        """Draw page title."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 18)
        c.drawString(self.margin, self.page_height - self.margin - 20, text)

        c.setStrokeColorRGB(*COLORS["header"])
        c.setLineWidth(2)
        y = self.page_height - self.margin - 30
        c.line(self.margin, y, self.page_width - self.margin, y)

    def _draw_column_titles(self, c, y: float) -> None:
        """Draw the table header row."""
        width = self.page_width - 2 * self.margin
        c.setFillColorRGB(*COLORS["header"])
        c.rect(self.margin, y - 6, width, 22, fill=1, stroke=0)

        c.setFillColorRGB(1, 1, 1)
        c.setFont("Helvetica-Bold", 10)
        c.drawString(self.margin + 8, y, "Date")
        c.drawString(self.margin + 110, y, "Day")
        c.drawString(self.margin + 220, y, "On duty")

    def _draw_day_row(
        self,
        c,
        schedule: Schedule,
        people_by_id: dict,
        day,
        y: float,
        height: float,
    ) -> None:
        """Draw a single day's row."""
        width = self.page_width - 2 * self.margin
        is_weekend = self.policy.is_weekend_window(day)

        if is_weekend:
            c.setFillColorRGB(*COLORS["weekend_row"])
            c.rect(self.margin, y - 6, width, height, fill=1, stroke=0)

        c.setStrokeColorRGB(*COLORS["grid"])
        c.setLineWidth(0.5)
        c.line(self.margin, y - 6, self.margin + width, y - 6)

        date_color = COLORS["weekend_text"] if is_weekend else (0.2, 0.25, 0.3)
        c.setFillColorRGB(*date_color)
        c.setFont("Helvetica", 10)
        c.drawString(self.margin + 8, y, day.isoformat())

        c.setFillColorRGB(0.42, 0.45, 0.5)
        c.drawString(self.margin + 110, y, day.strftime("%A"))

        person = people_by_id.get(schedule.get(day))
        if person is not None:
            c.setFillColorRGB(*COLORS["assigned"])
            c.setFont("Helvetica-Bold", 10)
            c.drawString(self.margin + 220, y, person.name[:40])
        else:
            c.setFillColorRGB(*COLORS["unassigned"])
            c.setFont("Helvetica", 10)
            c.drawString(self.margin + 220, y, self.unassigned_label)
