"""Tests for the text summary and PDF roster output."""

from datetime import date

import pytest

from stablescheduler.domain.models import FairnessCounters, Person, Schedule
from stablescheduler.output.pdf_generator import PDFGenerator
from stablescheduler.output.summary_generator import UNASSIGNED_LABEL, SummaryGenerator


@pytest.fixture
def people():
    return [Person(id=1, name="Elin"), Person(id=2, name="Anne")]


@pytest.fixture
def schedule():
    return Schedule({
        "2024-02-28": 1,
        "2024-02-29": 2,
        "2024-03-01": 1,
        "2024-03-02": 2,
        "2024-03-03": None,
    })


class TestSummaryGenerator:
    """Tests for SummaryGenerator."""

    def test_header_and_months(self, schedule, people):
        text = SummaryGenerator().generate_to_string(schedule, people)
        assert "DUTY ROSTER 2024-02-28 - 2024-03-03" in text
        assert "February 2024" in text
        assert "March 2024" in text
        assert text.index("February 2024") < text.index("March 2024")

    def test_weekend_days_marked(self, schedule, people):
        lines = SummaryGenerator().generate_to_string(schedule, people).splitlines()
        friday = [line for line in lines if "2024-03-01" in line][0]
        wednesday = [line for line in lines if "2024-02-28" in line][0]
        assert friday.startswith("*")
        assert wednesday.startswith(" ")
        assert friday.endswith("Elin")

    def test_counts_recomputed_from_schedule(self, schedule, people):
        lines = SummaryGenerator().generate_to_string(schedule, people).splitlines()
        elin = [line for line in lines if line.startswith("Elin")][0]
        anne = [line for line in lines if line.startswith("Anne")][0]
        assert elin.split()[1:] == ["2", "0"]
        assert anne.split()[1:] == ["2", "1"]

    def test_supplied_counters_used(self, schedule, people):
        counters = {1: FairnessCounters(9, 4), 2: FairnessCounters(0, 0)}
        text = SummaryGenerator().generate_to_string(schedule, people, counters)
        elin = [line for line in text.splitlines() if line.startswith("Elin")][0]
        assert elin.split()[1:] == ["9", "4"]

    def test_unassigned_days_listed(self, schedule, people):
        text = SummaryGenerator().generate_to_string(schedule, people)
        assert UNASSIGNED_LABEL in text
        assert "Unassigned days: 1" in text
        assert "2024-03-03 (Sunday)" in text

    def test_person_missing_from_roster(self, people):
        schedule = Schedule({"2024-03-05": 7})
        text = SummaryGenerator().generate_to_string(schedule, people)
        assert "7 (not on roster)" in text

    def test_empty_schedule(self, people):
        text = SummaryGenerator().generate_to_string(Schedule(), people)
        assert "DUTY ROSTER (empty)" in text
        assert "Unassigned days: 0" in text

    def test_generate_writes_file(self, schedule, people, tmp_path):
        path = tmp_path / "summary.txt"
        content = SummaryGenerator().generate(schedule, people, path)
        assert path.read_text(encoding="utf-8") == content


class TestPDFGenerator:
    """Tests for PDFGenerator."""

    def test_generate_to_buffer(self, schedule, people):
        buffer = PDFGenerator().generate_to_buffer(schedule, people)
        assert buffer.getvalue().startswith(b"%PDF")

    def test_empty_schedule_still_renders(self, people):
        buffer = PDFGenerator().generate_to_buffer(Schedule(), people)
        assert buffer.getvalue().startswith(b"%PDF")

    def test_generate_writes_file(self, schedule, people, tmp_path):
        path = tmp_path / "roster.pdf"
        PDFGenerator(title="Vakter").generate(schedule, people, path)
        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")

    def test_full_month_fits_page(self, people):
        days = {date(2024, 1, d).isoformat(): 1 + d % 2 for d in range(1, 32)}
        buffer = PDFGenerator().generate_to_buffer(Schedule(days), people)
        assert len(buffer.getvalue()) > 0
