"""Tests for the command-line interface and roster file handling."""

import json
from datetime import date

import pytest

from stablescheduler.cli import (
    calendar_filename,
    create_sample_people,
    export_calendars,
    load_roster,
    load_schedule,
    main,
    save_schedule,
)
from stablescheduler.domain.errors import RosterError
from stablescheduler.domain.models import DateRange, Person, Schedule, SchedulerConfig


@pytest.fixture
def roster_path(tmp_path):
    path = tmp_path / "riders.json"
    path.write_text(
        json.dumps({
            "people": [
                {"id": 1, "name": "Elin", "blocked_dates": ["2024-03-09"]},
                {"id": 2, "name": "Anne"},
                {"id": 3, "name": "Silvia"},
            ]
        }),
        encoding="utf-8",
    )
    return path


class TestRosterFiles:
    """Tests for loading and saving JSON files."""

    def test_load_roster_object(self, roster_path):
        people = load_roster(roster_path)
        assert [p.id for p in people] == [1, 2, 3]
        assert people[0].blocked_dates == {date(2024, 3, 9)}
        assert people[1].blocked_dates == set()

    def test_load_roster_list(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text('[{"id": "a", "name": "Hedda"}]', encoding="utf-8")
        people = load_roster(path)
        assert people[0].id == "a"
        assert people[0].name == "Hedda"

    def test_duplicate_ids_rejected(self, tmp_path):
        path = tmp_path / "dup.json"
        path.write_text('[{"id": 1, "name": "A"}, {"id": 1, "name": "B"}]', encoding="utf-8")
        with pytest.raises(RosterError):
            load_roster(path)

    def test_missing_id_rejected(self, tmp_path):
        path = tmp_path / "noid.json"
        path.write_text('[{"name": "A"}]', encoding="utf-8")
        with pytest.raises(RosterError):
            load_roster(path)

    def test_invalid_json_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RosterError):
            load_roster(path)

    def test_missing_file_rejected(self, tmp_path):
        with pytest.raises(RosterError):
            load_roster(tmp_path / "nope.json")

    def test_schedule_save_and_load(self, tmp_path):
        schedule = Schedule({"2024-03-01": 1, "2024-03-02": None})
        path = tmp_path / "plan.json"
        save_schedule(schedule, path)
        assert load_schedule(path) == schedule

    def test_sample_people(self):
        date_range = DateRange(date(2024, 3, 1), date(2024, 3, 31))
        people = create_sample_people(8, date_range)
        assert len(people) == 8
        assert people[0].name == "Elin"
        assert people[6].name == "Elin2"
        assert all(date_range.contains(d) for p in people for d in p.blocked_dates)


class TestCalendarExport:
    """Tests for per-person calendar files."""

    def test_filename_includes_id(self):
        assert calendar_filename(Person(id=4, name="Hedda Hansen")) == "4_Hedda_Hansen_schedule.ics"

    def test_filename_with_empty_name(self):
        assert calendar_filename(Person(id=7, name="")) == "7_schedule.ics"

    def test_filename_has_no_path_separators(self):
        assert calendar_filename(Person(id="a/b", name="x")) == "a_b_x_schedule.ics"

    def test_same_name_does_not_overwrite(self, tmp_path):
        people = [Person(id=1, name="Elin"), Person(id=2, name="Elin")]
        schedule = Schedule({"2024-03-05": 1, "2024-03-06": 2, "2024-03-07": 1})

        written = export_calendars(schedule, people, tmp_path, SchedulerConfig())

        assert sorted(p.name for p in written) == [
            "1_Elin_schedule.ics",
            "2_Elin_schedule.ics",
        ]
        assert (tmp_path / "1_Elin_schedule.ics").read_bytes().count(b"BEGIN:VEVENT") == 2
        assert (tmp_path / "2_Elin_schedule.ics").read_bytes().count(b"BEGIN:VEVENT") == 1


class TestMain:
    """Tests for the CLI entry point."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_demo(self, capsys):
        assert main(["demo", "--count", "4", "--seed", "1"]) == 0
        assert "DUTY ROSTER" in capsys.readouterr().out

    def test_generate_writes_outputs(self, roster_path, tmp_path, capsys):
        plan = tmp_path / "plan.json"
        calendars = tmp_path / "calendars"
        pdf = tmp_path / "plan.pdf"

        code = main([
            "generate",
            "--roster", str(roster_path),
            "--start", "2024-03-01",
            "--end", "2024-03-31",
            "--seed", "3",
            "--output", str(plan),
            "--ics-dir", str(calendars),
            "--pdf", str(pdf),
        ])

        assert code == 0
        assert "Validation: PASSED" in capsys.readouterr().out
        assert len(load_schedule(plan)) == 31
        assert sorted(p.name for p in calendars.iterdir()) == [
            "1_Elin_schedule.ics",
            "2_Anne_schedule.ics",
            "3_Silvia_schedule.ics",
        ]
        assert pdf.read_bytes().startswith(b"%PDF")

    def test_generate_is_reproducible(self, roster_path, tmp_path):
        paths = [tmp_path / "a.json", tmp_path / "b.json"]
        for path in paths:
            main([
                "generate", "--roster", str(roster_path),
                "--start", "2024-03-01", "--end", "2024-03-31",
                "--seed", "5", "--output", str(path),
            ])
        assert load_schedule(paths[0]) == load_schedule(paths[1])

    def test_invalid_range_exits_with_error(self, roster_path, capsys):
        code = main([
            "generate", "--roster", str(roster_path),
            "--start", "2024-03-31", "--end", "2024-03-01",
        ])
        assert code == 2
        assert "Error" in capsys.readouterr().err

    def test_start_without_end_is_an_error(self, roster_path, capsys):
        code = main(["generate", "--roster", str(roster_path), "--start", "2024-03-01"])
        assert code == 2
        assert "--start and --end" in capsys.readouterr().err

    def test_override_updates_saved_schedule(self, roster_path, tmp_path, capsys):
        plan = tmp_path / "plan.json"
        save_schedule(Schedule({"2024-03-05": 1, "2024-03-06": 2}), plan)

        code = main([
            "override", "--roster", str(roster_path),
            "--schedule", str(plan), "--date", "2024-03-05",
        ])

        assert code == 0
        assert load_schedule(plan).get("2024-03-05") == 2
        assert load_schedule(plan).get("2024-03-06") == 2
        assert "Elin -> Anne" in capsys.readouterr().out

    def test_export_single_person(self, roster_path, tmp_path):
        plan = tmp_path / "plan.json"
        output = tmp_path / "anne.ics"
        save_schedule(
            Schedule({"2024-03-05": 1, "2024-03-06": 2, "2024-03-07": 2}), plan
        )

        code = main([
            "export", "--roster", str(roster_path), "--schedule", str(plan),
            "--output", str(output), "--person", "2", "--title", "Vakt",
        ])

        content = output.read_bytes().decode("utf-8")
        assert code == 0
        assert content.count("BEGIN:VEVENT") == 2
        assert "SUMMARY:Vakt\r\n" in content
        assert "UID:2024-03-06-2@stablescheduler" in content

    def test_export_unknown_person(self, roster_path, tmp_path, capsys):
        plan = tmp_path / "plan.json"
        save_schedule(Schedule({"2024-03-05": 1}), plan)

        code = main([
            "export", "--roster", str(roster_path), "--schedule", str(plan),
            "--output", str(tmp_path / "x.ics"), "--person", "42",
        ])
        assert code == 2
        assert "42" in capsys.readouterr().err
