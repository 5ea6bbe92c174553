"""Command-line interface for the Stable Scheduler duty roster tool."""

import argparse
import json
import logging
import re
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Union

from stablescheduler.domain.calendar import to_day
from stablescheduler.domain.errors import RosterError, StableSchedulerError
from stablescheduler.domain.models import (
    DateRange,
    Person,
    Schedule,
    SchedulerConfig,
)
from stablescheduler.output.ical_generator import ICalGenerator, build_events
from stablescheduler.output.pdf_generator import PDFGenerator
from stablescheduler.output.summary_generator import SummaryGenerator
from stablescheduler.scheduling.override import cycle_assignment
from stablescheduler.scheduling.scheduler import Scheduler
from stablescheduler.validation.validator import ScheduleValidator

logger = logging.getLogger(__name__)

SAMPLE_NAMES = ["Elin", "Anne", "Silvia", "Hedda", "Kristel", "Marion"]


def create_sample_people(
    count: int = 6,
    date_range: Optional[DateRange] = None,
) -> list[Person]:
    """Create sample riders for demos.

    Args:
        count: Number of people to create.
        date_range: Range used to sprinkle a few blocked dates. If None,
            nobody has blocked dates.
    """
    people = []
    days = date_range.days if date_range else []

    for i in range(count):
        name = SAMPLE_NAMES[i % len(SAMPLE_NAMES)]
        if i >= len(SAMPLE_NAMES):
            name = f"{name}{i // len(SAMPLE_NAMES) + 1}"

        # Some people are away on a few days
        blocked = {d for j, d in enumerate(days) if (j + i) % (i + 5) == 0}
        people.append(Person(id=i + 1, name=name, blocked_dates=blocked))

    return people


def load_roster(path: Union[str, Path]) -> list[Person]:
    """Load people from a JSON roster file.

    Accepts either ``{"people": [...]}`` or a bare list of person objects.
    """
    data = _read_json(path)
    entries = data.get("people") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise RosterError(f"{path}: expected a list of people")

    people = [Person.from_dict(entry) for entry in entries]
    ids = [p.id for p in people]
    if len(set(ids)) != len(ids):
        raise RosterError(f"{path}: duplicate person ids")
    return people


def load_schedule(path: Union[str, Path]) -> Schedule:
    """Load a schedule saved by :func:`save_schedule`."""
    data = _read_json(path)
    assignments = data.get("schedule") if isinstance(data, dict) else None
    if not isinstance(assignments, dict):
        raise RosterError(f"{path}: expected a 'schedule' object")
    return Schedule.from_dict(assignments)


def save_schedule(schedule: Schedule, path: Union[str, Path]) -> None:
    """Write a schedule as JSON."""
    Path(path).write_text(
        json.dumps({"schedule": schedule.to_dict()}, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


def _read_json(path: Union[str, Path]):
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise RosterError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RosterError(f"{path} is not valid JSON: {exc}") from exc


def _default_range() -> DateRange:
    today = date.today()
    return DateRange.for_month(today.year, today.month)


def _resolve_range(start: Optional[str], end: Optional[str]) -> DateRange:
    if start is None and end is None:
        return _default_range()
    if start is None or end is None:
        raise StableSchedulerError("--start and --end must be given together")
    return DateRange(to_day(start), to_day(end))


def _print_stats(stats: dict) -> None:
    print(f"  Days: {stats['total_days']}, assigned: {stats['assigned_days']}, "
          f"unassigned: {stats['unassigned_days']}")
    print(f"\n  {'Name':<20} {'Total':>6} {'Saturdays':>10}")
    for entry in stats["per_person"].values():
        print(f"  {entry['name'][:20]:<20} {entry['total']:>6} {entry['anchor']:>10}")
    for d in stats["unassigned_dates"]:
        print(f"  ! {d} ({d.strftime('%a')}): nobody available")


def _print_validation(result) -> None:
    if result.is_valid:
        print("\nValidation: PASSED")
    else:
        print(f"\nValidation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings[:3]:
            print(f"    - {warning}")
        if len(result.warnings) > 3:
            print(f"    ... and {len(result.warnings) - 3} more warnings")


def export_calendars(
    schedule: Schedule,
    people: list[Person],
    output_dir: Union[str, Path],
    config: SchedulerConfig,
) -> list[Path]:
    """Write one .ics file per person with at least one duty day."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    generator = ICalGenerator()

    written = []
    for person in people:
        events = build_events(
            schedule, people, config.event_title, config.event_description, person.id
        )
        if not events:
            continue
        path = output_dir / calendar_filename(person)
        generator.generate(events, path)
        written.append(path)
    return written


def calendar_filename(person: Person) -> str:
    """File name for a person's calendar, unique per roster id."""
    parts = [str(person.id)] + person.name.split()
    stem = re.sub(r"[^\w.-]+", "_", "_".join(parts))
    return f"{stem}_schedule.ics"


def run_demo(count: int = 6, seed: Optional[int] = None) -> None:
    """Run a demo schedule generation for the current month."""
    date_range = _default_range()
    people = create_sample_people(count, date_range)
    print(f"Generating demo roster for {count} people, "
          f"{date_range.start} to {date_range.end}...")

    scheduler = Scheduler(config=SchedulerConfig(seed=seed))
    result, stats = scheduler.generate_schedule_with_stats(date_range, people)

    print()
    print(SummaryGenerator(scheduler.policy).generate_to_string(
        result.schedule, people, result.counters
    ))

    validation = ScheduleValidator(scheduler.policy).validate(result, date_range, people)
    _print_validation(validation)


def run_generate(args: argparse.Namespace) -> None:
    """Generate a roster from a roster file."""
    people = load_roster(args.roster)
    date_range = _resolve_range(args.start, args.end)
    config = SchedulerConfig(
        event_title=args.title,
        event_description=args.description,
        seed=args.seed,
    )

    print(f"Generating roster for {len(people)} people, "
          f"{date_range.start} to {date_range.end}...")
    scheduler = Scheduler(config=config)
    result, stats = scheduler.generate_schedule_with_stats(date_range, people)
    _print_stats(stats)

    validation = ScheduleValidator(scheduler.policy).validate(result, date_range, people)
    _print_validation(validation)

    if args.output:
        save_schedule(result.schedule, args.output)
        print(f"\nSchedule saved: {args.output}")
    if args.ics_dir:
        for path in export_calendars(result.schedule, people, args.ics_dir, config):
            print(f"  Calendar written: {path}")
    if args.pdf:
        PDFGenerator(policy=scheduler.policy).generate(result.schedule, people, args.pdf)
        print(f"  PDF written: {args.pdf}")


def run_override(args: argparse.Namespace) -> None:
    """Cycle one day of a saved schedule to the next eligible person."""
    people = load_roster(args.roster)
    schedule = load_schedule(args.schedule)
    day = to_day(args.date)

    updated = cycle_assignment(schedule, day, people)
    save_schedule(updated, args.schedule)

    names = {p.id: p.name for p in people}
    before, after = schedule.get(day), updated.get(day)
    print(f"{day}: {names.get(before, before or 'unassigned')} -> {names.get(after, 'unassigned')}")


def run_export(args: argparse.Namespace) -> None:
    """Export a saved schedule as an .ics file."""
    people = load_roster(args.roster)
    schedule = load_schedule(args.schedule)
    person_id = _match_person_id(args.person, people) if args.person else None

    events = build_events(schedule, people, args.title, args.description, person_id)
    ICalGenerator().generate(events, args.output)
    print(f"Exported {len(events)} events to {args.output}")


def _match_person_id(raw: str, people: list[Person]):
    """Resolve a command-line id against roster ids, which may be ints."""
    for person in people:
        if str(person.id) == raw:
            return person.id
    raise RosterError(f"No person with id {raw!r} on the roster")


def _add_event_arguments(parser: argparse.ArgumentParser) -> None:
    defaults = SchedulerConfig()
    parser.add_argument(
        "--title",
        type=str,
        default=defaults.event_title,
        help=f"Calendar event title (default: {defaults.event_title})",
    )
    parser.add_argument(
        "--description",
        type=str,
        default=defaults.event_description,
        help="Calendar event description",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Stable Scheduler - Duty Roster Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                                 Demo roster for this month
  %(prog)s demo --count 8 --seed 1              Reproducible demo, 8 people

  %(prog)s generate --roster riders.json --start 2024-03-01 --end 2024-03-31 \\
      --output plan.json --ics-dir calendars --pdf plan.pdf

  %(prog)s override --roster riders.json --schedule plan.json --date 2024-03-09
  %(prog)s export --roster riders.json --schedule plan.json --output elin.ics --person 1
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every scheduling decision",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demo roster generation")
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=6,
        help="Number of people to generate (default: 6)",
    )
    demo_parser.add_argument(
        "--seed", "-s",
        type=int,
        help="Seed for tie-breaking (default: random)",
    )

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Generate a roster")
    generate_parser.add_argument("--roster", "-r", required=True, help="Roster JSON file")
    generate_parser.add_argument("--start", help="First day (YYYY-MM-DD)")
    generate_parser.add_argument("--end", help="Last day (YYYY-MM-DD)")
    generate_parser.add_argument(
        "--seed", "-s",
        type=int,
        help="Seed for tie-breaking (default: random)",
    )
    generate_parser.add_argument("--output", "-o", help="Save schedule JSON here")
    generate_parser.add_argument("--ics-dir", help="Write one .ics file per person here")
    generate_parser.add_argument("--pdf", help="Write a printable PDF roster")
    _add_event_arguments(generate_parser)

    # Override command
    override_parser = subparsers.add_parser(
        "override",
        help="Cycle one day of a saved schedule to the next person"
    )
    override_parser.add_argument("--roster", "-r", required=True, help="Roster JSON file")
    override_parser.add_argument("--schedule", required=True, help="Schedule JSON file")
    override_parser.add_argument("--date", "-d", required=True, help="Day to change")

    # Export command
    export_parser = subparsers.add_parser("export", help="Export a saved schedule as .ics")
    export_parser.add_argument("--roster", "-r", required=True, help="Roster JSON file")
    export_parser.add_argument("--schedule", required=True, help="Schedule JSON file")
    export_parser.add_argument("--output", "-o", required=True, help="Output .ics path")
    export_parser.add_argument("--person", "-p", help="Only export this person id")
    _add_event_arguments(export_parser)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        if args.command == "demo":
            run_demo(args.count, args.seed)
            return 0
        elif args.command == "generate":
            run_generate(args)
            return 0
        elif args.command == "override":
            run_override(args)
            return 0
        elif args.command == "export":
            run_export(args)
            return 0
        else:
            parser.print_help()
            return 1
    except StableSchedulerError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
