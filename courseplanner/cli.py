"""
CLI (Command Line Interface).

Thin front end over the engine. Loads the exported rows once and runs one of:

    courseplanner semesters <year> [--count N]
    courseplanner same-as
    courseplanner check-room <room_id> <day> <term> <calendar_year> <start> <end>
    courseplanner rooms <day> <term> <calendar_year> <start> <end>
    courseplanner conflicts

Every command accepts --data-dir to read rows from another directory.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from courseplanner.bookings import build_room_bookings, room_availability
from courseplanner.calendar_math import current_academic_year, parse_term, term_title
from courseplanner.conflicts import describe_conflicts, exclude_owner, find_conflicts, find_double_bookings
from courseplanner.equivalence import resolve_all
from courseplanner.model import BookingQuery, Dataset, parse_day
from courseplanner.semesters import NUM_SEMESTERS, generate_sequence
from courseplanner.storage import load_dataset
from courseplanner.times import to_12_hour_display, to_minutes

console = Console()


def _setup_logging(verbose: bool) -> None:
    # Only the package logger; warnings go to stderr so stdout stays parseable
    logger = logging.getLogger("courseplanner")
    logger.handlers[:] = [RichHandler(console=Console(stderr=True), show_path=False)]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _build_query(args: argparse.Namespace, room_id: str | None) -> BookingQuery:
    """
    Turn positional slot arguments into a BookingQuery.
    Raises ValueError with a readable message for bad input.
    """
    query = BookingQuery(
        room_id=room_id,
        day=parse_day(args.day),
        term=parse_term(args.term),
        calendar_year=args.calendar_year,
        start_time=args.start.strip(),
        end_time=args.end.strip(),
    )
    if to_minutes(query.start_time) >= to_minutes(query.end_time):
        raise ValueError("Start time must be before end time")
    return query


def _cmd_semesters(args: argparse.Namespace) -> int:
    """
    Print the multi-year plan columns starting at the given academic year.
    """
    start = args.year if args.year is not None else current_academic_year()
    if args.count < 0:
        print("Please provide a non-negative count.")
        return 1

    table = Table(box=box.SIMPLE)
    table.add_column("Key")
    table.add_column("Term")
    table.add_column("Academic year", justify="right")
    table.add_column("Calendar year", justify="right")
    for info in generate_sequence(start, args.count):
        table.add_row(info.key, term_title(info.term), str(info.academic_year), str(info.calendar_year))
    console.print(table)
    return 0


def _cmd_same_as(args: argparse.Namespace, dataset: Dataset) -> int:
    """
    Print every course with its resolved cross-listing.
    """
    if not dataset.courses:
        print("No courses found.")
        return 0

    resolved = resolve_all(dataset.courses)
    table = Table(box=box.SIMPLE)
    table.add_column("Course")
    table.add_column("Same as")
    for course in sorted(dataset.courses, key=lambda c: c.catalog_number):
        table.add_row(course.catalog_number, resolved[course.id])
    console.print(table)
    return 0


def _cmd_check_room(args: argparse.Namespace, dataset: Dataset) -> int:
    """
    Check whether a room is free for the requested slot.
    Exit code 1 and the conflict message when it is not.
    """
    try:
        query = _build_query(args, args.room_id.strip())
    except ValueError as exc:
        print(f"Invalid request: {exc}")
        return 1

    bookings = exclude_owner(build_room_bookings(dataset), args.exclude)
    conflicts = find_conflicts(bookings, query)
    if not conflicts:
        print(
            f"Room {query.room_id} is available on {query.day.value} from "
            f"{to_12_hour_display(query.start_time)} to {to_12_hour_display(query.end_time)}."
        )
        return 0

    room_names = {r.id: r.name for r in dataset.rooms}
    print(describe_conflicts(query, conflicts, room_names.get(query.room_id or "")))
    return 1


def _cmd_rooms(args: argparse.Namespace, dataset: Dataset) -> int:
    """
    Print every room with the meetings that overlap the requested slot.
    """
    try:
        query = _build_query(args, None)
    except ValueError as exc:
        print(f"Invalid request: {exc}")
        return 1

    if not dataset.rooms:
        print("No rooms found.")
        return 0

    listing = room_availability(dataset.rooms, build_room_bookings(dataset), query, args.exclude)
    table = Table(box=box.SIMPLE)
    table.add_column("Campus")
    table.add_column("Room")
    table.add_column("Capacity", justify="right")
    table.add_column("Booked for")
    for entry in listing:
        capacity = "" if entry.room.capacity is None else str(entry.room.capacity)
        table.add_row(entry.room.campus, entry.room.name, capacity, ", ".join(entry.meeting_titles))
    console.print(table)
    return 0


def _cmd_conflicts(args: argparse.Namespace, dataset: Dataset) -> int:
    """
    Print all double-booked rooms in the data set.
    """
    pairs = find_double_bookings(build_room_bookings(dataset))
    if not pairs:
        print("No conflicts found.")
        return 0

    print(f"Conflicts found: {len(pairs)}")
    for a, b in pairs:
        room = a.room_name or a.room_id
        print(
            f"- {term_title(a.term)} {a.calendar_year} {a.day.value} {room}: "
            f"{a.title} {a.start_time}-{a.end_time}  <->  {b.title} {b.start_time}-{b.end_time}"
        )
    return 0


def _add_slot_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("day", type=str, help="Weekday (MON..FRI)")
    p.add_argument("term", type=str, help="FALL or SPRING")
    p.add_argument("calendar_year", type=int, help="Calendar year of the term (e.g. 2020 for Fall of AY 2021)")
    p.add_argument("start", type=str, help="Start time, 24 hour (e.g. 09:00)")
    p.add_argument("end", type=str, help="End time, 24 hour (e.g. 10:30)")
    p.add_argument("--exclude", type=str, default=None, help="Ignore meetings of this course instance / event id")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="courseplanner", description="Course planner scheduling checks")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory with the exported JSON rows")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_sem = sub.add_parser("semesters", help="List multi-year plan semesters")
    p_sem.add_argument("year", type=int, nargs="?", default=None, help="Starting academic year (default: current)")
    p_sem.add_argument("--count", type=int, default=NUM_SEMESTERS, help="Number of semesters")

    sub.add_parser("same-as", help="Show cross-listed courses")

    p_check = sub.add_parser("check-room", help="Check whether a room is free")
    p_check.add_argument("room_id", type=str, help="Room id")
    _add_slot_arguments(p_check)

    p_rooms = sub.add_parser("rooms", help="Show room availability for a time slot")
    _add_slot_arguments(p_rooms)

    sub.add_parser("conflicts", help="Show double-booked rooms")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == "semesters":
        raise SystemExit(_cmd_semesters(args))

    dataset = load_dataset(args.data_dir)

    if args.command == "same-as":
        raise SystemExit(_cmd_same_as(args, dataset))
    if args.command == "check-room":
        raise SystemExit(_cmd_check_room(args, dataset))
    if args.command == "rooms":
        raise SystemExit(_cmd_rooms(args, dataset))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args, dataset))

    raise SystemExit(2)
