"""
Loading exported rows from disk.

The surrounding service exports its tables as JSON arrays into one directory:

    courses.json, semesters.json, course_instances.json,
    non_class_parents.json, non_class_events.json, meetings.json, rooms.json

Keys use the service's camelCase column names (sameAsId, academicYear,
startTime, ...). This module turns them into model objects.

Loading is deliberately defensive: a missing or corrupt file yields no rows
and a broken row is skipped, both with a warning, never a crash.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, TypeVar

from courseplanner.calendar_math import parse_term
from courseplanner.equivalence import find_hierarchy_violations
from courseplanner.model import (
    Course,
    CourseInstance,
    Dataset,
    Meeting,
    NonClassEvent,
    NonClassParent,
    Room,
    Semester,
    parse_day,
)

log = logging.getLogger(__name__)

T = TypeVar("T")


def default_data_dir() -> Path:
    """
    Return the default directory holding the exported JSON rows.

    A function instead of a constant so tests can point elsewhere.
    """
    return Path(__file__).resolve().parent / "data"


def _load_rows(path: Path) -> list[dict[str, Any]]:
    """
    Load a JSON array of objects. Missing file -> [].
    Invalid JSON or a non-list payload -> [] and a warning.
    """
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        log.warning("Could not read %s: %s", path, exc)
        return []
    if not isinstance(data, list):
        log.warning("Expected a JSON array in %s, ignoring it", path)
        return []
    return [row for row in data if isinstance(row, dict)]


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _req_str(row: dict[str, Any], key: str) -> str:
    value = _opt_str(row[key])
    if value is None:
        raise ValueError(f"empty {key}")
    return value


def course_from_row(row: dict[str, Any]) -> Course:
    return Course(
        id=_req_str(row, "id"),
        prefix=str(row.get("prefix") or "").strip(),
        number=str(row.get("number") or "").strip(),
        same_as_id=_opt_str(row.get("sameAsId")),
        title=str(row.get("title") or "").strip(),
    )


def semester_from_row(row: dict[str, Any]) -> Semester:
    return Semester(
        id=_req_str(row, "id"),
        academic_year=int(row["academicYear"]),
        term=parse_term(row["term"]),
    )


def course_instance_from_row(row: dict[str, Any]) -> CourseInstance:
    return CourseInstance(
        id=_req_str(row, "id"),
        course_id=_req_str(row, "courseId"),
        semester_id=_req_str(row, "semesterId"),
    )


def non_class_parent_from_row(row: dict[str, Any]) -> NonClassParent:
    return NonClassParent(id=_req_str(row, "id"), title=str(row.get("title") or "").strip())


def non_class_event_from_row(row: dict[str, Any]) -> NonClassEvent:
    return NonClassEvent(
        id=_req_str(row, "id"),
        non_class_parent_id=_req_str(row, "nonClassParentId"),
        semester_id=_req_str(row, "semesterId"),
    )


def meeting_from_row(row: dict[str, Any]) -> Meeting:
    return Meeting(
        id=_req_str(row, "id"),
        day=parse_day(row["day"]),
        start_time=_req_str(row, "startTime"),
        end_time=_req_str(row, "endTime"),
        room_id=_opt_str(row.get("roomId")),
        course_instance_id=_opt_str(row.get("courseInstanceId")),
        non_class_event_id=_opt_str(row.get("nonClassEventId")),
    )


def room_from_row(row: dict[str, Any]) -> Room:
    capacity = row.get("capacity")
    return Room(
        id=_req_str(row, "id"),
        name=str(row.get("name") or "").strip(),
        campus=str(row.get("campus") or "").strip(),
        capacity=int(capacity) if capacity not in (None, "") else None,
    )


def _convert(path: Path, convert: Callable[[dict[str, Any]], T]) -> List[T]:
    out: List[T] = []
    for i, row in enumerate(_load_rows(path)):
        try:
            out.append(convert(row))
        except (KeyError, ValueError, TypeError) as exc:
            log.warning("Skipping row %d of %s: %s", i, path.name, exc)
    return out


def load_dataset(data_dir: str | Path | None = None) -> Dataset:
    """
    Load every exported table from data_dir (default: default_data_dir()).
    """
    base = Path(data_dir) if data_dir is not None else default_data_dir()

    dataset = Dataset(
        courses=_convert(base / "courses.json", course_from_row),
        semesters=_convert(base / "semesters.json", semester_from_row),
        course_instances=_convert(base / "course_instances.json", course_instance_from_row),
        non_class_parents=_convert(base / "non_class_parents.json", non_class_parent_from_row),
        non_class_events=_convert(base / "non_class_events.json", non_class_event_from_row),
        meetings=_convert(base / "meetings.json", meeting_from_row),
        rooms=_convert(base / "rooms.json", room_from_row),
    )

    for problem in find_hierarchy_violations(dataset.courses):
        log.warning("Course data: %s", problem)

    return dataset
