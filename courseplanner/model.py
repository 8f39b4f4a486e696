"""
Central data model definitions used across the project.

This module defines the canonical structure of the rows handed to the engine
(courses, semesters, meetings, ...) and of the values it derives from them,
so that:
- all modules share the same field names
- loaded rows and derived values stay consistent between storage, engine and CLI
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

# Time-of-day values: minutes since midnight, or an "HH:MM[:SS[.mmm]]" string
TimeValue = Union[int, str]


class Term(str, Enum):
    """
    The two scheduling periods of an academic year.
    """

    FALL = "FALL"
    SPRING = "SPRING"

    def __str__(self) -> str:
        return self.value


class Day(str, Enum):
    """
    Weekdays on which a meeting can be scheduled.
    """

    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"

    def __str__(self) -> str:
        return self.value


def parse_day(value: str | Day) -> Day:
    """
    Convert 'wed' / 'WED' / Day.WED to Day.WED.
    Raises ValueError for unknown days.
    """
    if isinstance(value, Day):
        return value
    text = str(value).strip().upper()
    try:
        return Day(text)
    except ValueError:
        raise ValueError(f"Invalid day: {value!r}") from None


@dataclass(frozen=True)
class Course:
    """
    Represents one catalog course.

    same_as_id points at the "parent" course of a cross-listing group.
    """

    id: str
    prefix: str
    number: str
    same_as_id: Optional[str] = None
    title: str = ""

    @property
    def catalog_number(self) -> str:
        # e.g. "CS 50"
        return f"{self.prefix or ''} {self.number or ''}".strip()


@dataclass(frozen=True)
class Semester:
    id: str
    academic_year: int
    term: Term

    @property
    def calendar_year(self) -> int:
        from courseplanner.calendar_math import calendar_year_of

        return calendar_year_of(self.academic_year, self.term)


@dataclass(frozen=True)
class CourseInstance:
    """
    One offering of a Course in a Semester.
    """

    id: str
    course_id: str
    semester_id: str


@dataclass(frozen=True)
class NonClassParent:
    """
    A group of non-class events (e.g. a reading group) that supplies their title.
    """

    id: str
    title: str


@dataclass(frozen=True)
class NonClassEvent:
    id: str
    non_class_parent_id: str
    semester_id: str


@dataclass(frozen=True)
class Meeting:
    """
    Represents one weekly meeting of a course instance or non-class event.

    Exactly one of course_instance_id / non_class_event_id is expected to be set.
    """

    id: str
    day: Day
    start_time: str
    end_time: str
    room_id: Optional[str] = None
    course_instance_id: Optional[str] = None
    non_class_event_id: Optional[str] = None

    @property
    def owner_id(self) -> Optional[str]:
        if self.course_instance_id and self.non_class_event_id:
            return None
        return self.course_instance_id or self.non_class_event_id


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    campus: str = ""
    capacity: Optional[int] = None


@dataclass(frozen=True)
class RoomBooking:
    """
    A meeting flattened together with its room, semester and display title.

    title is the catalog number for class meetings and the parent event's
    title for non-class meetings.
    """

    day: Day
    room_id: str
    term: Term
    calendar_year: int
    start_time: TimeValue
    end_time: TimeValue
    title: str
    owner_id: str
    room_name: str = ""


@dataclass(frozen=True)
class BookingQuery:
    """
    A requested (or existing) slot to check against the current bookings.
    """

    room_id: Optional[str]
    day: Day
    term: Term
    calendar_year: int
    start_time: TimeValue
    end_time: TimeValue


@dataclass(frozen=True)
class SemesterInfo:
    """
    One column of the multi-year plan table.
    """

    term: Term
    academic_year: int
    calendar_year: int
    key: str


@dataclass
class CourseEquivalenceGroup:
    """
    The cross-listing neighbourhood of one course, computed on demand.
    """

    course: Course
    children: List[Course] = field(default_factory=list)
    parent: Optional[Course] = None
    siblings: List[Course] = field(default_factory=list)


@dataclass
class Dataset:
    """
    All rows loaded for one run, as handed over by the service layer.
    """

    courses: List[Course] = field(default_factory=list)
    semesters: List[Semester] = field(default_factory=list)
    course_instances: List[CourseInstance] = field(default_factory=list)
    non_class_parents: List[NonClassParent] = field(default_factory=list)
    non_class_events: List[NonClassEvent] = field(default_factory=list)
    meetings: List[Meeting] = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)
