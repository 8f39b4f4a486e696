"""
Room bookings.

Flattens meetings into RoomBooking values by joining
Meeting -> CourseInstance -> Course (title = catalog number) or
Meeting -> NonClassEvent -> NonClassParent (title = parent title),
and then the owner's Semester for term and calendar year.

Also builds the per-room availability listing used when picking a room.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from courseplanner.conflicts import exclude_owner, find_conflicts
from courseplanner.model import BookingQuery, Dataset, Room, RoomBooking

log = logging.getLogger(__name__)


@dataclass
class RoomAvailability:
    room: Room
    meeting_titles: List[str]

    @property
    def is_available(self) -> bool:
        return not self.meeting_titles


def build_room_bookings(dataset: Dataset) -> List[RoomBooking]:
    """
    Return one RoomBooking per meeting that has a room and a resolvable owner,
    in meeting order. Meetings that cannot be resolved are skipped.
    """
    courses = {c.id: c for c in dataset.courses}
    semesters = {s.id: s for s in dataset.semesters}
    instances = {ci.id: ci for ci in dataset.course_instances}
    events = {e.id: e for e in dataset.non_class_events}
    parents = {p.id: p for p in dataset.non_class_parents}
    rooms = {r.id: r for r in dataset.rooms}

    out: List[RoomBooking] = []
    for meeting in dataset.meetings:
        if not meeting.room_id:
            continue
        owner_id = meeting.owner_id
        if owner_id is None:
            log.debug("Meeting %s has no single owner, skipping", meeting.id)
            continue

        title: Optional[str] = None
        semester_id: Optional[str] = None
        if meeting.course_instance_id:
            instance = instances.get(meeting.course_instance_id)
            if instance is not None:
                course = courses.get(instance.course_id)
                title = course.catalog_number if course is not None else None
                semester_id = instance.semester_id
        else:
            event = events.get(meeting.non_class_event_id or "")
            if event is not None:
                parent = parents.get(event.non_class_parent_id)
                title = parent.title if parent is not None else None
                semester_id = event.semester_id

        semester = semesters.get(semester_id or "")
        if title is None or semester is None:
            log.debug("Meeting %s references missing rows, skipping", meeting.id)
            continue

        room = rooms.get(meeting.room_id)
        out.append(
            RoomBooking(
                day=meeting.day,
                room_id=meeting.room_id,
                term=semester.term,
                calendar_year=semester.calendar_year,
                start_time=meeting.start_time,
                end_time=meeting.end_time,
                title=title,
                owner_id=owner_id,
                room_name=room.name if room is not None else "",
            )
        )
    return out


def bookings_by_room(bookings: Iterable[RoomBooking]) -> Dict[str, List[RoomBooking]]:
    out: Dict[str, List[RoomBooking]] = {}
    for b in bookings:
        out.setdefault(b.room_id, []).append(b)
    return out


def room_availability(
    rooms: Iterable[Room],
    bookings: Iterable[RoomBooking],
    query: BookingQuery,
    exclude_owner_id: Optional[str] = None,
) -> List[RoomAvailability]:
    """
    List every room, sorted by campus then name, with the titles of bookings
    that overlap the requested day/term/year/time. query.room_id is ignored.

    exclude_owner_id hides the meetings of the instance/event being edited, so
    moving a meeting out of a room and back again does not report itself.
    """
    by_room = bookings_by_room(exclude_owner(bookings, exclude_owner_id))

    out: List[RoomAvailability] = []
    for room in sorted(rooms, key=lambda r: (r.campus, r.name)):
        room_query = BookingQuery(
            room_id=room.id,
            day=query.day,
            term=query.term,
            calendar_year=query.calendar_year,
            start_time=query.start_time,
            end_time=query.end_time,
        )
        conflicts = find_conflicts(by_room.get(room.id, []), room_query)
        out.append(RoomAvailability(room=room, meeting_titles=[b.title for b in conflicts]))
    return out
