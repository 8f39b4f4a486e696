"""
Conflict detection.

Given room bookings, detect the ones that collide with a requested slot.
Two bookings conflict when they share room, day, term and calendar year and
their half-open time ranges [start, end) overlap:
    start < other_end AND other_start < end
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from courseplanner.model import BookingQuery, RoomBooking, TimeValue
from courseplanner.times import to_12_hour_display, to_minutes

log = logging.getLogger(__name__)


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # Zero-length ranges never overlap anything
    if a_start >= a_end or b_start >= b_end:
        return False
    return a_start < b_end and b_start < a_end


def _parse_range(start: TimeValue, end: TimeValue) -> Optional[Tuple[int, int]]:
    try:
        return to_minutes(start), to_minutes(end)
    except ValueError:
        return None


def _same_slot(booking: RoomBooking, query: BookingQuery) -> bool:
    return (
        booking.room_id == query.room_id
        and booking.day == query.day
        and booking.term == query.term
        and booking.calendar_year == query.calendar_year
    )


def find_conflicts(candidates: Iterable[RoomBooking], query: BookingQuery) -> List[RoomBooking]:
    """
    Return the candidates booked in the query's room, day, term and year whose
    times overlap the query range, in input order.

    The query itself is not excluded; callers re-checking an existing meeting
    drop it first (see exclude_owner).
    Raises ValueError if the query times are invalid.
    """
    q_start = to_minutes(query.start_time)
    q_end = to_minutes(query.end_time)

    out: List[RoomBooking] = []
    for booking in candidates:
        if not _same_slot(booking, query):
            continue
        parsed = _parse_range(booking.start_time, booking.end_time)
        if parsed is None:
            log.debug("Skipping booking %r with unreadable times", booking.title)
            continue
        if overlaps(parsed[0], parsed[1], q_start, q_end):
            out.append(booking)
    return out


def exclude_owner(candidates: Iterable[RoomBooking], owner_id: Optional[str]) -> List[RoomBooking]:
    """
    Drop the bookings of one course instance / non-class event.
    """
    if not owner_id:
        return list(candidates)
    return [b for b in candidates if b.owner_id != owner_id]


def conflict_titles(conflicts: Iterable[RoomBooking]) -> List[str]:
    return [b.title for b in conflicts]


def describe_conflicts(
    query: BookingQuery,
    conflicts: Sequence[RoomBooking],
    room_name: Optional[str] = None,
) -> str:
    """
    Build the validation message shown when a room cannot be booked, e.g.

        Room Pierce 209 is not available on WED from 9:00 AM to 11:00 AM
        - conflicts with: AM 10, CS 226

    Returns '' when there is nothing to report.
    """
    if not conflicts:
        return ""
    name = room_name or (conflicts[0].room_name if conflicts[0].room_name else query.room_id)
    return (
        f"Room {name} is not available on {query.day.value} "
        f"from {to_12_hour_display(query.start_time)} to {to_12_hour_display(query.end_time)}"
        f" - conflicts with: {', '.join(conflict_titles(conflicts))}"
    )


def find_double_bookings(bookings: Sequence[RoomBooking]) -> List[Tuple[RoomBooking, RoomBooking]]:
    """
    Find overlapping booking pairs (A,B) in the same room, day, term and year.
    Each pair appears once (i<j), ordered by i then j.
    """
    parsed: List[Tuple[int, int, RoomBooking]] = []
    for booking in bookings:
        times = _parse_range(booking.start_time, booking.end_time)
        if times is None:
            log.debug("Skipping booking %r with unreadable times", booking.title)
            continue
        parsed.append((times[0], times[1], booking))

    pairs: List[Tuple[RoomBooking, RoomBooking]] = []
    # O(n^2) is fine for a semester's worth of meetings
    for i in range(len(parsed)):
        s1, e1, b1 = parsed[i]
        for j in range(i + 1, len(parsed)):
            s2, e2, b2 = parsed[j]
            if (b1.room_id, b1.day, b1.term, b1.calendar_year) != (b2.room_id, b2.day, b2.term, b2.calendar_year):
                continue
            if overlaps(s1, e1, s2, e2):
                pairs.append((b1, b2))
    return pairs
