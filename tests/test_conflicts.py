"""
Unit tests for conflict detection.

Definition used here:
- A conflict exists if two bookings share room, day, term and calendar year
  and their [start, end) ranges overlap.
- Touching endpoints (end == start) is NOT a conflict.
"""

import unittest

from courseplanner.conflicts import (
    conflict_titles,
    describe_conflicts,
    exclude_owner,
    find_conflicts,
    find_double_bookings,
    overlaps,
)
from courseplanner.model import BookingQuery, Day, RoomBooking, Term


def booking(title: str, start: str, end: str, room: str = "r1", day: Day = Day.WED, owner: str = "") -> RoomBooking:
    return RoomBooking(
        day=day,
        room_id=room,
        term=Term.FALL,
        calendar_year=2020,
        start_time=start,
        end_time=end,
        title=title,
        owner_id=owner or title,
    )


def query(start: str, end: str, room: str = "r1", day: Day = Day.WED) -> BookingQuery:
    return BookingQuery(room_id=room, day=day, term=Term.FALL, calendar_year=2020, start_time=start, end_time=end)


class TestOverlaps(unittest.TestCase):
    def test_adjacent_ranges_do_not_overlap(self) -> None:
        self.assertFalse(overlaps(10, 12, 9, 10))
        self.assertFalse(overlaps(10, 12, 12, 14))

    def test_partial_overlap(self) -> None:
        self.assertTrue(overlaps(10, 12, 11, 13))

    def test_identical_ranges_overlap(self) -> None:
        self.assertTrue(overlaps(10, 12, 10, 12))

    def test_containment_overlaps_both_ways(self) -> None:
        self.assertTrue(overlaps(8, 18, 10, 11))
        self.assertTrue(overlaps(10, 11, 8, 18))

    def test_zero_length_never_overlaps(self) -> None:
        self.assertFalse(overlaps(10, 10, 5, 15))
        self.assertFalse(overlaps(5, 15, 10, 10))
        self.assertFalse(overlaps(10, 10, 10, 10))


class TestFindConflicts(unittest.TestCase):
    def setUp(self) -> None:
        self.candidates = [
            booking("AM 10", "09:00", "10:00"),
            booking("CS 226", "10:30", "12:00"),
            booking("ES 100", "09:30", "11:00", room="r2"),
            booking("CS 50", "09:30", "11:00", day=Day.THU),
            booking("Reading group", "11:00", "12:00"),
            booking("AM 21a", "08:00", "09:00"),
        ]

    def test_matches_room_day_and_overlap(self) -> None:
        result = find_conflicts(self.candidates, query("09:00", "11:00"))
        self.assertEqual(conflict_titles(result), ["AM 10", "CS 226"])

    def test_other_term_or_year_ignored(self) -> None:
        other = [
            RoomBooking(Day.WED, "r1", Term.SPRING, 2020, "09:00", "10:00", "Spring", "s"),
            RoomBooking(Day.WED, "r1", Term.FALL, 2021, "09:00", "10:00", "Next fall", "n"),
        ]
        self.assertEqual(find_conflicts(other, query("09:00", "10:00")), [])

    def test_empty_candidates(self) -> None:
        self.assertEqual(find_conflicts([], query("09:00", "10:00")), [])

    def test_idempotent_and_order_preserving(self) -> None:
        q = query("08:30", "12:00")
        first = find_conflicts(self.candidates, q)
        second = find_conflicts(self.candidates, q)
        self.assertEqual(first, second)
        self.assertEqual(conflict_titles(first), ["AM 10", "CS 226", "Reading group", "AM 21a"])

    def test_removing_non_matching_candidate_keeps_result(self) -> None:
        q = query("09:00", "11:00")
        before = find_conflicts(self.candidates, q)
        trimmed = [b for b in self.candidates if b.title != "ES 100"]
        self.assertEqual(find_conflicts(trimmed, q), before)

    def test_removing_matching_candidate_removes_exactly_that_entry(self) -> None:
        q = query("09:00", "11:00")
        trimmed = [b for b in self.candidates if b.title != "AM 10"]
        self.assertEqual(conflict_titles(find_conflicts(trimmed, q)), ["CS 226"])

    def test_query_is_not_excluded_automatically(self) -> None:
        existing = booking("CS 226", "10:30", "12:00")
        self.assertEqual(find_conflicts([existing], query("10:30", "12:00")), [existing])

    def test_integer_minutes_accepted(self) -> None:
        b = booking("AM 10", "09:00", "10:00")
        self.assertEqual(find_conflicts([b], query(570, 600)), [b])  # type: ignore[arg-type]

    def test_unreadable_candidate_is_skipped(self) -> None:
        bad = booking("Broken", "soon", "later")
        self.assertEqual(find_conflicts([bad], query("09:00", "10:00")), [])

    def test_invalid_query_raises(self) -> None:
        with self.assertRaises(ValueError):
            find_conflicts(self.candidates, query("9am", "10:00"))


class TestConflictHelpers(unittest.TestCase):
    def test_exclude_owner(self) -> None:
        items = [booking("A", "09:00", "10:00", owner="ci-1"), booking("B", "09:00", "10:00", owner="ci-2")]
        self.assertEqual(conflict_titles(exclude_owner(items, "ci-1")), ["B"])
        self.assertEqual(exclude_owner(items, None), items)

    def test_describe_conflicts(self) -> None:
        conflicts = [booking("AM 10", "09:00", "10:00"), booking("CS 226", "10:30", "12:00")]
        msg = describe_conflicts(query("09:00", "11:00"), conflicts, room_name="Pierce 209")
        self.assertEqual(
            msg,
            "Room Pierce 209 is not available on WED from 9:00 AM to 11:00 AM - conflicts with: AM 10, CS 226",
        )

    def test_describe_no_conflicts_is_empty(self) -> None:
        self.assertEqual(describe_conflicts(query("09:00", "11:00"), []), "")

    def test_double_bookings(self) -> None:
        a = booking("A", "09:00", "10:00")
        b = booking("B", "09:30", "10:30")
        c = booking("C", "10:30", "11:00")
        d = booking("D", "09:00", "10:00", room="r2")
        self.assertEqual(find_double_bookings([a, b, c, d]), [(a, b)])

    def test_double_bookings_touching_is_not_conflict(self) -> None:
        a = booking("A", "09:00", "10:00")
        b = booking("B", "10:00", "11:00")
        self.assertEqual(find_double_bookings([a, b]), [])


if __name__ == "__main__":
    unittest.main()
