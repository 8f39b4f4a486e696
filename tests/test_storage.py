"""
Unit tests for loading exported rows.

Storage contract:
- Missing file -> no rows
- Invalid JSON / non-list payload -> no rows
- Broken rows are skipped, good rows are kept
"""

import json
import tempfile
import unittest
from pathlib import Path

from courseplanner.model import Day, Term
from courseplanner.storage import load_dataset


def write(dir_path: Path, name: str, payload: object) -> None:
    (dir_path / name).write_text(json.dumps(payload), encoding="utf-8")


class TestStorage(unittest.TestCase):
    def test_missing_directory_gives_empty_dataset(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            ds = load_dataset(Path(d) / "missing")
            self.assertEqual(ds.courses, [])
            self.assertEqual(ds.meetings, [])

    def test_loads_camel_case_rows(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d)
            write(p, "courses.json", [
                {"id": "c1", "prefix": "CS", "number": "50", "sameAsId": None},
                {"id": "c2", "prefix": "AC", "number": "209A", "sameAsId": "c1"},
            ])
            write(p, "semesters.json", [{"id": "s1", "academicYear": "2021", "term": "FALL"}])
            write(p, "meetings.json", [{
                "id": "m1", "day": "wed", "startTime": "09:00:00", "endTime": "10:15:00",
                "roomId": "r1", "courseInstanceId": "ci1", "nonClassEventId": None,
            }])
            write(p, "rooms.json", [{"id": "r1", "name": "Pierce 209", "campus": "Cambridge", "capacity": 40}])

            ds = load_dataset(p)
            self.assertEqual([c.catalog_number for c in ds.courses], ["CS 50", "AC 209A"])
            self.assertEqual(ds.courses[1].same_as_id, "c1")
            self.assertEqual(ds.semesters[0].academic_year, 2021)
            self.assertEqual(ds.semesters[0].term, Term.FALL)
            self.assertEqual(ds.meetings[0].day, Day.WED)
            self.assertEqual(ds.meetings[0].owner_id, "ci1")
            self.assertEqual(ds.rooms[0].capacity, 40)

    def test_corrupt_file_gives_no_rows(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d)
            (p / "courses.json").write_text("{not json", encoding="utf-8")
            write(p, "rooms.json", {"id": "r1"})
            with self.assertLogs("courseplanner.storage", level="WARNING"):
                ds = load_dataset(p)
            self.assertEqual(ds.courses, [])
            self.assertEqual(ds.rooms, [])

    def test_bad_rows_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d)
            write(p, "semesters.json", [
                {"id": "s1", "academicYear": 2021, "term": "SUMMER"},
                {"id": "s2", "term": "FALL"},
                {"id": "s3", "academicYear": 2022, "term": "spring"},
            ])
            with self.assertLogs("courseplanner.storage", level="WARNING") as logs:
                ds = load_dataset(p)
            self.assertEqual([s.id for s in ds.semesters], ["s3"])
            self.assertEqual(len(logs.records), 2)

    def test_hierarchy_problems_are_logged(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d)
            write(p, "courses.json", [{"id": "c1", "prefix": "CS", "number": "1", "sameAsId": "ghost"}])
            with self.assertLogs("courseplanner.storage", level="WARNING") as logs:
                ds = load_dataset(p)
            self.assertEqual(len(ds.courses), 1)
            self.assertIn("ghost", logs.output[0])


if __name__ == "__main__":
    unittest.main()
