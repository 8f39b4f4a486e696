"""
Semester sequencing for the multi-year plan.

generate_sequence() produces the ordered columns of the plan table:
FALL, SPRING, FALL, SPRING, ... starting with Fall of the given academic year.
"""

from __future__ import annotations

from typing import List

from courseplanner.calendar_math import calendar_year_of
from courseplanner.model import SemesterInfo, Term

PLAN_YEARS = 4
NUM_SEMESTERS = PLAN_YEARS * 2


def generate_sequence(starting_academic_year: int, count: int) -> List[SemesterInfo]:
    """
    Return `count` semesters starting with Fall of `starting_academic_year`.

    The academic year advances every two entries and key is
    '<academicYear>-<TERM>', unique within one sequence.
    count is expected to be >= 0; anything below yields an empty list.
    """
    out: List[SemesterInfo] = []
    for i in range(max(count, 0)):
        term = Term.FALL if i % 2 == 0 else Term.SPRING
        academic_year = starting_academic_year + i // 2
        out.append(
            SemesterInfo(
                term=term,
                academic_year=academic_year,
                calendar_year=calendar_year_of(academic_year, term),
                key=f"{academic_year}-{term.value}",
            )
        )
    return out


def semesters_from_year(starting_academic_year: int) -> List[SemesterInfo]:
    return generate_sequence(starting_academic_year, NUM_SEMESTERS)


def plan_years(starting_academic_year: int, years: int = PLAN_YEARS) -> List[int]:
    # academic years covered by a plan, e.g. 2021 -> [2021, 2022, 2023, 2024]
    return [starting_academic_year + offset for offset in range(max(years, 0))]
