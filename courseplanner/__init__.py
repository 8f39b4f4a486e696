"""
courseplanner: scheduling consistency checks for academic course planning.

The engine modules (calendar_math, semesters, conflicts, bookings,
equivalence) are pure functions over already-loaded rows.
"""

from courseplanner.calendar_math import calendar_year_of
from courseplanner.conflicts import find_conflicts, overlaps
from courseplanner.equivalence import deduplicate, resolve_display_string
from courseplanner.semesters import generate_sequence

__all__ = [
    "calendar_year_of",
    "deduplicate",
    "find_conflicts",
    "generate_sequence",
    "overlaps",
    "resolve_display_string",
]
