"""
Academic year / calendar year / term conversions.

An academic year Y spans Fall in calendar year Y-1 and Spring in calendar
year Y; both terms are labelled with academic year Y.
"""

from __future__ import annotations

from datetime import date
from types import MappingProxyType
from typing import List, Optional

from courseplanner.model import Term

_TERM_TITLES = MappingProxyType({Term.FALL: "Fall", Term.SPRING: "Spring"})

# Terms that follow a given term inside the same academic year
_FUTURE_TERMS = MappingProxyType({Term.FALL: (Term.SPRING,), Term.SPRING: ()})

JUNE = 6


def calendar_year_of(academic_year: int, term: Term) -> int:
    return academic_year - 1 if term == Term.FALL else academic_year


def academic_year_of(calendar_year: int, term: Term) -> int:
    """
    Inverse of calendar_year_of: Fall 2020 belongs to academic year 2021.
    """
    return calendar_year + 1 if term == Term.FALL else calendar_year


def future_terms(term: Term) -> List[Term]:
    return list(_FUTURE_TERMS[term])


def term_title(term: Term) -> str:
    """
    Term.FALL -> 'Fall'
    """
    return _TERM_TITLES[term]


def parse_term(value: str | Term) -> Term:
    """
    Convert 'fall' / 'FALL' / Term.FALL to Term.FALL.
    Raises ValueError for unknown terms.
    """
    if isinstance(value, Term):
        return value
    try:
        return Term(str(value).strip().upper())
    except ValueError:
        raise ValueError(f"Invalid term: {value!r}") from None


def current_academic_year(today: Optional[date] = None) -> int:
    """
    Jan 1st - Jun 30th belongs to the academic year equal to the calendar year,
    Jul 1st - Dec 31st to the following one.
    """
    today = today or date.today()
    return today.year if today.month <= JUNE else today.year + 1
