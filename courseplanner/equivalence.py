"""
Course equivalence ("same as") resolution.

Cross-listed courses form one-level groups: a parent course and the children
whose same_as_id points at it. For display, every course in a group shows the
catalog numbers of the other members:

1. a course with children shows its children
2. a child with siblings shows its parent, then its siblings
3. a child without siblings shows its parent
4. anything else shows ''

The first matching rule wins. Chains deeper than one level are not followed;
find_hierarchy_violations() reports them instead.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from courseplanner.model import Course, CourseEquivalenceGroup

log = logging.getLogger(__name__)

SEPARATOR = ", "


def build_children_index(all_courses: Iterable[Course]) -> Dict[str, List[Course]]:
    """
    Map same_as_id -> child courses, preserving input order.
    """
    index: Dict[str, List[Course]] = {}
    for c in all_courses:
        if c.same_as_id:
            index.setdefault(c.same_as_id, []).append(c)
    return index


def build_id_index(all_courses: Iterable[Course]) -> Dict[str, Course]:
    return {c.id: c for c in all_courses}


def resolve_group(
    course: Course,
    all_courses: Sequence[Course],
    children_index: Optional[Mapping[str, List[Course]]] = None,
    id_index: Optional[Mapping[str, Course]] = None,
) -> CourseEquivalenceGroup:
    """
    Collect the children of `course` or, when it has none, its parent and
    siblings. Pass prebuilt indexes when resolving many courses at once.
    """
    if children_index is None:
        children_index = build_children_index(all_courses)

    children = list(children_index.get(course.id, []))
    if children or not course.same_as_id:
        return CourseEquivalenceGroup(course=course, children=children)

    if id_index is None:
        id_index = build_id_index(all_courses)
    parent = id_index.get(course.same_as_id)
    if parent is None:
        log.debug("Course %s points at unknown course %s", course.id, course.same_as_id)
    siblings = [c for c in children_index.get(course.same_as_id, []) if c.id != course.id]
    return CourseEquivalenceGroup(course=course, parent=parent, siblings=siblings)


def _join(courses: Iterable[Optional[Course]]) -> str:
    numbers = [c.catalog_number for c in courses if c is not None]
    return SEPARATOR.join(n for n in numbers if n)


def display_string(group: CourseEquivalenceGroup) -> str:
    if group.children:
        return _join(group.children)
    if group.course.same_as_id and group.siblings:
        return _join([group.parent, *group.siblings])
    if group.course.same_as_id:
        return _join([group.parent])
    return ""


def resolve_display_string(
    course: Course,
    all_courses: Sequence[Course],
    children_index: Optional[Mapping[str, List[Course]]] = None,
    id_index: Optional[Mapping[str, Course]] = None,
) -> str:
    """
    Return the cross-listing display value of `course`, e.g. 'AC 209A, CS 109A'.

    A same_as_id that points at a course missing from all_courses leaves the
    parent out of the result.
    """
    return display_string(resolve_group(course, all_courses, children_index, id_index))


def resolve_all(all_courses: Sequence[Course]) -> Dict[str, str]:
    """
    Resolve every course in one batch: course id -> display string.
    """
    children_index = build_children_index(all_courses)
    id_index = build_id_index(all_courses)
    return {
        c.id: resolve_display_string(c, all_courses, children_index, id_index)
        for c in all_courses
    }


def _get(item: Any, name: str) -> str:
    if isinstance(item, Mapping):
        value = item.get(name, "")
    else:
        value = getattr(item, name, "")
    return "" if value is None else str(value)


def deduplicate(courses: Iterable[Any]) -> List[str]:
    """
    Walk courses once and collect unique catalog numbers in order of first
    appearance: each course's own catalogNumber, then the numbers listed in
    its free-text sameAs field ('CS 50, AC 209A').

    Accepts mappings with catalogNumber/sameAs keys or objects with
    catalog_number/same_as attributes. Referenced numbers need not belong to
    any course in the input.
    """
    seen: set[str] = set()
    out: List[str] = []

    def add(number: str) -> None:
        number = number.strip()
        if number and number not in seen:
            seen.add(number)
            out.append(number)

    for item in courses:
        if isinstance(item, Mapping):
            own, same_as = _get(item, "catalogNumber"), _get(item, "sameAs")
        else:
            own, same_as = _get(item, "catalog_number"), _get(item, "same_as")
        add(own)
        for ref in same_as.split(SEPARATOR):
            add(ref)
    return out


def find_hierarchy_violations(all_courses: Sequence[Course]) -> List[str]:
    """
    Report rows that break the one-level same-as structure:
    - a course that points at itself
    - a course pointing at an id that does not exist
    - a course that is both a parent (has children) and a child
    The resolver does not depend on this; it is meant for load-time checks.
    """
    id_index = build_id_index(all_courses)
    children_index = build_children_index(all_courses)

    problems: List[str] = []
    for c in all_courses:
        if not c.same_as_id:
            continue
        if c.same_as_id == c.id:
            problems.append(f"{c.catalog_number} ({c.id}) is marked as the same as itself")
            continue
        if c.same_as_id not in id_index:
            problems.append(f"{c.catalog_number} ({c.id}) is the same as unknown course {c.same_as_id}")
            continue
        if children_index.get(c.id):
            problems.append(f"{c.catalog_number} ({c.id}) is both a parent and a child")
    return problems
