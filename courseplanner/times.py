"""
Time-of-day helpers.

Meeting times arrive from the database export as 24 hour strings such as
'09:00', '13:30:00' or '19:15:40.328'. The engine compares them as minutes
since midnight; the CLI shows them in 12 hour form ('9:00 AM').
"""

from __future__ import annotations

import re

from courseplanner.model import TimeValue

_TIME_RE = re.compile(
    r"^(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)"
    r"(?::(?P<second>[0-5]\d)(?:\.(?P<millisecond>\d{1,6}))?)?$"
)


def to_minutes(value: TimeValue) -> int:
    """
    Convert 'HH:MM', 'HH:MM:SS' or 'HH:MM:SS.mmm' to minutes since midnight.
    Integers are taken to be minutes already. Seconds are truncated.
    Raises ValueError for invalid formats.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid time value: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 24 * 60:
            raise ValueError(f"Invalid time value: {value!r}")
        return value
    match = _TIME_RE.match(str(value).strip())
    if match is None:
        raise ValueError(f"Invalid time format: {value!r}")
    return int(match.group("hour")) * 60 + int(match.group("minute"))


def format_minutes(minutes: int) -> str:
    """
    Inverse of to_minutes for whole minutes: 570 -> '09:30'.
    """
    h, m = divmod(minutes, 60)
    return f"{h:02d}:{m:02d}"


def to_12_hour_display(value: TimeValue) -> str:
    """
    '09:00' -> '9:00 AM', '13:30:00' -> '1:30 PM', '00:15' -> '12:15 AM'.
    Strings already in 12 hour form only lose their leading zero.
    """
    if isinstance(value, str) and len(value.split()) > 1:
        return value.strip().lstrip("0")

    hour, minute = divmod(to_minutes(value), 60)
    period = "AM" if hour < 12 else "PM"
    if hour > 12:
        hour -= 12
    if hour == 0:
        hour = 12
    return f"{hour}:{minute:02d} {period}"


def to_24_hour(twelve_hour: str) -> str:
    """
    '04:32 AM' -> '04:32', '12:30 PM' -> '12:30', '12:00 AM' -> '00:00'.
    Raises ValueError for invalid formats.
    """
    parts = twelve_hour.strip().split()
    if len(parts) != 2 or parts[1].upper() not in ("AM", "PM"):
        raise ValueError(f"Invalid 12 hour time: {twelve_hour!r}")
    clock, period = parts[0], parts[1].upper()
    pieces = clock.split(":")
    if len(pieces) != 2:
        raise ValueError(f"Invalid 12 hour time: {twelve_hour!r}")
    try:
        hour = int(pieces[0])
        minute = int(pieces[1])
    except ValueError:
        raise ValueError(f"Invalid 12 hour time: {twelve_hour!r}") from None
    if not (1 <= hour <= 12 and 0 <= minute <= 59):
        raise ValueError(f"Invalid 12 hour time: {twelve_hour!r}")

    # midnight and noon
    if hour == 12 and period == "AM":
        hour = 0
    elif period == "PM" and hour != 12:
        hour += 12
    return f"{hour:02d}:{minute:02d}"
