"""
Calendar boundaries in UTC.

``boundary()`` is the single place a calendar date is turned back into a
Timestamp. Working purely in UTC there are no DST gaps or overlaps, so every
valid (year, month, day, hour, minute, second) maps to exactly one instant;
fields taken from an existing timestamp are always valid, which makes a
failure here a library bug rather than bad input.
"""

from __future__ import annotations

from datetime import UTC, datetime

from tempus.core.errors import InvariantError
from tempus.core.values import Timestamp

GROUP_UNITS: tuple[str, ...] = ("year", "month", "day", "hour", "minute", "second")


def boundary(
    year: int,
    month: int = 1,
    day: int = 1,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> Timestamp:
    """
    The instant at the start of the given UTC calendar second.

    Raises:
        InvariantError: If the fields do not name a real calendar second.
    """
    try:
        dt = datetime(year, month, day, hour, minute, second, tzinfo=UTC)
    except (ValueError, OverflowError) as e:
        raise InvariantError(
            f"Calendar fields do not form a valid UTC instant: "
            f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}",
            cause=e,
        ) from e
    return Timestamp.from_datetime(dt)


def start_of(ts: Timestamp, unit: str) -> Timestamp:
    """
    Snap a timestamp down to the start of a calendar unit.

    >>> str(start_of(Timestamp.from_iso("2023-06-15T10:20:30Z"), "month"))
    '2023-06-01T00:00:00Z'

    Raises:
        KeyError: If ``unit`` is not one of ``GROUP_UNITS``.
    """
    dt = ts.to_datetime()
    fields = (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)
    if unit not in GROUP_UNITS:
        raise KeyError(unit)
    # Keep the fields down to and including the unit; the rest take their minimum
    return boundary(*fields[: GROUP_UNITS.index(unit) + 1])


def iso_week(ts: Timestamp) -> tuple[int, int, int]:
    """ISO-8601 (year, week, weekday) with Monday = 1."""
    iso = ts.to_datetime().isocalendar()
    return iso.year, iso.week, iso.weekday


__all__ = [
    "GROUP_UNITS",
    "boundary",
    "start_of",
    "iso_week",
]
