"""
Epoch-nanosecond timestamp utilities (stdlib-only).

Shared primitives for reading the system clock and converting between
integer nanoseconds since the Unix epoch and ISO 8601 text. Python's
``datetime`` stops at microseconds, so the fractional second is carried
separately and re-attached here.

Features:
    - **utc_now_nanos():** Current instant as epoch nanoseconds
    - **to_iso8601() / from_iso8601():** Nanosecond-exact serialization round-trip
    - **to_datetime() / from_datetime():** Bridges to aware UTC ``datetime``
    - **format_offset():** ``+HH:MM`` rendering of a UTC offset

Tags:
    timestamps, utc, datetime, nanoseconds, iso8601, tempus, stdlib-only

Doc-Types:
    - API Reference
    - Utility Documentation

STDLIB ONLY - NO PYDANTIC.
"""

import re
import time
from datetime import UTC, datetime, timedelta

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MICRO = 1_000

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Range of the proleptic Gregorian calendar that ``datetime`` can represent
MIN_NANOS = (datetime(1, 1, 1, tzinfo=UTC) - EPOCH) // timedelta(microseconds=1) * NANOS_PER_MICRO
MAX_NANOS = (
    (datetime(9999, 12, 31, 23, 59, 59, 999999, tzinfo=UTC) - EPOCH) // timedelta(microseconds=1)
) * NANOS_PER_MICRO + 999

# Fractional seconds directly after the HH:MM:SS of an ISO 8601 time
_FRACTION = re.compile(r"(?<=\d\d:\d\d:\d\d)[.,](\d+)")


def utc_now_nanos() -> int:
    """Get the current instant as nanoseconds since the Unix epoch."""
    return time.time_ns()


def to_datetime(nanos: int) -> datetime:
    """Convert epoch nanoseconds to an aware UTC datetime (truncated to microseconds)."""
    return EPOCH + timedelta(microseconds=nanos // NANOS_PER_MICRO)


def from_datetime(dt: datetime, nanos: int | None = None) -> int:
    """
    Convert a datetime to epoch nanoseconds.

    Naive datetimes are taken to be UTC. When ``nanos`` is given it replaces
    the sub-second part of ``dt``.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    whole = dt.replace(microsecond=0) - EPOCH
    seconds = whole.days * 86400 + whole.seconds
    if nanos is None:
        nanos = dt.microsecond * NANOS_PER_MICRO
    return seconds * NANOS_PER_SECOND + nanos


def to_iso8601(nanos: int) -> str:
    """
    Render epoch nanoseconds as ISO 8601 text in UTC.

    The fraction is omitted when zero and otherwise printed with 3, 6 or 9
    digits, whichever is the shortest exact form.

    >>> to_iso8601(0)
    '1970-01-01T00:00:00Z'
    >>> to_iso8601(1_500_000_000)
    '1970-01-01T00:00:01.500Z'
    """
    dt = to_datetime(nanos)
    text = (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )
    return text + fraction(nanos % NANOS_PER_SECOND) + "Z"


def fraction(subsec: int) -> str:
    """Shortest exact ``.fff`` / ``.ffffff`` / ``.fffffffff`` form of a sub-second value."""
    if subsec == 0:
        return ""
    if subsec % 1_000_000 == 0:
        return f".{subsec // 1_000_000:03d}"
    if subsec % 1_000 == 0:
        return f".{subsec // 1_000:06d}"
    return f".{subsec:09d}"


def from_iso8601(text: str) -> int:
    """
    Parse ISO 8601 text to epoch nanoseconds.

    Accepts up to nine fractional digits, a ``Z`` suffix or a numeric
    offset; text without an offset is taken to be UTC.

    Raises:
        ValueError: If the text is not a valid ISO 8601 date or datetime.
    """
    text = text.strip()
    subsec = 0
    match = _FRACTION.search(text)
    if match:
        digits = match.group(1)
        if len(digits) > 9:
            raise ValueError(f"Fractional seconds beyond nanosecond precision: {text!r}")
        subsec = int(digits.ljust(9, "0"))
        text = text[: match.start()] + text[match.end() :]
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is not None:
        try:
            dt = dt.astimezone(UTC)
        except OverflowError as e:
            raise ValueError(f"Datetime out of range in UTC: {text!r}") from e
    return from_datetime(dt, subsec)


def format_offset(offset: timedelta | None) -> str:
    """
    Render a UTC offset as ``+HH:MM`` (``+HH:MM:SS`` when seconds are present).

    >>> format_offset(timedelta(hours=-5, minutes=-30))
    '-05:30'
    """
    if offset is None:
        offset = timedelta(0)
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}"
    if seconds:
        text += f":{seconds:02d}"
    return text


def local_offset() -> timedelta:
    """Get the host's current offset from UTC."""
    return datetime.now().astimezone().utcoffset() or timedelta(0)


__all__ = [
    "NANOS_PER_SECOND",
    "EPOCH",
    "MIN_NANOS",
    "MAX_NANOS",
    "utc_now_nanos",
    "to_datetime",
    "from_datetime",
    "to_iso8601",
    "fraction",
    "from_iso8601",
    "format_offset",
    "local_offset",
]
