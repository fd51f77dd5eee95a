"""
Tagged values consumed and produced by the temporal functions.

Only the variants the time functions care about are modeled: ``Timestamp``,
``Duration``, ``Text``, ``Number``, ``Bool`` and the soft null ``Absent``
(exported as the singleton-like ``NONE``). Every value is an immutable,
slotted dataclass created fresh per call.

Omitting an optional argument is spelled ``None`` in Python and is distinct
from passing ``NONE``.

Architecture:
    ::

        Value = Timestamp | Duration | Text | Number | Bool | Absent

        Timestamp(nanos)   epoch nanoseconds, UTC, years 1-9999
        Duration(nanos)    non-negative nanoseconds
        Text(value)        str
        Number(value)      int | float
        Bool(value)        bool
        NONE               "no meaningful value"

Examples:
    >>> ts = Timestamp.from_iso("2023-06-15T10:20:30Z")
    >>> ts.to_datetime().year
    2023
    >>> Duration.of(hours=1).nanos
    3600000000000
    >>> str(NONE)
    'NONE'

Tags:
    value-object, tagged-union, timestamp, duration, tempus

Doc-Types:
    - API Reference
    - Data Model
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from tempus.core.clock import get_clock
from tempus.core.timestamps import (
    MAX_NANOS,
    MIN_NANOS,
    NANOS_PER_SECOND,
    from_datetime,
    from_iso8601,
    to_datetime,
    to_iso8601,
)

# Signed 64-bit nanosecond range used for elapsed-time arithmetic
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


def _now_nanos() -> int:
    return get_clock().now_nanos()


@dataclass(frozen=True, slots=True, order=True)
class Timestamp:
    """
    An instant in UTC with nanosecond resolution.

    ``Timestamp()`` is the current instant according to the active clock.

    Raises:
        ValueError: If the instant lies outside years 1-9999.
    """

    nanos: int = field(default_factory=_now_nanos)

    def __post_init__(self) -> None:
        if not MIN_NANOS <= self.nanos <= MAX_NANOS:
            raise ValueError(f"Timestamp out of range: {self.nanos} nanoseconds since epoch")

    @classmethod
    def from_datetime(cls, dt: datetime) -> Timestamp:
        """Create from a datetime; naive datetimes are taken as UTC."""
        return cls(from_datetime(dt))

    @classmethod
    def from_iso(cls, text: str) -> Timestamp:
        """Parse ISO 8601 text with up to nanosecond precision."""
        return cls(from_iso8601(text))

    @classmethod
    def from_parts(cls, seconds: int, nanos: int = 0) -> Timestamp:
        """Create from whole epoch seconds plus a nanosecond adjustment."""
        return cls(seconds * NANOS_PER_SECOND + nanos)

    def to_datetime(self) -> datetime:
        """Aware UTC datetime (microsecond precision)."""
        return to_datetime(self.nanos)

    @property
    def subsec_nanos(self) -> int:
        """Nanoseconds past the whole second, 0-999999999."""
        return self.nanos % NANOS_PER_SECOND

    @property
    def unix_seconds(self) -> int:
        """Whole seconds since the epoch, floored toward earlier time."""
        return self.nanos // NANOS_PER_SECOND

    def __str__(self) -> str:
        return to_iso8601(self.nanos)


@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """
    A non-negative span of elapsed time with nanosecond resolution.

    Raises:
        ValueError: If constructed with a negative span.
    """

    nanos: int = 0

    def __post_init__(self) -> None:
        if self.nanos < 0:
            raise ValueError(f"Duration cannot be negative: {self.nanos}")

    @classmethod
    def of(
        cls,
        *,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        millis: int = 0,
        micros: int = 0,
        nanos: int = 0,
    ) -> Duration:
        """Build a duration from whole units."""
        total = ((days * 24 + hours) * 60 + minutes) * 60 + seconds
        return cls(total * NANOS_PER_SECOND + millis * 1_000_000 + micros * 1_000 + nanos)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Duration:
        return cls(delta // timedelta(microseconds=1) * 1_000)

    def to_elapsed(self) -> int | None:
        """
        Signed elapsed nanoseconds, or ``None`` if the span exceeds the
        signed 64-bit nanosecond range.

        >>> Duration(2**63).to_elapsed() is None
        True
        """
        if self.nanos > I64_MAX:
            return None
        return self.nanos

    def to_timedelta(self) -> timedelta:
        """Elapsed time as a timedelta (truncated to microseconds)."""
        return timedelta(microseconds=self.nanos // 1_000)

    def __str__(self) -> str:
        return f"{self.nanos}ns"


@dataclass(frozen=True, slots=True)
class Text:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Number:
    value: int | float

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class Absent:
    """The soft null: a result with no meaningful value."""

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "NONE"

    def __repr__(self) -> str:
        return "NONE"


NONE = Absent()

Value = Timestamp | Duration | Text | Number | Bool | Absent


__all__ = [
    "I64_MIN",
    "I64_MAX",
    "Timestamp",
    "Duration",
    "Text",
    "Number",
    "Bool",
    "Absent",
    "NONE",
    "Value",
]
