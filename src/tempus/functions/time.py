"""
The ``time::*`` function library.

Each function takes already-typed positional arguments and returns
``Result[Value]``:

- ``Ok(value)`` for a real result;
- ``Ok(NONE)`` when an argument has the wrong variant or the arithmetic
  cannot be represented (the soft null never aborts evaluation);
- ``Err(InvalidArgumentsError)`` only for a user-correctable argument, which
  in this library means an unknown ``time::group`` unit.

Field extractors take an optional timestamp and fall back to the current
instant when it is omitted (``None``), which is not the same as passing
``NONE``.

All calendar arithmetic is in UTC.

Examples:
    >>> from tempus.core.values import Duration, Timestamp
    >>> ts = Timestamp.from_iso("2023-06-15T10:20:30Z")
    >>> year(ts)
    Ok(Number(value=2023))
    >>> str(floor(ts, Duration.of(hours=1)).unwrap())
    '2023-06-15T10:00:00Z'
    >>> year(Text("2023"))
    Ok(NONE)

Tags:
    temporal-functions, query-language, truncation, calendar, tempus

Doc-Types:
    - API Reference
    - Query Function Reference
"""

from __future__ import annotations

from tempus.core.clock import get_clock
from tempus.core.errors import InvalidArgumentsError
from tempus.core.logging import get_logger
from tempus.core.result import Err, Ok, Result
from tempus.core.timestamps import format_offset
from tempus.core.values import (
    I64_MAX,
    I64_MIN,
    NONE,
    Duration,
    Number,
    Text,
    Timestamp,
    Value,
)
from tempus.functions import calendar
from tempus.functions.format import render
from tempus.functions.registry import register_function

logger = get_logger(__name__)

_GROUP_MESSAGE = (
    "The second argument must be a string, and can be one of "
    "'year', 'month', 'day', 'hour', 'minute', or 'second'."
)


def _timestamp_or_now(value: Value | None) -> Timestamp | None:
    """The timestamp to extract from: the argument, now if omitted, None if not a timestamp."""
    if value is None:
        return Timestamp()
    if isinstance(value, Timestamp):
        return value
    return None


# =============================================================================
# FIELD EXTRACTORS
# =============================================================================


@register_function("time::year", 0, 1)
def year(value: Value | None = None) -> Result[Value]:
    """Gregorian year of the timestamp."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.to_datetime().year))


@register_function("time::month", 0, 1)
def month(value: Value | None = None) -> Result[Value]:
    """Month of the year, 1-12."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.to_datetime().month))


@register_function("time::day", 0, 1)
def day(value: Value | None = None) -> Result[Value]:
    """Day of the month, 1-31."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.to_datetime().day))


@register_function("time::hour", 0, 1)
def hour(value: Value | None = None) -> Result[Value]:
    """Hour of the day, 0-23."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.to_datetime().hour))


@register_function("time::minute", 0, 1)
def minute(value: Value | None = None) -> Result[Value]:
    """Minute of the hour, 0-59."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.to_datetime().minute))


@register_function("time::second", 0, 1)
def second(value: Value | None = None) -> Result[Value]:
    """Second of the minute, 0-59."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.to_datetime().second))


@register_function("time::nano", 0, 1)
def nano(value: Value | None = None) -> Result[Value]:
    """Nanoseconds since the Unix epoch (negative before 1970)."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.nanos))


@register_function("time::unix", 0, 1)
def unix(value: Value | None = None) -> Result[Value]:
    """Whole seconds since the Unix epoch (negative before 1970)."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.unix_seconds))


@register_function("time::wday", 0, 1)
def wday(value: Value | None = None) -> Result[Value]:
    """ISO weekday, Monday = 1 through Sunday = 7."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.to_datetime().isoweekday()))


@register_function("time::week", 0, 1)
def week(value: Value | None = None) -> Result[Value]:
    """ISO-8601 week number, 1-53."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    _, number, _ = calendar.iso_week(ts)
    return Ok(Number(number))


@register_function("time::yday", 0, 1)
def yday(value: Value | None = None) -> Result[Value]:
    """Day of the year, 1-366."""
    ts = _timestamp_or_now(value)
    if ts is None:
        return Ok(NONE)
    return Ok(Number(ts.to_datetime().timetuple().tm_yday))


# =============================================================================
# TRUNCATION AND ROUNDING
# =============================================================================


def _stamp_and_span(name: str, value: Value, duration: Value) -> tuple[int, int] | None:
    """
    Epoch nanoseconds and span for truncation, or None when either argument
    has the wrong variant or cannot be represented as signed 64-bit nanoseconds.
    """
    if not isinstance(value, Timestamp) or not isinstance(duration, Duration):
        return None
    span = duration.to_elapsed()
    if span is None:
        logger.debug("duration_out_of_range", function=name, nanos=duration.nanos)
        return None
    if span <= 0:
        logger.debug("duration_not_positive", function=name, nanos=span)
        return None
    if not I64_MIN <= value.nanos <= I64_MAX:
        logger.debug("timestamp_out_of_range", function=name, nanos=value.nanos)
        return None
    return value.nanos, span


def _bounded(name: str, nanos: int) -> Value:
    if not I64_MIN <= nanos <= I64_MAX:
        logger.debug("truncation_overflow", function=name, nanos=nanos)
        return NONE
    return Timestamp(nanos)


@register_function("time::floor", 2, 2)
def floor(value: Value, duration: Value) -> Result[Value]:
    """Snap a timestamp down to a multiple of a duration since the epoch."""
    args = _stamp_and_span("time::floor", value, duration)
    if args is None:
        return Ok(NONE)
    stamp, span = args
    # Python's % is floor modulo, so pre-epoch instants move toward earlier time
    return Ok(_bounded("time::floor", stamp - stamp % span))


@register_function("time::round", 2, 2)
def round(value: Value, duration: Value) -> Result[Value]:
    """Snap a timestamp to the nearest multiple of a duration; ties go later."""
    args = _stamp_and_span("time::round", value, duration)
    if args is None:
        return Ok(NONE)
    stamp, span = args
    delta_down = stamp % span
    if delta_down == 0:
        return Ok(value)
    delta_up = span - delta_down
    if delta_up <= delta_down:
        return Ok(_bounded("time::round", stamp + delta_up))
    return Ok(_bounded("time::round", stamp - delta_down))


# =============================================================================
# CALENDAR GROUPING
# =============================================================================


@register_function("time::group", 2, 2)
def group(value: Value, unit: Value) -> Result[Value]:
    """Snap a timestamp down to the start of a calendar unit."""
    if not isinstance(value, Timestamp):
        return Ok(NONE)
    if not isinstance(unit, Text):
        return Ok(NONE)
    if unit.value not in calendar.GROUP_UNITS:
        error = InvalidArgumentsError("time::group", _GROUP_MESSAGE, allowed=calendar.GROUP_UNITS)
        return Err(error.with_context(argument=unit.value))
    return Ok(calendar.start_of(value, unit.value))


# =============================================================================
# ANCILLARY
# =============================================================================


@register_function("time::now", 0, 0)
def now() -> Result[Value]:
    """The current instant."""
    return Ok(Timestamp())


@register_function("time::timezone", 0, 0)
def timezone() -> Result[Value]:
    """The host's current UTC offset, e.g. ``+02:00``."""
    return Ok(Text(format_offset(get_clock().utc_offset())))


@register_function("time::format", 2, 2)
def format(value: Value, pattern: Value | str) -> Result[Value]:
    """Render a timestamp as text using strftime-style tokens."""
    if not isinstance(value, Timestamp):
        return Ok(NONE)
    if isinstance(pattern, Text):
        pattern = pattern.value
    if not isinstance(pattern, str):
        return Ok(NONE)
    return Ok(Text(render(value, pattern)))


__all__ = [
    "year",
    "month",
    "day",
    "hour",
    "minute",
    "second",
    "nano",
    "unix",
    "wday",
    "week",
    "yday",
    "floor",
    "round",
    "group",
    "now",
    "timezone",
    "format",
]
