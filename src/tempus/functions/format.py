"""
strftime-style rendering of timestamps.

Python's ``datetime.strftime`` stops at microseconds and its handling of
unknown directives depends on the platform C library, so tokens are
rendered here directly from the timestamp's UTC fields.

Supported tokens::

    Date     %Y %C %y %m %b %h %B %d %e %a %A %w %u %U %W %G %g %V %j
             %D %x %F %v
    Time     %H %k %I %l %P %p %M %S %f %.f %.3f %.6f %.9f %3f %6f %9f
             %R %T %X %r
    Other    %c %s %Z %z %:z %+ %t %n %%

Numeric tokens accept a padding modifier: ``%-d`` (none), ``%_d`` (spaces),
``%0e`` (zeros). Anything else starting with ``%`` is copied through
unchanged.

>>> from tempus.core.values import Timestamp
>>> render(Timestamp.from_iso("2023-06-15T10:20:30.5Z"), "%a %-d %b %Y %H:%M:%S%.f")
'Thu 15 Jun 2023 10:20:30.500'
"""

from __future__ import annotations

import re
from datetime import datetime

from tempus.core.timestamps import fraction
from tempus.core.values import Timestamp

_TOKEN = re.compile(r"%(?P<pad>[-_0])?(?P<spec>\.?[369]?f|:z|.)", re.DOTALL)

_SHORT_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_LONG_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_SHORT_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_LONG_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_COMPOSITES = {
    "D": "%m/%d/%y",
    "x": "%m/%d/%y",
    "F": "%Y-%m-%d",
    "v": "%e-%b-%Y",
    "R": "%H:%M",
    "T": "%H:%M:%S",
    "X": "%H:%M:%S",
    "r": "%I:%M:%S %p",
    "c": "%a %b %e %H:%M:%S %Y",
    "+": "%Y-%m-%dT%H:%M:%S%.f+00:00",
}

_LITERALS = {
    "Z": "UTC",
    "z": "+0000",
    ":z": "+00:00",
    "t": "\t",
    "n": "\n",
    "%": "%",
}


def _numeric(dt: datetime, ts: Timestamp, spec: str) -> tuple[int, int, str] | None:
    """(value, width, default fill) for a numeric token, or None."""
    weekday = dt.weekday()  # Monday = 0
    yday = dt.timetuple().tm_yday
    hour12 = dt.hour % 12 or 12
    match spec:
        case "Y":
            return dt.year, 4, "0"
        case "C":
            return dt.year // 100, 2, "0"
        case "y":
            return dt.year % 100, 2, "0"
        case "m":
            return dt.month, 2, "0"
        case "d":
            return dt.day, 2, "0"
        case "e":
            return dt.day, 2, " "
        case "H":
            return dt.hour, 2, "0"
        case "k":
            return dt.hour, 2, " "
        case "I":
            return hour12, 2, "0"
        case "l":
            return hour12, 2, " "
        case "M":
            return dt.minute, 2, "0"
        case "S":
            return dt.second, 2, "0"
        case "j":
            return yday, 3, "0"
        case "w":
            return (weekday + 1) % 7, 1, "0"
        case "u":
            return weekday + 1, 1, "0"
        case "U":
            return (yday + 6 - (weekday + 1) % 7) // 7, 2, "0"
        case "W":
            return (yday + 6 - weekday) // 7, 2, "0"
        case "G":
            return dt.isocalendar().year, 4, "0"
        case "g":
            return dt.isocalendar().year % 100, 2, "0"
        case "V":
            return dt.isocalendar().week, 2, "0"
        case "s":
            return ts.unix_seconds, 0, "0"
    return None


def _fractional(subsec: int, spec: str) -> str | None:
    match spec:
        case "f" | "9f":
            return f"{subsec:09d}"
        case "3f":
            return f"{subsec // 1_000_000:03d}"
        case "6f":
            return f"{subsec // 1_000:06d}"
        case ".f":
            return fraction(subsec)
        case ".3f" | ".6f" | ".9f":
            return "." + _fractional(subsec, spec[1:])
    return None


def _textual(dt: datetime, spec: str) -> str | None:
    match spec:
        case "a":
            return _SHORT_DAYS[dt.weekday()]
        case "A":
            return _LONG_DAYS[dt.weekday()]
        case "b" | "h":
            return _SHORT_MONTHS[dt.month - 1]
        case "B":
            return _LONG_MONTHS[dt.month - 1]
        case "p":
            return "AM" if dt.hour < 12 else "PM"
        case "P":
            return "am" if dt.hour < 12 else "pm"
    return _LITERALS.get(spec)


def _token(ts: Timestamp, dt: datetime, pad: str | None, spec: str) -> str | None:
    numeric = _numeric(dt, ts, spec)
    if numeric is not None:
        value, width, fill = numeric
        if pad == "-":
            return str(value)
        if pad is not None:
            fill = " " if pad == "_" else "0"
        return str(value).rjust(width, fill)
    # Padding modifiers only apply to numeric tokens
    if pad is not None:
        return None
    if spec in _COMPOSITES:
        return render(ts, _COMPOSITES[spec])
    text = _fractional(ts.subsec_nanos, spec)
    if text is not None:
        return text
    return _textual(dt, spec)


def render(ts: Timestamp, pattern: str) -> str:
    """Render ``ts`` in UTC according to ``pattern``."""
    dt = ts.to_datetime()
    out: list[str] = []
    position = 0
    for match in _TOKEN.finditer(pattern):
        out.append(pattern[position : match.start()])
        text = _token(ts, dt, match.group("pad"), match.group("spec"))
        out.append(match.group(0) if text is None else text)
        position = match.end()
    out.append(pattern[position:])
    return "".join(out)


__all__ = ["render"]
