"""Tempus Core -- data model and ambient primitives shared by the functions.

Architecture::

    values.py          Tagged values (Timestamp, Duration, Text, Number, Bool, NONE)
    timestamps.py      Epoch-nanosecond helpers + ISO 8601 (stdlib-only)
    clock.py           Clock protocol, SystemClock, FixedClock, use_clock()
    errors.py          Structured error hierarchy (TempusError, InvalidArgumentsError)
    result.py          Result[T] envelope (Ok / Err)
    logging.py         structlog configuration
    settings.py        pydantic-settings TempusSettings
"""

from tempus.core.clock import Clock, FixedClock, SystemClock, get_clock, use_clock
from tempus.core.errors import (
    ErrorCategory,
    ErrorContext,
    InvalidArgumentsError,
    InvalidFunctionError,
    InvariantError,
    TempusError,
)
from tempus.core.result import Err, Ok, Result
from tempus.core.values import NONE, Absent, Bool, Duration, Number, Text, Timestamp, Value

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_clock",
    "use_clock",
    "ErrorCategory",
    "ErrorContext",
    "InvalidArgumentsError",
    "InvalidFunctionError",
    "InvariantError",
    "TempusError",
    "Err",
    "Ok",
    "Result",
    "NONE",
    "Absent",
    "Bool",
    "Duration",
    "Number",
    "Text",
    "Timestamp",
    "Value",
]
