"""
Clock capability consumed by the temporal functions.

The only non-determinism in tempus is reading the current instant (``now``,
defaulted timestamp arguments) and the host's UTC offset (``timezone``).
Both go through the active ``Clock``, held in a ``ContextVar`` so an
override installed with ``use_clock()`` stays scoped to the current thread
or task.

Examples:
    >>> from tempus.core.clock import FixedClock, use_clock, get_clock
    >>> with use_clock(FixedClock(0)):
    ...     get_clock().now_nanos()
    0

Tags:
    clock, time-source, testing, contextvars, tempus

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import timedelta
from typing import Protocol, runtime_checkable

from tempus.core.timestamps import local_offset, utc_now_nanos


@runtime_checkable
class Clock(Protocol):
    """Source of the current instant and host UTC offset."""

    def now_nanos(self) -> int:
        """Return the current UTC instant as epoch nanoseconds."""
        ...

    def utc_offset(self) -> timedelta:
        """Return the host's current offset from UTC."""
        ...


class SystemClock:
    """Reads the operating system clock."""

    def now_nanos(self) -> int:
        return utc_now_nanos()

    def utc_offset(self) -> timedelta:
        return local_offset()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """A clock frozen at one instant, for reproducible evaluation and tests."""

    def __init__(self, nanos: int, offset: timedelta | None = None):
        self.nanos = nanos
        self.offset = offset if offset is not None else timedelta(0)

    def now_nanos(self) -> int:
        return self.nanos

    def utc_offset(self) -> timedelta:
        return self.offset

    def __repr__(self) -> str:
        return f"FixedClock({self.nanos!r}, offset={self.offset!r})"


_SYSTEM_CLOCK = SystemClock()
_active_clock: ContextVar[Clock] = ContextVar("tempus_clock", default=_SYSTEM_CLOCK)


def get_clock() -> Clock:
    """Get the clock active in the current context."""
    return _active_clock.get()


def set_clock(clock: Clock) -> Token[Clock]:
    """Install a clock for the current context. Returns a token for ``reset_clock``."""
    return _active_clock.set(clock)


def reset_clock(token: Token[Clock]) -> None:
    """Restore the clock that was active before ``set_clock``."""
    _active_clock.reset(token)


@contextmanager
def use_clock(clock: Clock) -> Iterator[Clock]:
    """Scope a clock override to a ``with`` block."""
    token = set_clock(clock)
    try:
        yield clock
    finally:
        reset_clock(token)


__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "get_clock",
    "set_clock",
    "reset_clock",
    "use_clock",
]
