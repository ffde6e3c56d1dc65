"""Time sources for the ticker.

The ticker never calls ``datetime.now()`` itself; it asks a clock. Production
wiring uses SystemClock, tests drive a ManualClock by hand.
"""

from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable


def ensure_utc(t: datetime) -> datetime:
    """Return ``t`` as an aware datetime, treating naive values as UTC."""
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Clock backed by the system's wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock:
    """Clock whose time only changes when the caller says so.

    Example:
        clock = ManualClock(datetime(2000, 1, 1, tzinfo=timezone.utc))
        ticker = Ticker(clock=clock)
        ticker.poll()
        clock.advance(timedelta(seconds=10))
        ticker.poll()
    """

    def __init__(self, start: datetime):
        self._now = ensure_utc(start)

    def now(self) -> datetime:
        return self._now

    def set(self, t: datetime) -> None:
        """Jump to an absolute time. Going backwards is allowed."""
        self._now = ensure_utc(t)

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock by ``delta`` and return the new time."""
        self._now = self._now + delta
        return self._now
