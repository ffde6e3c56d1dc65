"""Boundary detection for periodic commands.

A Ticker owns a list of Commands. Each call to ``poll()`` reads the clock
once and, for every command whose step bucket changed since the previous
poll, invokes the command's handler with its position inside the current
interval:

    ticker = Ticker(clock=SystemClock())
    ticker.add(Command("log", timedelta(minutes=1), timedelta(minutes=15), LogHandler()))
    while True:
        ticker.poll()
        time.sleep(1)

Buckets are plain duration arithmetic from ZERO_TIME, so a 15 minute
interval starts at :00, :15, :30 and :45 regardless of the local timezone.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from timeboxer.clock import Clock, SystemClock, ensure_utc
from timeboxer.errors import CommandError

logger = logging.getLogger(__name__)

# Reference point for all buckets; also the "never polled" value of last_time.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def quantize(t: datetime, d: timedelta) -> datetime:
    """Truncate ``t`` down to a multiple of ``d`` measured from ZERO_TIME."""
    t = ensure_utc(t)
    return t - ((t - ZERO_TIME) % d)


class Handler(Protocol):
    """Side effect run when a command crosses a step boundary.

    Called with the index of the current step within the interval and the
    number of steps per interval. Return normally on success; raise
    (usually HandlerError) to report a failure. Handlers must not block
    indefinitely, the ticker has no way to time them out.
    """

    def __call__(self, step_index: int, step_count: int) -> None: ...


@dataclass(frozen=True)
class Command:
    """A periodic obligation: call ``handler`` on every step boundary.

    A zero ``step`` means the command only cares about the interval, i.e.
    one step per interval.
    """

    name: str
    step: timedelta
    interval: timedelta
    handler: Optional[Handler] = None

    def __post_init__(self):
        if self.interval <= timedelta(0):
            raise CommandError(f"{self.name}: interval must be positive, got {self.interval}")
        if self.step < timedelta(0):
            raise CommandError(f"{self.name}: step must not be negative, got {self.step}")
        if self.step > self.interval:
            raise CommandError(
                f"{self.name}: step {self.step} is larger than interval {self.interval}"
            )

    @property
    def effective_step(self) -> timedelta:
        return self.step if self.step else self.interval

    @property
    def step_count(self) -> int:
        """Number of whole steps per interval."""
        return self.interval // self.effective_step

    def crossed(self, prev: datetime, now: datetime) -> bool:
        """True if a step boundary lies between ``prev`` and ``now``."""
        step = self.effective_step
        return quantize(prev, step) != quantize(now, step)

    def position(self, now: datetime) -> Tuple[int, int]:
        """Return ``(step_index, step_count)`` of ``now`` within its interval."""
        step = self.effective_step
        n = self.step_count
        i = (quantize(now, step) - quantize(now, self.interval)) // step
        # Only reachable when interval is not a whole multiple of step.
        i = min(max(i, 0), n - 1)
        return i, n


@dataclass
class CommandStats:
    """Per-command invocation counters."""

    fired: int = 0
    failed: int = 0
    last_error: Optional[str] = None
    last_fired_at: Optional[datetime] = None


class Ticker:
    """Fires command handlers when their step boundaries are crossed.

    The ticker is synchronous and keeps mutable state (``last_time`` and the
    command list) without locking, so ``poll()`` is not reentrant and must
    not be called from several threads at once.
    """

    def __init__(
        self,
        commands: Optional[Iterable[Command]] = None,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.commands: List[Command] = list(commands or [])
        self.clock = clock or SystemClock()
        self.logger = logger or logging.getLogger(__name__)
        self.last_time = ZERO_TIME
        self.stats: Dict[str, CommandStats] = {}

    @property
    def polled(self) -> bool:
        return self.last_time != ZERO_TIME

    def add(self, command: Command) -> "Ticker":
        """Register a command. Commands fire in registration order."""
        self.commands.append(command)
        return self

    def poll(self) -> int:
        """Check every command against the clock and run due handlers.

        Returns:
            The number of handlers invoked during this poll.
        """
        now = ensure_utc(self.clock.now())

        invoked = 0
        for cmd in self.commands:
            if cmd.handler is None or not cmd.crossed(self.last_time, now):
                continue

            i, n = cmd.position(now)
            stats = self.stats.setdefault(cmd.name, CommandStats())
            stats.fired += 1
            stats.last_fired_at = now
            invoked += 1

            try:
                cmd.handler(i, n)
            except Exception as e:
                stats.failed += 1
                stats.last_error = str(e)
                self.logger.error(f"{cmd.name}: {e}")

        self.last_time = now
        return invoked
