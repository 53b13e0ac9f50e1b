"""Cancellable delayed callbacks for session timers.

Sessions only need two things from a scheduler: the current time and
``call_later``. ``AsyncioScheduler`` drives them on the running event loop;
``ManualScheduler`` is a virtual clock that only moves when told to.
"""
import asyncio
import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for one pending callback on a ManualScheduler."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler advanced explicitly with ``advance()``."""

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (call.when, next(self._counter), call))
        return call

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every callback that falls due in order."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, call = heapq.heappop(self._queue)
            self._now = when
            if not call.cancelled:
                call.callback()
        self._now = target

    @property
    def pending(self) -> int:
        """Number of callbacks scheduled and not cancelled."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)


class AsyncioScheduler:
    """Scheduler backed by the asyncio event loop.

    Args:
        loop: Loop to schedule on. Defaults to the loop running at call time.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
