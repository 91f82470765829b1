"""Timer scheduling used by the transition sequencer."""
from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay given in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class _ManualTimer:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler driven by a virtual clock."""

    def __init__(self) -> None:
        self._now = 0.0
        self._counter = itertools.count()
        self._queue: List[Tuple[float, int, _ManualTimer]] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending_count(self) -> int:
        """Number of timers that are still due to fire."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualTimer:
        if delay < 0:
            raise ValueError("Delay must be non-negative.")
        timer = _ManualTimer(self._now + delay, callback)
        heapq.heappush(self._queue, (timer.due, next(self._counter), timer))
        return timer

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every timer that falls due on the way.

        Timers scheduled by a callback fire within the same call when they fall
        inside the window.
        """
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards.")
        deadline = self._now + seconds
        while self._queue and self._queue[0][0] <= deadline:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            timer.callback()
        self._now = deadline

    def run_until_idle(self, *, max_steps: int = 10_000) -> None:
        """Fire timers in order until none are left."""
        steps = 0
        while self._queue:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            steps += 1
            if steps > max_steps:
                raise RuntimeError("Scheduler did not become idle.")
            self._now = max(self._now, due)
            timer.callback()


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


__all__ = ["AsyncioScheduler", "ManualScheduler", "Scheduler", "TimerHandle"]
