# memory_game/scheduler.py
from __future__ import annotations
import heapq
import itertools
import threading
from typing import Callable, List, Protocol, Tuple


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, fn: Callable[[], None]) -> Handle: ...


class ThreadingScheduler:
    """Runs each callback on its own daemon timer thread."""

    def call_later(self, delay: float, fn: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, fn)
        timer.daemon = True
        timer.start()
        return timer


class ManualHandle:
    def __init__(self, when: float, fn: Callable[[], None]):
        self.when = when
        self.fn = fn
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual clock. Nothing runs until advance() moves time past a deadline;
    callbacks with equal deadlines run in scheduling order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, ManualHandle]] = []

    def call_later(self, delay: float, fn: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + max(0.0, delay), fn)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = when
            handle.fn()
        self.now = target

    def run_pending(self) -> None:
        """Run everything already due at the current time."""
        self.advance(0.0)
