# memory_game/clock.py
from __future__ import annotations
import logging
from threading import RLock
from typing import Callable, Optional

from .scheduler import Handle, Scheduler

logger = logging.getLogger(__name__)


class Clock:
    """
    Periodic tick source with a single owned timer handle.

    start() is idempotent, stop() cancels the armed timer, reset() does both.
    A timer that fires after it was cancelled is ignored via the generation
    number it was armed with. Passing the owner's lock makes the generation
    check and the tick callback one step.
    """

    def __init__(self, scheduler: Scheduler, interval: float, on_tick: Callable[[], None],
                 lock: Optional[RLock] = None):
        if interval <= 0:
            raise ValueError("tick interval must be positive")
        self._scheduler = scheduler
        self._interval = interval
        self._on_tick = on_tick
        self._lock = lock if lock is not None else RLock()
        self._handle: Optional[Handle] = None
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        with self._lock:
            if self._handle is not None:
                return
            self._arm()

    def stop(self) -> None:
        with self._lock:
            self._generation += 1
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None

    def reset(self, on_tick: Optional[Callable[[], None]] = None) -> None:
        with self._lock:
            self.stop()
            if on_tick is not None:
                self._on_tick = on_tick
            self.start()

    def _arm(self) -> None:
        generation = self._generation
        self._handle = self._scheduler.call_later(self._interval, lambda: self._fire(generation))

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._handle is None:
                logger.debug("dropping cancelled clock tick")
                return
            self._arm()
            self._on_tick()
