# memory_game/game.py
from __future__ import annotations
import logging
import random
from threading import RLock
from typing import Callable, Iterable, List, Optional

from . import commands
from .board import GameState
from .clock import Clock
from .commands import Resolution
from .deck import DEFAULT_SYMBOLS
from .scheduler import Handle, Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class Game:
    """
    Owns the live GameState of a single player's game.

    Selections, clock ticks and delayed resolutions all go through here and
    are applied under one lock, one at a time. A resolution is a message
    carrying the session it was scheduled in; after a restart it no longer
    matches and is dropped.
    """

    def __init__(self, symbols: Iterable[str] = DEFAULT_SYMBOLS, reveal_delay: float = 1.0,
                 tick_interval: float = 1.0, scheduler: Optional[Scheduler] = None,
                 rng: Optional[random.Random] = None):
        if reveal_delay < 0:
            raise ValueError("reveal delay must not be negative")
        self._lock = RLock()
        self._symbols = list(symbols)
        self._reveal_delay = reveal_delay
        self._scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self._rng = rng
        self._pending: Optional[Handle] = None
        self._listeners: List[Listener] = []

        self._state = commands.new_game(self._symbols, rng=rng)
        self._clock = Clock(self._scheduler, tick_interval,
                            self._ticker(self._state.session), lock=self._lock)
        self._clock.start()
        logger.info("new game session=%d cards=%d", self._state.session, self._state.size())

    @property
    def state(self) -> GameState:
        with self._lock:
            return self._state

    @property
    def symbols(self) -> List[str]:
        return list(self._symbols)

    @property
    def clock_running(self) -> bool:
        return self._clock.running

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with every new state; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def select(self, index: int) -> GameState:
        with self._lock:
            before = self._state
            after = commands.select_card(before, index)
            if after is before:
                logger.debug("ignored pick %d (session=%d)", index, before.session)
                return before
            self._commit(after)
            pair = commands.pending_pair(after)
            if pair is not None:
                logger.debug("pair %d/%d formed, move %d", pair.first, pair.second, after.moves)
                self._pending = self._scheduler.call_later(
                    self._reveal_delay, lambda: self.deliver(pair))
            return after

    def deliver(self, pair: Resolution) -> GameState:
        with self._lock:
            before = self._state
            after = commands.resolve_pair(before, pair)
            if after is before:
                logger.debug("dropping stale resolution %s", pair)
                return before
            self._pending = None
            self._commit(after)
            if after.complete:
                self._clock.stop()
                logger.info("game complete session=%d moves=%d time=%ds",
                            after.session, after.moves, after.elapsed_seconds)
            return after

    def restart(self, symbols: Optional[Iterable[str]] = None) -> GameState:
        with self._lock:
            if symbols is not None:
                symbols = list(symbols)
            fresh = commands.restart(self._state, symbols, rng=self._rng)
            if symbols is not None:
                self._symbols = symbols
            self._cancel_pending()
            self._commit(fresh)
            self._clock.reset(self._ticker(fresh.session))
            logger.info("restarted, session=%d cards=%d", fresh.session, fresh.size())
            return fresh

    def close(self) -> None:
        with self._lock:
            self._cancel_pending()
            self._clock.stop()

    def _ticker(self, session: int) -> Callable[[], None]:
        return lambda: self._on_tick(session)

    def _on_tick(self, session: int) -> None:
        with self._lock:
            if session != self._state.session or not self._clock.running:
                logger.debug("dropping clock tick for session %d", session)
                return
            if self._state.complete:
                self._clock.stop()
                return
            self._commit(commands.tick(self._state))

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _commit(self, state: GameState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
