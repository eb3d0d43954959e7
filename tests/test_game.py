import random
import threading

import pytest
from memory_game.commands import pending_pair
from memory_game.game import Game
from memory_game.scheduler import ManualScheduler, ThreadingScheduler


def positions(game, symbol):
    return [i for i, c in enumerate(game.state.cards) if c.symbol == symbol]


@pytest.fixture
def sched():
    return ManualScheduler()


@pytest.fixture
def game(sched):
    g = Game(["A", "B"], reveal_delay=1.0, tick_interval=1.0, scheduler=sched, rng=random.Random(7))
    yield g
    g.close()


def test_pair_resolves_after_delay(game, sched):
    a0, a1 = positions(game, "A")
    game.select(a0)
    game.select(a1)
    assert game.state.moves == 1
    sched.advance(0.5)
    assert game.state.selection == (a0, a1)
    sched.advance(0.5)
    assert game.state.selection == ()
    assert game.state.cards[a0].matched and game.state.cards[a1].matched
    assert not game.state.complete


def test_blocks_picks_until_resolved(game, sched):
    a0, a1 = positions(game, "A")
    b0, b1 = positions(game, "B")
    game.select(a0)
    game.select(b0)
    pending = game.state
    assert game.select(a1) is pending
    assert game.select(b1) is pending
    sched.advance(1)
    assert game.state.selection == ()
    assert not game.state.cards[a0].flipped and not game.state.cards[b0].flipped
    assert game.state.moves == 1


def test_win_stops_clock(game, sched):
    for symbol in ("A", "B"):
        x, y = positions(game, symbol)
        game.select(x)
        game.select(y)
        sched.advance(1)
    state = game.state
    assert state.complete
    assert state.moves == 2
    assert state.elapsed_seconds == 2
    assert not game.clock_running
    sched.advance(10)
    assert game.state.elapsed_seconds == 2


def test_clock_counts_while_playing(game, sched):
    sched.advance(5)
    assert game.state.elapsed_seconds == 5
    assert game.clock_running


def test_restart_drops_pending_resolution(game, sched):
    a0, _ = positions(game, "A")
    b0, _ = positions(game, "B")
    game.select(a0)
    game.select(b0)
    sched.advance(0.4)
    fresh = game.restart()
    assert fresh.session == 1
    assert (fresh.moves, fresh.elapsed_seconds, fresh.selection) == (0, 0, ())
    sched.advance(0.6)
    assert game.state is fresh
    sched.advance(0.4)
    assert game.state.elapsed_seconds == 1


def test_stale_message_is_ignored_after_restart(game):
    a0, a1 = positions(game, "A")
    game.select(a0)
    game.select(a1)
    pair = pending_pair(game.state)
    fresh = game.restart()
    assert game.deliver(pair) is fresh


def test_restart_after_win_restarts_clock(game, sched):
    for symbol in ("A", "B"):
        x, y = positions(game, symbol)
        game.select(x)
        game.select(y)
        sched.advance(1)
    assert not game.clock_running
    game.restart()
    assert game.clock_running
    sched.advance(2)
    assert game.state.elapsed_seconds == 2


def test_restart_with_new_symbols(game):
    state = game.restart(["x", "y", "z"])
    assert state.size() == 6
    assert game.symbols == ["x", "y", "z"]
    assert game.restart().size() == 6


def test_bad_restart_keeps_current_game(game):
    before = game.state
    with pytest.raises(ValueError):
        game.restart(["x", "x"])
    assert game.state is before


def test_listeners_see_every_change(game, sched):
    seen = []
    unsubscribe = game.subscribe(seen.append)
    a0, a1 = positions(game, "A")
    game.select(a0)
    game.select(a1)
    sched.advance(1)
    # pick, pick, tick, resolve
    assert len(seen) == 4
    assert seen[-1] is game.state
    unsubscribe()
    sched.advance(1)
    assert len(seen) == 4


def test_close_cancels_timers(game, sched):
    a0, a1 = positions(game, "A")
    game.select(a0)
    game.select(a1)
    game.close()
    assert sched.pending() == 0
    sched.advance(3)
    assert game.state.selection == (a0, a1)


def test_invalid_index_raises(game):
    with pytest.raises(ValueError):
        game.select(99)


def test_threaded_game_resolves():
    g = Game(["A", "B"], reveal_delay=0.01, tick_interval=10, scheduler=ThreadingScheduler())
    resolved = threading.Event()
    g.subscribe(lambda s: resolved.set() if s.selection == () and s.moves == 1 else None)
    try:
        a0, a1 = positions(g, "A")
        g.select(a0)
        g.select(a1)
        assert resolved.wait(5)
        assert g.state.cards[a0].matched
    finally:
        g.close()


def test_tick_in_flight_is_dropped_after_restart(game, sched):
    tick = game._clock._on_tick

    def restart_then_tick():
        game.restart()
        tick()

    game._clock._on_tick = restart_then_tick
    sched.advance(1.0)
    assert game.state.session == 1
    assert game.state.elapsed_seconds == 0
    sched.advance(1.0)
    assert game.state.elapsed_seconds == 1


def test_tick_in_flight_is_dropped_after_close(game, sched):
    tick = game._clock._on_tick

    def close_then_tick():
        game.close()
        tick()

    game._clock._on_tick = close_then_tick
    sched.advance(1.0)
    assert game.state.elapsed_seconds == 0
    assert not game.clock_running
    sched.advance(3.0)
    assert game.state.elapsed_seconds == 0
