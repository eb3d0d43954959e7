# memory_game/simulation.py
# Offline autoplay: a perfect-memory player against the real Game on a virtual clock.

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import Settings
from .game import Game
from .scheduler import ManualScheduler
from .view import render_text, snapshot


@dataclass
class Stats:
    games: int = 0
    total_moves: int = 0
    total_seconds: int = 0
    best_moves: Optional[int] = None
    moves_per_game: List[int] = field(default_factory=list)

    def record(self, moves: int, seconds: int) -> None:
        self.games += 1
        self.total_moves += moves
        self.total_seconds += seconds
        self.moves_per_game.append(moves)
        if self.best_moves is None or moves < self.best_moves:
            self.best_moves = moves

    @property
    def average_moves(self) -> float:
        return self.total_moves / self.games if self.games else 0.0


class Player:
    """
    Remembers every symbol it has seen and never flips a known pair apart.
    Works on snapshot() dicts, so it can play local or remote games.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self.seen: Dict[int, str] = {}
        self._session: Optional[int] = None

    def observe(self, snap: Dict) -> None:
        if snap["session"] != self._session:
            self.seen.clear()
            self._session = snap["session"]
        for card in snap["cards"]:
            if card["symbol"] is not None:
                self.seen[card["index"]] = card["symbol"]

    def choose(self, snap: Dict) -> Optional[int]:
        """Next board index to pick, or None while a pair is pending or the game is over."""
        self.observe(snap)
        if snap["complete"] or len(snap["selection"]) == 2:
            return None

        hidden = [c["index"] for c in snap["cards"] if c["status"] == "hidden"]
        unseen = [i for i in hidden if i not in self.seen]

        if snap["selection"]:
            first = snap["selection"][0]
            partner = self._known_partner(first, hidden)
            if partner is not None:
                return partner
            pool = unseen or hidden
            return self._rng.choice(pool)

        by_symbol: Dict[str, List[int]] = {}
        for i in hidden:
            if i in self.seen:
                by_symbol.setdefault(self.seen[i], []).append(i)
        for indices in by_symbol.values():
            if len(indices) == 2:
                return indices[0]
        return self._rng.choice(unseen or hidden)

    def _known_partner(self, first: int, hidden: List[int]) -> Optional[int]:
        symbol = self.seen.get(first)
        for i in hidden:
            if i != first and self.seen.get(i) == symbol:
                return i
        return None


def play_offline(settings: Settings, rng: Optional[random.Random] = None,
                 max_picks: int = 10_000) -> Game:
    """Play one game to completion; returns the finished Game (already closed)."""
    scheduler = ManualScheduler()
    game = Game(settings.symbols, settings.reveal_delay, settings.tick_interval,
                scheduler=scheduler, rng=rng)
    player = Player(rng)
    picks = 0
    try:
        while not game.state.complete:
            index = player.choose(snapshot(game.state))
            if index is None:
                scheduler.advance(settings.reveal_delay)
                continue
            picks += 1
            if picks > max_picks:
                raise RuntimeError("player did not finish the game")
            game.select(index)
            # think time between picks
            scheduler.advance(0.25)
    finally:
        game.close()
    return game


def run(games: int, settings: Settings, seed: Optional[int] = None, show_board: bool = False) -> Stats:
    rng = random.Random(seed)
    stats = Stats()

    print("MEMORY GAME - OFFLINE SIMULATION")
    print(f"{games} game(s), {len(settings.symbols)} pairs, seed={seed}\n")

    for n in range(games):
        game = play_offline(settings, rng)
        state = game.state
        stats.record(state.moves, state.elapsed_seconds)
        print(f"[game {n + 1}] moves={state.moves} time={state.elapsed_seconds}s")
        if show_board:
            print(render_text(state, settings.columns))
            print()

    print("\nSIMULATION COMPLETE")
    print(f"Games played: {stats.games}")
    print(f"Average moves: {stats.average_moves:.1f}")
    print(f"Best game: {stats.best_moves} moves")
    print(f"Total simulated time: {stats.total_seconds}s")
    return stats


def main():
    ap = argparse.ArgumentParser(description="Play memory games with a perfect-memory bot")
    ap.add_argument("--games", type=int, default=5)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--board", action="store_true", help="print the final board of each game")
    ap.add_argument("-v", "--verbose", action="store_true")
    a = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if a.verbose else logging.WARNING,
                        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s")
    run(a.games, Settings.from_env(), a.seed, a.board)


if __name__ == "__main__":
    main()
