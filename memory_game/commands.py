# memory_game/commands.py
from __future__ import annotations
import random
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from .board import GameState
from .deck import generate_deck


@dataclass(frozen=True)
class Resolution:
    """A completed pair waiting to be resolved, tagged with its game session."""

    session: int
    first: int
    second: int


def new_game(symbols: Iterable[str], session: int = 0, rng: Optional[random.Random] = None) -> GameState:
    return GameState(cards=tuple(generate_deck(symbols, rng)), session=session)


def restart(state: GameState, symbols: Optional[Iterable[str]] = None,
            rng: Optional[random.Random] = None) -> GameState:
    """Fresh game under the next session id; reuses the old alphabet unless given one."""
    if symbols is None:
        symbols = list(dict.fromkeys(card.symbol for card in sorted(state.cards, key=lambda c: c.id)))
    return new_game(symbols, session=state.session + 1, rng=rng)


def select_card(state: GameState, index: int) -> GameState:
    """
    Flip the card at `index` and add it to the selection.

    Returns `state` itself (no-op) while a pair is pending, or when the card
    is already flipped or matched. The second card of a pair counts one move.
    """
    state.validate_index(index)
    card = state.cards[index]
    if state.awaiting_resolution or card.flipped or card.matched:
        return state

    cards = list(state.cards)
    cards[index] = replace(card, flipped=True)
    selection = state.selection + (index,)
    moves = state.moves + 1 if len(selection) == 2 else state.moves
    return replace(state, cards=tuple(cards), selection=selection, moves=moves)


def pending_pair(state: GameState) -> Optional[Resolution]:
    if not state.awaiting_resolution:
        return None
    first, second = state.selection
    return Resolution(session=state.session, first=first, second=second)


def is_stale(state: GameState, pair: Resolution) -> bool:
    return pair.session != state.session or state.selection != (pair.first, pair.second)


def resolve_pair(state: GameState, pair: Resolution) -> GameState:
    """
    Commit a match or hide a mismatch for `pair`, then clear the selection.

    A pair from another session, or one that no longer is the live
    selection, leaves the state untouched.
    """
    if is_stale(state, pair):
        return state

    cards = list(state.cards)
    a, b = cards[pair.first], cards[pair.second]
    if a.symbol == b.symbol:
        cards[pair.first] = replace(a, matched=True)
        cards[pair.second] = replace(b, matched=True)
    else:
        cards[pair.first] = replace(a, flipped=False)
        cards[pair.second] = replace(b, flipped=False)

    complete = all(card.matched for card in cards)
    return replace(state, cards=tuple(cards), selection=(), complete=complete)


def tick(state: GameState) -> GameState:
    if state.complete:
        return state
    return replace(state, elapsed_seconds=state.elapsed_seconds + 1)
