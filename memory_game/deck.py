# memory_game/deck.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

DEFAULT_SYMBOLS: Tuple[str, ...] = (
    "🐶", "🐱", "🐭", "🐹", "🐰", "🦊", "🐻", "🐼",
    "🐨", "🐯", "🦁", "🐮", "🐷", "🐸", "🐵", "🐧",
    "🐢", "🐙",
)


@dataclass(frozen=True)
class Card:
    id: int
    symbol: str
    flipped: bool = False
    matched: bool = False

    @property
    def active(self) -> bool:
        return not self.flipped and not self.matched


def check_symbols(symbols: Iterable[str]) -> List[str]:
    values = list(symbols)
    if not values:
        raise ValueError("symbol alphabet must not be empty")
    for s in values:
        if not isinstance(s, str) or not s:
            raise ValueError(f"invalid symbol: {s!r}")
    if len(set(values)) != len(values):
        raise ValueError("symbols must be distinct")
    return values


def generate_deck(symbols: Iterable[str], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Two cards per symbol, ids 0..2N-1 handed out before shuffling.

    random.shuffle is a Fisher-Yates shuffle, so every permutation of the
    deck is equally likely.
    """
    values = check_symbols(symbols)
    cards = [Card(id=i, symbol=s) for i, s in enumerate(values + values)]
    shuffle = rng.shuffle if rng is not None else random.shuffle
    shuffle(cards)
    return cards
