# memory_game/board.py
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Tuple

from .deck import Card


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of one game.

    Rep:
      - cards is the board, position = board index, 2 cards per symbol
      - selection holds at most 2 indices, each flipped and not matched
      - matched => flipped
      - complete <=> every card is matched
      - session tags the game instance; a restart always gets a new one
    Every transition builds a new GameState instead of mutating this one.
    """

    cards: Tuple[Card, ...]
    selection: Tuple[int, ...] = ()
    moves: int = 0
    elapsed_seconds: int = 0
    complete: bool = False
    session: int = 0

    def __post_init__(self) -> None:
        self._check_rep()

    def _check_rep(self) -> None:
        assert len(self.cards) > 0 and len(self.cards) % 2 == 0
        counts = Counter(card.symbol for card in self.cards)
        assert all(n == 2 for n in counts.values())
        assert len({card.id for card in self.cards}) == len(self.cards)
        for card in self.cards:
            if card.matched:
                assert card.flipped is True
        assert len(self.selection) <= 2
        assert len(set(self.selection)) == len(self.selection)
        for i in self.selection:
            assert 0 <= i < len(self.cards)
            assert self.cards[i].flipped and not self.cards[i].matched
        assert self.moves >= 0 and self.elapsed_seconds >= 0
        assert self.complete == all(card.matched for card in self.cards)

    def size(self) -> int:
        return len(self.cards)

    def peek(self, index: int) -> Card:
        self.validate_index(index)
        return self.cards[index]

    @property
    def awaiting_resolution(self) -> bool:
        return len(self.selection) == 2

    def validate_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValueError("invalid board index")
        if not 0 <= index < len(self.cards):
            raise ValueError("invalid board index")
