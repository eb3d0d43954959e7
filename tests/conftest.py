import pytest

from memory_game.board import GameState
from memory_game.deck import Card


def make_state(symbols=("A", "B", "A", "B"), session=0) -> GameState:
    return GameState(cards=tuple(Card(id=i, symbol=s) for i, s in enumerate(symbols)), session=session)


@pytest.fixture
def abab():
    return make_state()
