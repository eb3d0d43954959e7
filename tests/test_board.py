import pytest
from memory_game.board import GameState
from memory_game.deck import Card

from conftest import make_state


def test_peek_and_size(abab):
    assert abab.size() == 4
    assert abab.peek(2).symbol == "A"


@pytest.mark.parametrize("index", [-1, 4, True, "1", 1.0])
def test_invalid_index(abab, index):
    with pytest.raises(ValueError):
        abab.peek(index)


def test_rep_rejects_matched_face_down():
    cards = (Card(0, "A", flipped=False, matched=True), Card(1, "A"))
    with pytest.raises(AssertionError):
        GameState(cards=cards)


def test_rep_rejects_unpaired_symbols():
    with pytest.raises(AssertionError):
        make_state(("A", "B"))


def test_rep_requires_complete_iff_all_matched():
    cards = tuple(Card(i, "A", flipped=True, matched=True) for i in range(2))
    with pytest.raises(AssertionError):
        GameState(cards=cards, complete=False)
    assert GameState(cards=cards, complete=True).complete


def test_rep_rejects_oversized_selection():
    cards = tuple(Card(i, s, flipped=True) for i, s in enumerate("ABAB"))
    with pytest.raises(AssertionError):
        GameState(cards=cards, selection=(0, 1, 2))
