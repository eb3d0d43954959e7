# memory_game/view.py
from __future__ import annotations
from typing import Dict, List

from .board import GameState
from .deck import Card

MATCHED = "matched"
FLIPPED = "flipped"
HIDDEN = "hidden"


def is_face_visible(card: Card) -> bool:
    return card.flipped or card.matched


def card_status(card: Card) -> str:
    if card.matched:
        return MATCHED
    if card.flipped:
        return FLIPPED
    return HIDDEN


def board_view(state: GameState) -> List[Dict]:
    """One entry per board position; hidden cards never expose their symbol."""
    return [
        {
            "index": i,
            "id": card.id,
            "status": card_status(card),
            "symbol": card.symbol if is_face_visible(card) else None,
        }
        for i, card in enumerate(state.cards)
    ]


def summary(state: GameState) -> str:
    if state.complete:
        return f"Game Over! You finished in {state.elapsed_seconds} seconds with {state.moves} moves."
    return f"Time: {state.elapsed_seconds} seconds | Moves: {state.moves}"


def snapshot(state: GameState) -> Dict:
    """JSON-serializable view of the game for clients."""
    return {
        "session": state.session,
        "cards": board_view(state),
        "selection": list(state.selection),
        "moves": state.moves,
        "elapsed_seconds": state.elapsed_seconds,
        "complete": state.complete,
        "message": summary(state),
    }


def render_text(state: GameState, columns: int = 6) -> str:
    if columns <= 0:
        raise ValueError("columns must be positive")
    cells = []
    for card in state.cards:
        if card.matched:
            cells.append(f"[{card.symbol}]")
        elif card.flipped:
            cells.append(f" {card.symbol} ")
        else:
            cells.append(" ? ")
    rows = [" ".join(cells[i:i + columns]) for i in range(0, len(cells), columns)]
    return "\n".join(rows + [summary(state)])
