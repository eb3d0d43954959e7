from .board import GameState
from .commands import Resolution, new_game, pending_pair, resolve_pair, restart, select_card, tick
from .deck import DEFAULT_SYMBOLS, Card, generate_deck
from .game import Game

__all__ = [
    "Card",
    "DEFAULT_SYMBOLS",
    "Game",
    "GameState",
    "Resolution",
    "generate_deck",
    "new_game",
    "pending_pair",
    "resolve_pair",
    "restart",
    "select_card",
    "tick",
]
