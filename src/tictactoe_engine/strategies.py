"""
Simple strategies: first empty cell and uniform random.
"""
from __future__ import annotations

import random
from typing import Optional

from .board import Board, Position
from .player import Player

STRATEGY_NAMES = ("optimal", "random", "simpleton")


class SimpletonPlayer:
    """Always picks the first empty cell. Useful only for testing the game logic."""

    def take_turn(self, board: Board) -> Position:
        return board.empty_positions()[0]


class RandomPlayer:
    """Picks uniformly among the empty cells.

    Pass a seeded ``random.Random`` for reproducible games; without one the
    process-wide ``random`` module is used.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random

    def take_turn(self, board: Board) -> Position:
        return self._rng.choice(board.empty_positions())


def make_player(name: str, rng: Optional[random.Random] = None) -> Player:
    if name == "optimal":
        from .optimal import OptimalPlayer

        return OptimalPlayer()
    if name == "random":
        return RandomPlayer(rng)
    if name == "simpleton":
        return SimpletonPlayer()
    raise ValueError(f"Unknown strategy: {name!r} (expected one of {', '.join(STRATEGY_NAMES)})")
