from __future__ import annotations

from typing import Protocol

from .board import Board, Position


class Player(Protocol):
    """Anything that can choose a move for the side to move."""

    def take_turn(self, board: Board) -> Position:
        """Return an unoccupied position on an in-progress ``board``."""
        ...
