"""
Error taxonomy for the engine.

Core invariant violations are fatal for the game in which they occur;
console input problems never reach this module (they are reprompted).
"""


class TicTacToeError(Exception):
    """Base class for every error raised by the engine."""


class InvalidPosition(TicTacToeError, ValueError):
    """Row or column outside [0, 2], or a cell number outside 1..9."""


class IllegalMove(TicTacToeError):
    """Move out of turn, onto an occupied cell, or after the game ended."""


class CorruptState(TicTacToeError):
    """Board contents that no legal sequence of moves can produce."""


class InvalidBoard(TicTacToeError, ValueError):
    """Textual board that cannot be parsed."""
