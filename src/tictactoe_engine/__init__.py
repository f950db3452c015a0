"""tictactoe_engine package.

Board model, an unbeatable exhaustive-search player, simple strategies,
batch simulation, and a console CLI.

Convenience imports are exposed for common workflows.
"""

from .board import DRAW, IN_PROGRESS, Board, GameResult, Outcome, Position, Token
from .errors import CorruptState, IllegalMove, InvalidBoard, InvalidPosition, TicTacToeError
from .game import Game, play_game
from .optimal import OptimalPlayer
from .strategies import RandomPlayer, SimpletonPlayer, make_player

__all__ = [
    "Board",
    "Position",
    "Token",
    "GameResult",
    "Outcome",
    "DRAW",
    "IN_PROGRESS",
    "Game",
    "play_game",
    "OptimalPlayer",
    "RandomPlayer",
    "SimpletonPlayer",
    "make_player",
    "TicTacToeError",
    "InvalidPosition",
    "IllegalMove",
    "CorruptState",
    "InvalidBoard",
]
