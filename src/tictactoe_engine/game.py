"""
A single game between two players.

The game asks the board whose turn it is, lets that player choose, and applies
the move until the board reports a win or a draw.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .board import Board, GameResult, Position, Token
from .errors import IllegalMove
from .player import Player


@dataclass(frozen=True)
class Move:
    token: Token
    position: Position


class Game:
    def __init__(self, player_x: Player, player_o: Player, board: Optional[Board] = None) -> None:
        self.board = board if board is not None else Board()
        self.moves: List[Move] = []
        self._players = {Token.X: player_x, Token.O: player_o}

    def play(self) -> GameResult:
        while not self.board.get_game_result().is_terminal:
            token = self.board.whose_turn()
            position = self._players[token].take_turn(self.board)
            try:
                self.board.add_move(token, position)
            except IllegalMove:
                logging.error(
                    "Player %s chose an illegal move (%d,%d) on turn %d",
                    token, position.row, position.column, self.board.turn_number,
                )
                raise
            self.moves.append(Move(token, position))
            logging.debug("turn=%d %s -> cell %d", self.board.turn_number - 1, token, position.cell_number)
        result = self.result()
        logging.debug("game over after %d moves: %s", len(self.moves), result)
        return result

    def result(self) -> GameResult:
        return self.board.get_game_result()


def play_game(player_x: Player, player_o: Player) -> Game:
    """Create a game, play it to completion and return it."""
    game = Game(player_x, player_o)
    game.play()
    return game
