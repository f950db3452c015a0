import random

import pytest

from tictactoe_engine.board import Board, GameResult, Outcome, Position, Token
from tictactoe_engine.errors import IllegalMove
from tictactoe_engine.game import Game, Move, play_game
from tictactoe_engine.strategies import RandomPlayer, SimpletonPlayer


class StubbornPlayer:
    """Always asks for the top-left cell."""

    def take_turn(self, board: Board) -> Position:
        return Position(0, 0)


def test_game_between_simpletons():
    game = play_game(SimpletonPlayer(), SimpletonPlayer())
    assert game.result() != GameResult(Outcome.IN_PROGRESS)
    assert game.result() == GameResult.win(Token.X)
    assert len(game.moves) == 7
    assert game.moves[0] == Move(Token.X, Position(0, 0))
    assert game.moves[-1] == Move(Token.X, Position(2, 0))
    assert [m.token for m in game.moves] == [Token.X, Token.O] * 3 + [Token.X]


def test_game_from_existing_board():
    board = Board.from_string("XO-/---/---")
    game = Game(SimpletonPlayer(), SimpletonPlayer(), board=board)
    game.play()
    assert game.moves[0] == Move(Token.X, Position(0, 2))
    assert game.board is board
    assert game.result().is_terminal


def test_illegal_move_aborts_game():
    game = Game(StubbornPlayer(), StubbornPlayer())
    with pytest.raises(IllegalMove):
        game.play()
    assert len(game.moves) == 1
    assert game.board.turn_number == 2


def test_game_between_random_players():
    game_count = 1000
    rng = random.Random(12345)
    x_wins = o_wins = draws = 0
    for _ in range(game_count):
        result = play_game(RandomPlayer(rng), RandomPlayer(rng)).result()
        if result == GameResult.win(Token.X):
            x_wins += 1
        elif result == GameResult.win(Token.O):
            o_wins += 1
        else:
            assert result.outcome is Outcome.DRAW, "game should not be still in progress!"
            draws += 1
    assert x_wins != 0, f"X should have won at least one of the {game_count} games played!"
    assert o_wins != 0, f"O should have won at least one of the {game_count} games played!"
    assert x_wins > o_wins, "X should have won more games than O!"
    assert draws != 0, "Some games should have ended in a draw!"
    assert x_wins + o_wins + draws == game_count
