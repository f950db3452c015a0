import random
from collections import Counter

import pytest

from tictactoe_engine.board import ALL_POSITIONS, Board, GameResult, Position, Token
from tictactoe_engine.optimal import OptimalPlayer
from tictactoe_engine.strategies import RandomPlayer, SimpletonPlayer, make_player


def test_simpleton_empty_board():
    assert SimpletonPlayer().take_turn(Board()) == Position(0, 0)


def test_simpleton_almost_full_board():
    player = SimpletonPlayer()
    assert player.take_turn(Board.from_string("XOX/O-O/XOX")) == Position(1, 1)
    assert player.take_turn(Board.from_string("XOX/XOO/O-X")) == Position(2, 1)


def test_simpleton_half_full_board():
    assert SimpletonPlayer().take_turn(Board.from_string("X-X/O-O/---")) == Position(0, 1)


def test_simpleton_fill_the_board():
    player = SimpletonPlayer()
    board = Board()
    while not board.get_game_result().is_terminal:
        board.add_move(board.whose_turn(), player.take_turn(board))
    assert board.get_game_result() == GameResult.win(Token.X)


def test_random_only_picks_empty_cells():
    player = RandomPlayer(random.Random(1))
    board = Board.from_string("X-X/O-O/---")
    empty = set(board.empty_positions())
    for _ in range(200):
        assert player.take_turn(board) in empty


def test_random_is_reproducible_with_seed():
    board = Board()
    a = RandomPlayer(random.Random(42))
    b = RandomPlayer(random.Random(42))
    assert [a.take_turn(board) for _ in range(30)] == [b.take_turn(board) for _ in range(30)]


def test_random_is_roughly_uniform():
    player = RandomPlayer(random.Random(2024))
    board = Board()
    counts = Counter(player.take_turn(board) for _ in range(9000))
    assert set(counts) == set(ALL_POSITIONS)
    # expected 1000 per cell, standard deviation about 30
    for p in ALL_POSITIONS:
        assert 850 < counts[p] < 1150


def test_random_without_rng_uses_module_random():
    board = Board.from_string("XOX/OO-/XXO")
    assert RandomPlayer().take_turn(board) == Position(1, 2)


def test_make_player():
    assert isinstance(make_player("optimal"), OptimalPlayer)
    assert isinstance(make_player("random", random.Random(0)), RandomPlayer)
    assert isinstance(make_player("simpleton"), SimpletonPlayer)
    with pytest.raises(ValueError, match="Unknown strategy"):
        make_player("clairvoyant")
