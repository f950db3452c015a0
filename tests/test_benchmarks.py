from tictactoe_engine.board import Board, Position, Token
from tictactoe_engine.optimal import OptimalPlayer
from tictactoe_engine.simulation import SimulationArgs, run_simulation


def test_benchmark_optimal_turn_two(benchmark):
    board = Board()
    board.add_move(Token.X, Position(1, 1))  # center

    def _turn():
        return OptimalPlayer().take_turn(board)

    move = benchmark(_turn)
    assert board.is_position_unused(move)


def test_benchmark_simulation(benchmark):
    def _simulate():
        return run_simulation(SimulationArgs(games=20, player_x="optimal", player_o="random", seed=0))

    summary = benchmark(_simulate)
    assert summary.games == 20
    assert summary.o_wins == 0
