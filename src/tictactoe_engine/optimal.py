"""
Optimal player: exhaustive search over every continuation, never loses.

Move choice, from the side-to-move perspective:
- Take the center whenever it is free.
- Otherwise try each empty cell in row-major order and play the game out with both
  sides following this same policy. Prefer the first cell that ends in a win, then
  the first that ends in a draw, then fall back to the first cell (every reply loses).
- No scores and no pruning: outcomes come straight from the terminal board.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .board import CENTER, DRAW, Board, GameResult, Position, Token
from .errors import IllegalMove

BoardKey = Tuple[Optional[Token], ...]


class OptimalPlayer:
    def __init__(self, memoize: bool = True) -> None:
        # Both caches are keyed on the cell snapshot; turn order follows from it.
        self._memoize = memoize
        self._best_moves: Dict[BoardKey, Position] = {}
        self._eventual_results: Dict[BoardKey, GameResult] = {}

    def take_turn(self, board: Board) -> Position:
        result = board.get_game_result()
        if result.is_terminal:
            raise IllegalMove(f"Cannot choose a move, game is already over ({result})")
        return self.get_best_move(board)

    def get_best_move(self, board: Board) -> Position:
        if board.is_position_unused(CENTER):
            return CENTER

        key = board.key()
        if self._memoize and key in self._best_moves:
            return self._best_moves[key]

        who_am_i = board.whose_turn()
        candidates: List[Tuple[Position, GameResult]] = []
        best: Optional[Position] = None
        for potential_move in board.empty_positions():
            next_board = board.copy()
            next_board.add_move(who_am_i, potential_move)
            result = self.get_eventual_game_result(next_board)
            if result == GameResult.win(who_am_i):
                best = potential_move
                break
            candidates.append((potential_move, result))

        if best is None:
            best = next((move for move, result in candidates if result == DRAW), candidates[0][0])

        if self._memoize:
            self._best_moves[key] = best
        return best

    def get_eventual_game_result(self, board: Board) -> GameResult:
        """Outcome once both sides keep playing ``get_best_move`` until the game ends."""
        result = board.get_game_result()
        if result.is_terminal:
            return result

        key = board.key()
        if self._memoize and key in self._eventual_results:
            return self._eventual_results[key]

        next_board = board.copy()
        best_move = self.get_best_move(next_board)
        next_board.add_move(next_board.whose_turn(), best_move)
        result = self.get_eventual_game_result(next_board)

        if self._memoize:
            self._eventual_results[key] = result
        return result
