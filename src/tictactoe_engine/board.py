"""
Board model: tokens, positions, results, and the 3x3 grid itself.
Notes:
- X always moves first. The turn number starts at 1 and reaches 10 once all nine cells are filled.
- Odd turn -> X to move, even turn -> O to move.
- Results are never stored; they are recomputed from the cells on every call.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .errors import CorruptState, IllegalMove, InvalidBoard, InvalidPosition

BOARD_SIZE = 3
EMPTY_CHAR = "-"

# rows, columns, diagonals
WIN_LINES = [
    ((0, 0), (0, 1), (0, 2)), ((1, 0), (1, 1), (1, 2)), ((2, 0), (2, 1), (2, 2)),
    ((0, 0), (1, 0), (2, 0)), ((0, 1), (1, 1), (2, 1)), ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)), ((2, 0), (1, 1), (0, 2)),
]


class Token(Enum):
    X = "X"
    O = "O"

    @property
    def other(self) -> "Token":
        return Token.O if self is Token.X else Token.X

    @classmethod
    def from_char(cls, value: str) -> Optional["Token"]:
        """Parse ``X``/``O``/``-``; ``-`` means an empty cell."""
        if value == EMPTY_CHAR:
            return None
        try:
            return cls(value)
        except ValueError:
            raise InvalidBoard(f"Invalid character for token: {value!r}") from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Position:
    """A cell address. ``row`` 0 is the top, ``column`` 0 is the left."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if not 0 <= self.row < BOARD_SIZE:
            raise InvalidPosition(f"Invalid row: {self.row}")
        if not 0 <= self.column < BOARD_SIZE:
            raise InvalidPosition(f"Invalid column: {self.column}")

    @classmethod
    def from_cell_number(cls, number: int) -> "Position":
        """Map 1..9 (top-left to bottom-right, row-major) to a position."""
        if not 1 <= number <= BOARD_SIZE * BOARD_SIZE:
            raise InvalidPosition(f"Invalid cell number: {number}")
        row, column = divmod(number - 1, BOARD_SIZE)
        return cls(row, column)

    @property
    def cell_number(self) -> int:
        return self.row * BOARD_SIZE + self.column + 1


ALL_POSITIONS: Tuple[Position, ...] = tuple(
    Position(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)
)
CENTER = Position(1, 1)


class Outcome(Enum):
    WIN = "win"
    DRAW = "draw"
    IN_PROGRESS = "in_progress"


@dataclass(frozen=True)
class GameResult:
    outcome: Outcome
    winner: Optional[Token] = None

    @classmethod
    def win(cls, token: Token) -> "GameResult":
        return cls(Outcome.WIN, token)

    @property
    def is_terminal(self) -> bool:
        return self.outcome is not Outcome.IN_PROGRESS

    def __str__(self) -> str:
        if self.outcome is Outcome.WIN:
            return f"{self.winner} wins"
        if self.outcome is Outcome.DRAW:
            return "draw"
        return "in progress"


DRAW = GameResult(Outcome.DRAW)
IN_PROGRESS = GameResult(Outcome.IN_PROGRESS)


class Board:
    """3x3 grid of optional tokens plus the turn counter."""

    def __init__(self) -> None:
        self._cells: List[List[Optional[Token]]] = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._turn_number = 1

    @classmethod
    def from_string(cls, contents: str) -> "Board":
        """Build a board from nine ``X``/``O``/``-`` characters in row-major order.

        Slashes and whitespace are ignored, so ``"XOX/OO-/XX-"`` and ``"XOXOO-XX-"``
        are the same board. The turn number is derived from the number of blanks.
        """
        raw = "".join(ch for ch in contents if ch != "/" and not ch.isspace())
        if len(raw) != BOARD_SIZE * BOARD_SIZE:
            raise InvalidBoard(f"Invalid string length {len(raw)} for board: {contents!r}")
        tokens = [Token.from_char(ch) for ch in raw]
        x_count = tokens.count(Token.X)
        o_count = tokens.count(Token.O)
        if x_count - o_count not in (0, 1):
            raise InvalidBoard(f"Invalid number of Xs and Os: {x_count} X, {o_count} O")

        board = cls()
        for position, token in zip(ALL_POSITIONS, tokens):
            board._cells[position.row][position.column] = token
        board._turn_number = x_count + o_count + 1
        board._check_invariants()
        # the winner must have made the last move
        winner = board.get_game_result().winner
        if winner is Token.X and x_count != o_count + 1:
            raise InvalidBoard(f"X has won but O moved afterwards: {contents!r}")
        if winner is Token.O and x_count != o_count:
            raise InvalidBoard(f"O has won but X moved afterwards: {contents!r}")
        return board

    @property
    def turn_number(self) -> int:
        return self._turn_number

    def copy(self) -> "Board":
        other = Board()
        other._cells = [row[:] for row in self._cells]
        other._turn_number = self._turn_number
        return other

    def key(self) -> Tuple[Optional[Token], ...]:
        """Hashable snapshot of the cells, row-major."""
        return tuple(cell for row in self._cells for cell in row)

    def token_at(self, position: Position) -> Optional[Token]:
        return self._cells[position.row][position.column]

    def is_position_unused(self, position: Position) -> bool:
        return self._cells[position.row][position.column] is None

    def empty_positions(self) -> List[Position]:
        """Unoccupied cells in row-major order (row 0 left to right, then row 1, then row 2)."""
        return [p for p in ALL_POSITIONS if self._cells[p.row][p.column] is None]

    def whose_turn(self) -> Token:
        if self._turn_number > BOARD_SIZE * BOARD_SIZE:
            raise IllegalMove("No moves remain: every cell is occupied")
        return Token.X if self._turn_number % 2 == 1 else Token.O

    def add_move(self, token: Token, position: Position) -> None:
        """Mark ``position`` with ``token`` and advance the turn counter.

        Raises IllegalMove if the game is already over, if it is not ``token``'s
        turn, or if the cell is occupied.
        """
        result = self.get_game_result()
        if result.is_terminal:
            raise IllegalMove(f"Game is already over ({result})")
        if token is not self.whose_turn():
            raise IllegalMove(f"It is not {token}'s turn!")
        if not self.is_position_unused(position):
            raise IllegalMove(f"Position [{position.row},{position.column}] is already occupied!")
        self._cells[position.row][position.column] = token
        self._turn_number += 1
        self._check_invariants()

    def get_game_result(self) -> GameResult:
        winners = set()
        for line in WIN_LINES:
            first = self._cells[line[0][0]][line[0][1]]
            if first is not None and all(self._cells[r][c] is first for r, c in line[1:]):
                winners.add(first)
        if len(winners) > 1:
            raise CorruptState("Game cannot have multiple winners!")
        if winners:
            return GameResult.win(winners.pop())
        if self._turn_number <= BOARD_SIZE * BOARD_SIZE:
            return IN_PROGRESS
        return DRAW

    def _check_invariants(self) -> None:
        if not 1 <= self._turn_number <= BOARD_SIZE * BOARD_SIZE + 1:
            raise CorruptState(f"Invalid turn number {self._turn_number}!")
        self.get_game_result()

    def to_string(self) -> str:
        """Compact form accepted by ``from_string``, e.g. ``XOX/OO-/XX-``."""
        return "/".join(self._render_row(row, EMPTY_CHAR) for row in range(BOARD_SIZE))

    def _render_row(self, row: int, blank: str) -> str:
        cells = (self.token_at(Position(row, column)) for column in range(BOARD_SIZE))
        return "".join(str(token) if token is not None else blank for token in cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells and self._turn_number == other._turn_number

    def __repr__(self) -> str:
        return f"Board.from_string({self.to_string()!r})"

    def __str__(self) -> str:
        # =====
        # |X O|
        # | X |
        # |OOX|
        # =====
        border = "=" * (BOARD_SIZE + 2)
        rows = ["|" + self._render_row(row, " ") + "|" for row in range(BOARD_SIZE)]
        return "\n".join([border, *rows, border])
