"""
Console player. Input problems are recovered here by reprompting and never reach the board.
"""
from __future__ import annotations

import sys
from typing import Optional, TextIO

from .board import Board, Position, Token
from .errors import InvalidPosition

INSTRUCTIONS = """
Instructions...
I will query for a number between 1..9 for each move.
The numbers correspond to the following diagram:
┌───┐
│123│
│456│
│789│
└───┘
"""


def _read_line(stdin: TextIO) -> str:
    line = stdin.readline()
    if line == "":
        raise EOFError("Input closed while waiting for a move")
    return line.strip()


def parse_cell_number(text: str) -> Optional[Position]:
    """Position for ``"1"``..``"9"``, or None for anything else."""
    try:
        return Position.from_cell_number(int(text))
    except (ValueError, InvalidPosition):
        return None


def choose_token(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> Token:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    while True:
        print("Would you like to play X or O? (X goes first)", file=stdout)
        answer = _read_line(stdin).upper()
        if answer in ("X", "O"):
            return Token(answer)
        print("Please answer X or O.", file=stdout)


class HumanPlayer:
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        print(INSTRUCTIONS, file=self._stdout)

    def take_turn(self, board: Board) -> Position:
        print(board, file=self._stdout)
        while True:
            print("Where would you like to go? (1-9)", file=self._stdout)
            position = parse_cell_number(_read_line(self._stdin))
            if position is None:
                print("That is not a valid position!", file=self._stdout)
                continue
            if board.is_position_unused(position):
                return position
            print("That position is already occupied!", file=self._stdout)
