from __future__ import annotations
from typing import Literal, Union

from connect4.types import Move

Command = Literal["quit", "undo"]


def parse_move(raw: str, cols: int) -> Union[Move, Command]:
    s = raw.strip().lower()
    if s in {"q", "quit", "exit"}:
        return "quit"
    if s in {"u", "undo"}:
        return "undo"
    if not s.isdigit():
        raise ValueError("Invalid input. Enter a column number, u to undo or q to quit.")
    col = int(s) - 1
    if col < 0 or col >= cols:
        raise ValueError(f"Column must be between 1 and {cols}.")
    return Move(col)
