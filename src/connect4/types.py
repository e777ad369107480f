# src/connect4/types.py

from __future__ import annotations
from typing import Literal, Optional, NewType

Player = Literal["R", "Y"]
Cell = Optional[Player]
Result = Literal["R", "Y", "D"]
Move = NewType("Move", int)   # column index

RED: Player = "R"
YELLOW: Player = "Y"
DRAW: Result = "D"


def other(p: Player) -> Player:
    return YELLOW if p == RED else RED
