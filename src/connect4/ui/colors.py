from __future__ import annotations
from connect4.config import USE_COLOR
from connect4.types import RED, Cell

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
REVERSE = "\033[7m"

FG_RED = "\033[31m"
FG_YELLOW = "\033[33m"
FG_CYAN = "\033[36m"
FG_GRAY = "\033[90m"

PLAYER_NAMES = {"R": "Red", "Y": "Yellow"}


def c(s: str, code: str) -> str:
    if not USE_COLOR:
        return s
    return f"{code}{s}{RESET}"


def disk(cell: Cell) -> str:
    if cell is None:
        return c("·", FG_GRAY)
    if cell == RED:
        return c("●", FG_RED)
    return c("●", FG_YELLOW)


def name(cell: Cell) -> str:
    return PLAYER_NAMES.get(cell or "", "-")
