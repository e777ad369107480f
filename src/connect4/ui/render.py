from __future__ import annotations
from typing import Optional, Iterable, Set

from connect4.config import CLEAR_SCREEN
from connect4.core.rules import Coord
from connect4.game.state import GameState
from connect4.ui.colors import c, disk, BOLD, DIM, FG_CYAN, REVERSE, RESET


def clear_screen() -> None:
    if CLEAR_SCREEN:
        print("\033[2J\033[H", end="")


def board_lines(state: GameState, highlight: Optional[Iterable[Coord]] = None) -> list[str]:
    """Text rows of the board, top row first. Highlighted cells are (col, row) pairs."""
    hl: Set[Coord] = set(highlight) if highlight else set()
    lines = [c("   " + " ".join(str(i + 1) for i in range(state.cols)), DIM)]

    for r in range(state.rows - 1, -1, -1):
        parts = []
        for col in range(state.cols):
            p = disk(state.grid[col][r])
            if (col, r) in hl:
                p = f"{REVERSE}{p}{RESET}"
            parts.append(p)
        lines.append(" | " + " ".join(parts) + " |")

    lines.append(c("   " + "—" * (2 * state.cols - 1), DIM))
    return lines


def render(state: GameState, status: str = "", highlight: Optional[Iterable[Coord]] = None) -> None:
    clear_screen()

    print(c("CONNECT 4", BOLD))
    if status:
        print(c(status, FG_CYAN))
    else:
        print()

    for line in board_lines(state, highlight):
        print(line)
    print(c(f"   Enter 1-{state.cols} to drop, u to undo, q to quit.", DIM))
