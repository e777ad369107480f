from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from connect4.core.board import Snapshot
from connect4.types import Player, Result


@dataclass(frozen=True, slots=True)
class GameState:
    """Read-only view of a game handed to the front-end."""
    grid: Snapshot
    heights: Tuple[int, ...]
    current: Player
    result: Optional[Result]
    moves: int

    @property
    def cols(self) -> int:
        return len(self.grid)

    @property
    def rows(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def is_over(self) -> bool:
        return self.result is not None
