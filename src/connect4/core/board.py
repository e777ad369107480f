# src/connect4/core/board.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from connect4.config import ROWS, COLS, CONNECT_N
from connect4.errors import BoardInvariantError, InvalidConfigError
from connect4.types import RED, YELLOW, Cell, Player, Move, Result

Snapshot = Tuple[Tuple[Cell, ...], ...]  # one tuple per column, bottom row first


@dataclass(slots=True, eq=False)
class Board:
    """
    Grid addressed as grid[col][row] with row 0 at the bottom.
    heights[col] is the row the next disk in that column lands on.
    """
    cols: int = COLS
    rows: int = ROWS
    to_win: int = CONNECT_N
    grid: List[List[Cell]] = field(default_factory=list)
    heights: List[int] = field(default_factory=list)
    _order: Tuple[int, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if self.cols <= 0 or self.rows <= 0:
            raise InvalidConfigError(f"Board dimensions must be positive, got {self.cols}x{self.rows}.")
        if self.to_win <= 0:
            raise InvalidConfigError(f"to_win must be positive, got {self.to_win}.")

        if not self.grid:
            self.grid = [[None for _ in range(self.rows)] for _ in range(self.cols)]
        else:
            self._check_grid()
            self.grid = [list(col) for col in self.grid]
        # A board built from an existing grid derives its heights once.
        self.heights = [self._column_height(c) for c in range(self.cols)]

        # Center-first ordering, ties keep left-to-right order
        center = self.cols // 2
        self._order = tuple(sorted(range(self.cols), key=lambda c: abs(c - center)))

    def _check_grid(self) -> None:
        if len(self.grid) != self.cols or any(len(col) != self.rows for col in self.grid):
            raise InvalidConfigError(f"Grid must have {self.cols} columns of {self.rows} cells.")
        if any(cell not in (RED, YELLOW, None) for col in self.grid for cell in col):
            raise InvalidConfigError("Grid cells must be RED, YELLOW or None.")
        for c, col in enumerate(self.grid):
            h = self._column_height(c)
            if any(cell is not None for cell in col[h:]):
                raise InvalidConfigError(f"Column {c} has a disk above an empty cell.")

    def _column_height(self, c: int) -> int:
        h = 0
        for r in range(self.rows):
            if self.grid[c][r] is None:
                break
            h += 1
        return h

    def copy(self) -> "Board":
        b = Board(self.cols, self.rows, self.to_win)
        b.grid = [col[:] for col in self.grid]
        b.heights = self.heights[:]
        return b

    def get(self, col: int, row: int) -> Cell:
        return self.grid[col][row]

    def snapshot(self) -> Snapshot:
        return tuple(tuple(col) for col in self.grid)

    def legal_columns(self) -> List[Move]:
        return [Move(c) for c in self._order if self.heights[c] < self.rows]

    def is_legal(self, col: int) -> bool:
        return 0 <= col < self.cols and self.heights[col] < self.rows

    def is_full(self) -> bool:
        return all(h == self.rows for h in self.heights)

    def moves_played(self) -> int:
        return sum(self.heights)

    def empty_cells(self) -> int:
        return self.cols * self.rows - self.moves_played()

    def push(self, col: Move, player: Player) -> int:
        """Drop a disk into a column and return the row it landed on."""
        c = int(col)
        if not 0 <= c < self.cols:
            raise BoardInvariantError(f"Column {c} out of range 0..{self.cols - 1}.")
        r = self.heights[c]
        if r >= self.rows:
            raise BoardInvariantError(f"Column {c} is full.")
        self.grid[c][r] = player
        self.heights[c] = r + 1
        return r

    def pop(self, col: Move) -> Player:
        """
        Remove the top-most disk from a column and return it.
        Used both for undoing real moves and for backtracking during search.
        """
        c = int(col)
        if not 0 <= c < self.cols:
            raise BoardInvariantError(f"Column {c} out of range 0..{self.cols - 1}.")
        r = self.heights[c] - 1
        if r < 0:
            raise BoardInvariantError(f"Cannot pop: column {c} is empty.")
        p = self.grid[c][r]
        self.grid[c][r] = None
        self.heights[c] = r
        return p

    def check_outcome(self) -> Optional[Result]:
        from connect4.core.rules import check_outcome

        return check_outcome(self)

    def winning_line(self) -> Optional[Tuple[Player, List[Tuple[int, int]]]]:
        from connect4.core.rules import check_winner_with_line

        return check_winner_with_line(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __hash__(self) -> int:
        return hash(self.snapshot())
