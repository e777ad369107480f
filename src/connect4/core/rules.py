from __future__ import annotations
from typing import TYPE_CHECKING, Optional, List, Tuple

from connect4.types import DRAW, Player, Result

if TYPE_CHECKING:
    from connect4.core.board import Board

Coord = Tuple[int, int]  # (col, row)


def _scan(
    board: "Board",
    cols: range,
    rows: range,
    dc: int,
    dr: int,
) -> Optional[Tuple[Player, List[Coord]]]:
    """
    Every (c, r) in cols x rows is the start of a candidate line of to_win cells
    stepping by (dc, dr). The ranges are chosen by the caller so a line never
    leaves the grid; an empty range simply means no line fits in that direction.
    """
    g = board.grid
    n = board.to_win
    for c in cols:
        for r in rows:
            p = g[c][r]
            if p is None:
                continue
            if all(g[c + i * dc][r + i * dr] == p for i in range(1, n)):
                return p, [(c + i * dc, r + i * dr) for i in range(n)]
    return None


def check_winner_with_line(board: "Board") -> Optional[Tuple[Player, List[Coord]]]:
    cols, rows, n = board.cols, board.rows, board.to_win

    # Horizontal
    res = _scan(board, range(cols - n + 1), range(rows), 1, 0)
    if res:
        return res

    # Vertical
    res = _scan(board, range(cols), range(rows - n + 1), 0, 1)
    if res:
        return res

    # Diagonal up-right
    res = _scan(board, range(cols - n + 1), range(rows - n + 1), 1, 1)
    if res:
        return res

    # Diagonal down-right
    return _scan(board, range(cols - n + 1), range(n - 1, rows), 1, -1)


def check_winner(board: "Board") -> Optional[Player]:
    res = check_winner_with_line(board)
    return res[0] if res else None


def check_outcome(board: "Board") -> Optional[Result]:
    w = check_winner(board)
    if w is not None:
        return w
    if board.is_full():
        return DRAW
    return None


def is_draw(board: "Board") -> bool:
    return board.is_full() and check_winner(board) is None
