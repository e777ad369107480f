from __future__ import annotations
from dataclasses import dataclass

from connect4.core.board import Board
from connect4.types import Player, Move


@dataclass(frozen=True, slots=True)
class Play:
    player: Player
    column: Move


def apply_play(board: Board, play: Play) -> int:
    return board.push(play.column, play.player)


def undo_play(board: Board, play: Play) -> Player:
    return board.pop(play.column)
