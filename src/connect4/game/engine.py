from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from connect4.ai.depth import DepthController
from connect4.ai.minimax import CancelToken, SearchResult, best_move
from connect4.config import COLS, CONNECT_N, FIRST_PLAYER, INITIAL_DEPTH, ROWS
from connect4.core.board import Board
from connect4.core.rules import check_outcome
from connect4.errors import IllegalMoveError, InvalidConfigError
from connect4.game.actions import Play, apply_play, undo_play
from connect4.game.state import GameState
from connect4.types import RED, YELLOW, Move, Player, Result, other

logger = logging.getLogger(__name__)


class Engine:
    """
    One Connect-Four game: board, turn order, move history and the computer player.

    Not thread-safe. While a search started by `play_computer` or
    `compute_best_move` is running on another thread, nothing else may call a
    mutating method; cancel the search and wait for it first.
    """

    def __init__(
        self,
        cols: int = COLS,
        rows: int = ROWS,
        to_win: int = CONNECT_N,
        first_player: Player = FIRST_PLAYER,
        depth: int = INITIAL_DEPTH,
        rng: Optional[random.Random] = None,
        board: Optional[Board] = None,
    ) -> None:
        if first_player not in (RED, YELLOW):
            raise InvalidConfigError(f"Unknown first player: {first_player!r}")

        # Games may start from a set-up position; reset() returns to it
        self._start = board.copy() if board is not None else Board(cols, rows, to_win)
        self.board = self._start.copy()
        self.first_player: Player = first_player
        self.initial_depth = depth
        self.depth_ctl = DepthController(depth=depth)
        self.rng = rng or random.Random()

        self._turn: Player = self._turn_at_start()
        self._result: Optional[Result] = check_outcome(self.board)
        self._history: List[Play] = []
        self.last_info: dict = {}

    def _turn_at_start(self) -> Player:
        first = self.first_player
        counts = {RED: 0, YELLOW: 0}
        for col in self._start.grid:
            for cell in col:
                if cell is not None:
                    counts[cell] += 1
        lead = counts[first] - counts[other(first)]
        if lead not in (0, 1):
            raise InvalidConfigError(
                f"Start position has {counts[RED]} red and {counts[YELLOW]} yellow disks; "
                f"not reachable with {first} moving first."
            )
        return first if lead == 0 else other(first)

    # -----------------------------
    # Queries
    # -----------------------------
    def current_turn(self) -> Player:
        return self._turn

    def winner(self) -> Optional[Result]:
        return self._result

    @property
    def result(self) -> Optional[Result]:
        return self._result

    @property
    def depth(self) -> int:
        return self.depth_ctl.depth

    @property
    def history(self) -> Tuple[Play, ...]:
        return tuple(self._history)

    def is_over(self) -> bool:
        return self._result is not None

    def last_play(self) -> Optional[Play]:
        return self._history[-1] if self._history else None

    def can_undo(self) -> bool:
        return bool(self._history)

    def legal_columns(self) -> List[Move]:
        if self.is_over():
            return []
        return self.board.legal_columns()

    def state(self) -> GameState:
        return GameState(
            grid=self.board.snapshot(),
            heights=tuple(self.board.heights),
            current=self._turn,
            result=self._result,
            moves=len(self._history),
        )

    # -----------------------------
    # Moves
    # -----------------------------
    def _apply(self, column: int) -> Play:
        play = Play(self._turn, Move(column))
        apply_play(self.board, play)
        self._history.append(play)
        self._result = check_outcome(self.board)
        self._turn = other(self._turn)
        logger.debug("%s played column %d (result=%s)", play.player, column, self._result)
        return play

    def _is_playable(self, column: int) -> bool:
        return not self.is_over() and self.board.is_legal(column)

    def play(self, column: int) -> Play:
        """Apply a move for the player to move. Raises IllegalMoveError if it is not legal."""
        if self.is_over():
            raise IllegalMoveError(f"The game is over ({self._result}); column {column} rejected.")
        if not self.board.is_legal(column):
            raise IllegalMoveError(
                f"Illegal move: column {column} (columns 0..{self.board.cols - 1}, full columns rejected)."
            )
        return self._apply(column)

    def try_play(self, column: int) -> bool:
        if not self._is_playable(column):
            return False
        self._apply(column)
        return True

    def undo_last(self) -> bool:
        if not self._history:
            return False
        play = self._history.pop()
        undo_play(self.board, play)
        self._turn = play.player
        self._result = check_outcome(self.board)
        self.depth_ctl.on_undo(play)
        logger.debug("Undid %s in column %d", play.player, play.column)
        return True

    def play_random_legal(self) -> Move:
        moves = self.legal_columns()
        if not moves:
            raise IllegalMoveError("No legal moves.")
        column = self.rng.choice(moves)
        self._apply(column)
        return column

    def reset(self) -> None:
        self.board = self._start.copy()
        self._turn = self._turn_at_start()
        self._result = check_outcome(self.board)
        self._history.clear()
        self.depth_ctl.reset(self.initial_depth)
        self.last_info = {}

    # -----------------------------
    # Computer player
    # -----------------------------
    def search(self, for_player: Optional[Player] = None, cancel: Optional[CancelToken] = None) -> SearchResult:
        """Run one root search at the current depth without applying anything."""
        player = for_player or self._turn
        result = best_move(self.board, player, self.depth_ctl.depth, cancel=cancel)
        self.last_info = result.info()
        return result

    def compute_best_move(
        self,
        for_player: Optional[Player] = None,
        cancel: Optional[CancelToken] = None,
    ) -> Optional[Move]:
        """Best column for `for_player` (default: player to move), or None if over or cancelled."""
        if self.is_over():
            return None
        return self.search(for_player, cancel).move

    def play_computer(self, cancel: Optional[CancelToken] = None) -> Optional[Move]:
        """
        Search for the player to move and apply the chosen column.

        On completion the depth that was used is logged against the move and the
        depth is tuned from the search time. A cancelled search changes nothing.
        """
        if self.is_over():
            return None

        depth_used = self.depth_ctl.depth
        result = self.search(self._turn, cancel)
        if result.cancelled or result.move is None:
            return None
        if cancel is not None and cancel.is_set():
            logger.info("Search finished but was cancelled before column %d was played", result.move)
            return None

        play = self._apply(result.move)
        self.depth_ctl.record(play, depth_used)
        self.depth_ctl.tune(result.elapsed, self.board.empty_cells())
        return result.move
