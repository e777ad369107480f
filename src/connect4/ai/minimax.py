from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
import time
from typing import Iterator, Optional, Protocol

from connect4.ai.tt import TranspositionTable
from connect4.config import MAX_SCORE_WINDOW
from connect4.core.board import Board
from connect4.core.rules import check_outcome
from connect4.types import DRAW, Move, Player, other

logger = logging.getLogger(__name__)

WIN_SCORE = 100


class CancelToken(Protocol):
    def is_set(self) -> bool:
        ...


@contextmanager
def trial_move(board: Board, col: Move, player: Player) -> Iterator[None]:
    """Push a disk for the duration of the block; the pop happens on every exit path."""
    board.push(col, player)
    try:
        yield
    finally:
        board.pop(col)


@dataclass(slots=True)
class SearchResult:
    move: Optional[Move]
    score: int = 0
    depth: int = 0
    nodes: int = 0
    tt_hits: int = 0
    cutoffs: int = 0
    elapsed: float = 0.0
    cancelled: bool = False

    def info(self) -> dict:
        return {
            "move_col": None if self.move is None else int(self.move),
            "depth": self.depth,
            "nodes": self.nodes,
            "tt_hits": self.tt_hits,
            "cutoffs": self.cutoffs,
            "eval": self.score,
            "time_ms": max(1, int(self.elapsed * 1000)),
            "cancelled": self.cancelled,
        }


@dataclass(slots=True)
class MinimaxSearch:
    """
    Depth-limited minimax with alpha-beta pruning over one shared board.

    Every trial move is pushed and popped in place, so the board is left exactly
    as found whether the search completes, prunes, or is cancelled. The
    transposition table belongs to this object and is dropped with it.
    """
    board: Board
    perspective: Player
    depth: int
    cancel: Optional[CancelToken] = None
    tt: TranspositionTable = field(default_factory=TranspositionTable)

    _nodes: int = 0
    _cutoffs: int = 0

    def _cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()

    def run(self) -> SearchResult:
        board = self.board
        me = self.perspective
        start = time.perf_counter()

        best_move: Optional[Move] = None
        best_score = -MAX_SCORE_WINDOW

        for m in board.legal_columns():
            if self._cancelled():
                break
            with trial_move(board, m, me):
                score = self._min_value(self.depth, -MAX_SCORE_WINDOW, MAX_SCORE_WINDOW)
            # Strictly greater: ties keep the first (most central) column
            if best_move is None or score > best_score:
                best_move = m
                best_score = score

        elapsed = time.perf_counter() - start
        if self._cancelled():
            logger.info("Search for %s cancelled after %.3fs (%d nodes)", me, elapsed, self._nodes)
            return SearchResult(
                move=None,
                depth=self.depth,
                nodes=self._nodes,
                tt_hits=self.tt.hits,
                cutoffs=self._cutoffs,
                elapsed=elapsed,
                cancelled=True,
            )

        logger.info(
            "Search for %s: column=%s score=%d depth=%d nodes=%d tt=%d cut=%d %.3fs",
            me, best_move, best_score, self.depth, self._nodes, self.tt.hits, self._cutoffs, elapsed,
        )
        return SearchResult(
            move=best_move,
            score=best_score,
            depth=self.depth,
            nodes=self._nodes,
            tt_hits=self.tt.hits,
            cutoffs=self._cutoffs,
            elapsed=elapsed,
        )

    def _terminal_score(self, depth: int) -> int | None:
        outcome = check_outcome(self.board)
        if outcome is None:
            return 0 if depth == 0 else None
        if outcome == DRAW:
            return 0
        # Faster wins and slower losses score higher
        if outcome == self.perspective:
            return WIN_SCORE + depth
        return -WIN_SCORE - depth

    def _max_value(self, depth: int, alpha: int, beta: int) -> int:
        self._nodes += 1
        key = self.board.snapshot()
        cached = self.tt.get(key)
        if cached is not None:
            return cached

        term = self._terminal_score(depth)
        if term is not None:
            return term

        me = self.perspective
        v = -MAX_SCORE_WINDOW
        pruned = False
        for m in self.board.legal_columns():
            with trial_move(self.board, m, me):
                v = max(v, self._min_value(depth - 1, alpha, beta))
            alpha = max(alpha, v)
            if beta <= alpha:
                self._cutoffs += 1
                pruned = True
                break

        # A cut-off value is only a bound, never cache it
        if not pruned:
            self.tt.put(key, v)
        return v

    def _min_value(self, depth: int, alpha: int, beta: int) -> int:
        self._nodes += 1
        key = self.board.snapshot()
        cached = self.tt.get(key)
        if cached is not None:
            return cached

        term = self._terminal_score(depth)
        if term is not None:
            return term

        opp = other(self.perspective)
        v = MAX_SCORE_WINDOW
        pruned = False
        for m in self.board.legal_columns():
            with trial_move(self.board, m, opp):
                v = min(v, self._max_value(depth - 1, alpha, beta))
            beta = min(beta, v)
            if beta <= alpha:
                self._cutoffs += 1
                pruned = True
                break

        if not pruned:
            self.tt.put(key, v)
        return v


def best_move(
    board: Board,
    player: Player,
    depth: int,
    cancel: Optional[CancelToken] = None,
) -> SearchResult:
    """Run one root search with a fresh transposition table."""
    return MinimaxSearch(board=board, perspective=player, depth=depth, cancel=cancel).run()
