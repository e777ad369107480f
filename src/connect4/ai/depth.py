from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Tuple

from connect4.config import DEPTH_FAST_SEC, DEPTH_SLOW_SEC, DEPTH_VERY_FAST_SEC, INITIAL_DEPTH
from connect4.errors import InvalidConfigError
from connect4.game.actions import Play

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthController:
    """
    Search depth that follows measured search latency.

    Every computer move is logged together with the depth in force before it,
    so undoing that exact move rolls the depth back as well.
    """
    depth: int = INITIAL_DEPTH
    very_fast_sec: float = DEPTH_VERY_FAST_SEC
    fast_sec: float = DEPTH_FAST_SEC
    slow_sec: float = DEPTH_SLOW_SEC
    _log: List[Tuple[Play, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise InvalidConfigError(f"Search depth must be at least 1, got {self.depth}.")

    def __len__(self) -> int:
        return len(self._log)

    def top(self) -> Play | None:
        return self._log[-1][0] if self._log else None

    def record(self, move: Play, depth_used: int) -> None:
        self._log.append((move, depth_used))

    def tune(self, elapsed: float, empty_cells: int) -> int:
        """Adjust the depth for the next search. Never exceeds the empty cells left."""
        before = self.depth
        if self.depth < empty_cells:
            if elapsed < self.fast_sec:
                self.depth += 1
                if elapsed < self.very_fast_sec:
                    self.depth += 1
                self.depth = min(self.depth, empty_cells)
            elif elapsed > self.slow_sec:
                self.depth = max(1, self.depth - 1)

        if self.depth != before:
            logger.info("Search depth %d -> %d (search took %.3fs)", before, self.depth, elapsed)
        return self.depth

    def on_undo(self, move: Play) -> bool:
        """Restore the saved depth if `move` is the most recent computer move."""
        if self.top() != move:
            return False
        _, saved = self._log.pop()
        if saved != self.depth:
            logger.info("Search depth %d -> %d (computer move undone)", self.depth, saved)
        self.depth = saved
        return True

    def reset(self, depth: int) -> None:
        self.depth = depth
        self._log.clear()
