from __future__ import annotations

from connect4.core.board import Snapshot


class TranspositionTable:
    """
    Scores keyed by full board contents. The key does not include the side to
    move or the maximizing player, so a table must only live for a single
    root search.
    """

    def __init__(self) -> None:
        self._d: dict[Snapshot, int] = {}
        self.hits = 0

    def __len__(self) -> int:
        return len(self._d)

    def get(self, key: Snapshot) -> int | None:
        score = self._d.get(key)
        if score is not None:
            self.hits += 1
        return score

    def put(self, key: Snapshot, score: int) -> None:
        self._d[key] = score
