from __future__ import annotations

from enum import Enum
import logging
from typing import Optional

from connect4.game.engine import Engine
from connect4.game.worker import SearchWorker
from connect4.types import RED, Player

logger = logging.getLogger(__name__)


class GameMode(Enum):
    PLAYER_V_PLAYER = "pvp"
    PLAYER_V_RANDOM = "random"
    PLAYER_V_COMPUTER = "computer"


class GameSession:
    """
    Interactive wrapper around an Engine: who the human is, which opponent plays
    the other side, and the undo policy. All engine mutations go through here so
    none of them can overlap a running search.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.PLAYER_V_PLAYER,
        human: Player = RED,
        engine: Optional[Engine] = None,
        allow_undo: bool = True,
    ) -> None:
        self.mode = mode
        self.human = human
        self.allow_undo = allow_undo
        self.engine = engine or Engine()
        self.worker = SearchWorker(self.engine)

    def is_players_turn(self) -> bool:
        if self.mode is GameMode.PLAYER_V_PLAYER:
            return True
        return self.engine.current_turn() == self.human

    def is_thinking(self) -> bool:
        return self.worker.is_running()

    def submit(self, column: int) -> bool:
        """A human move. Silently ignored when it is not the human's turn or the column is illegal."""
        if self.is_thinking() or not self.is_players_turn():
            return False
        return self.engine.try_play(column)

    def auto_move(self, wait: bool = False) -> bool:
        """Let the machine side move if it is its turn. Returns True if a move was played or started."""
        if self.mode is GameMode.PLAYER_V_PLAYER or self.engine.is_over():
            return False
        if self.is_players_turn() or self.is_thinking():
            return False

        if self.mode is GameMode.PLAYER_V_RANDOM:
            self.engine.play_random_legal()
            return True

        started = self.worker.start()
        if started and wait:
            self.worker.join()
        return started

    def cancel(self) -> None:
        self.worker.stop()

    def undo(self) -> bool:
        """
        Player v player: undo one move.
        Against the machine: undo back to the human's previous turn, cancelling
        a running search first. Always False when undo is disabled.
        """
        if not self.allow_undo:
            return False
        engine = self.engine
        if self.mode is GameMode.PLAYER_V_PLAYER:
            return engine.undo_last()

        if self.is_players_turn():
            if len(engine.history) < 2:
                return False
        elif not engine.can_undo():
            return False

        self.cancel()

        # The machine's move may have landed while we waited for the search
        if self.is_players_turn():
            engine.undo_last()
            engine.undo_last()
        else:
            engine.undo_last()
            if not self.is_players_turn() and engine.can_undo():
                engine.undo_last()

        logger.debug("Undo done, %d moves left", len(engine.history))
        return True

    def new_game(self) -> None:
        self.cancel()
        self.engine.reset()
