from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from connect4.game.engine import Engine
from connect4.types import Move

logger = logging.getLogger(__name__)


class SearchWorker:
    """
    Runs `engine.play_computer` on a background thread.

    Only one search runs at a time. Cancellation is cooperative: `cancel()` sets
    an event the search polls between root moves, and `join()` waits until the
    board has been fully unwound. Always join before touching the engine again.
    """

    def __init__(self, engine: Engine, on_done: Optional[Callable[[Optional[Move]], None]] = None) -> None:
        self.engine = engine
        self.on_done = on_done
        self.move: Optional[Move] = None
        self.error: Optional[BaseException] = None

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def is_cancelled(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> bool:
        if self.is_running():
            return False

        # Fresh event per search so a late cancel never leaks into the next one
        self._stop_event = threading.Event()
        self.move = None
        self.error = None
        stop_event = self._stop_event

        def worker() -> None:
            try:
                self.move = self.engine.play_computer(cancel=stop_event)
            except Exception as e:
                logger.exception("Search worker failed")
                self.error = e
            if self.on_done is not None and not stop_event.is_set():
                self.on_done(self.move)

        self._thread = threading.Thread(target=worker, name="connect4-search", daemon=True)
        self._thread.start()
        return True

    def cancel(self) -> None:
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the search thread. Returns False on timeout; re-raises a search failure."""
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                return False
        if self.error is not None:
            err, self.error = self.error, None
            raise err
        return True

    def stop(self) -> None:
        """Cancel any running search and wait until it has unwound."""
        if self.is_running():
            logger.info("Cancelling running search")
        self.cancel()
        self.join()
