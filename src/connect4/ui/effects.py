from __future__ import annotations
import sys
import time
from typing import Callable

from connect4.config import AI_THINKING_SPINNER


def ai_thinking(is_running: Callable[[], bool], label: str = "AI is thinking") -> None:
    """
    Block until `is_running()` turns False, drawing a spinner meanwhile.
    KeyboardInterrupt is left to the caller so it can cancel the search.
    """
    if not AI_THINKING_SPINNER:
        while is_running():
            time.sleep(0.05)
        return

    frames = ["|", "/", "-", "\\"]
    i = 0
    try:
        while is_running():
            sys.stdout.write(f"\r{label}... {frames[i % len(frames)]}")
            sys.stdout.flush()
            time.sleep(0.08)
            i += 1
    finally:
        sys.stdout.write("\r" + (" " * (len(label) + 10)) + "\r")
        sys.stdout.flush()
