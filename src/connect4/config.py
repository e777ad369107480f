# src/connect4/config.py

from __future__ import annotations
import os

ROWS = 6
COLS = 7
CONNECT_N = 4
FIRST_PLAYER = "R"

# UI toggles
USE_COLOR = True
CLEAR_SCREEN = True

# “AI thinking” spinner while the search worker runs
AI_THINKING_SPINNER = True

# Search defaults. Depth is adjusted after every computer move.
INITIAL_DEPTH = 6
MAX_SCORE_WINDOW = 1000

# Adaptive depth thresholds (seconds for one whole search)
DEPTH_VERY_FAST_SEC = 0.2
DEPTH_FAST_SEC = 1.5
DEPTH_SLOW_SEC = 3.0

LOG_LEVEL = os.environ.get("CONNECT4_LOG_LEVEL", "WARNING")
