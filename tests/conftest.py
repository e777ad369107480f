import matplotlib

matplotlib.use("Agg")

import pytest

from connect4.core.board import Board
from connect4.game.engine import Engine
from connect4.types import RED, YELLOW


def play_columns(engine: Engine, columns):
    for c in columns:
        engine.play(c)
    return engine


def draw_grid(cols: int = 7, rows: int = 6):
    """Full board with no line of four: columns alternate, rows change colour every two."""
    return [[RED if (c + r // 2) % 2 == 0 else YELLOW for r in range(rows)] for c in range(cols)]


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def engine():
    return Engine(depth=2)
