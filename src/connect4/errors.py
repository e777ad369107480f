from __future__ import annotations


class Connect4Error(Exception):
    """Base class for engine errors."""


class IllegalMoveError(Connect4Error, ValueError):
    """A move was requested in a column that is out of range or full, or after the game ended."""


class InvalidConfigError(Connect4Error, ValueError):
    pass


class BoardInvariantError(Connect4Error, AssertionError):
    """
    The board contract was broken (push onto a full column, pop from an empty one).
    Raised for caller bugs only; never recovered.
    """
