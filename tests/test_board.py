import random

import pytest

from connect4.core.board import Board
from connect4.errors import BoardInvariantError, InvalidConfigError
from connect4.types import RED, YELLOW


class TestBoardBasics:
    def test_empty_board(self, board):
        assert board.cols == 7 and board.rows == 6 and board.to_win == 4
        assert board.heights == [0] * 7
        assert all(board.get(c, r) is None for c in range(7) for r in range(6))
        assert not board.is_full()
        assert board.empty_cells() == 42

    def test_push_lands_on_bottom_and_stacks(self, board):
        assert board.push(3, RED) == 0
        assert board.push(3, YELLOW) == 1
        assert board.get(3, 0) == RED
        assert board.get(3, 1) == YELLOW
        assert board.heights[3] == 2
        assert board.moves_played() == 2

    def test_pop_returns_last_pushed(self, board):
        board.push(2, RED)
        board.push(2, YELLOW)
        assert board.pop(2) == YELLOW
        assert board.get(2, 1) is None
        assert board.pop(2) == RED
        assert board.heights[2] == 0

    def test_push_full_column_is_invariant_error(self):
        b = Board(cols=3, rows=2, to_win=2)
        b.push(0, RED)
        b.push(0, YELLOW)
        with pytest.raises(BoardInvariantError):
            b.push(0, RED)

    def test_pop_empty_column_is_invariant_error(self, board):
        with pytest.raises(BoardInvariantError):
            board.pop(0)

    def test_out_of_range_column(self, board):
        with pytest.raises(BoardInvariantError):
            board.push(7, RED)
        with pytest.raises(BoardInvariantError):
            board.pop(-1)

    @pytest.mark.parametrize("cols,rows,to_win", [(0, 6, 4), (7, 0, 4), (7, 6, 0), (-1, 6, 4), (7, 6, -2)])
    def test_invalid_construction(self, cols, rows, to_win):
        with pytest.raises(InvalidConfigError):
            Board(cols=cols, rows=rows, to_win=to_win)

    def test_invalid_config_is_value_error(self):
        with pytest.raises(ValueError):
            Board(cols=0)


class TestLegalColumns:
    def test_center_first_order(self, board):
        assert board.legal_columns() == [3, 2, 4, 1, 5, 0, 6]

    def test_even_width_order(self):
        assert Board(cols=6, rows=4, to_win=3).legal_columns() == [3, 2, 4, 1, 5, 0]

    def test_full_columns_excluded(self):
        b = Board(cols=5, rows=2, to_win=3)
        for _ in range(2):
            b.push(2, RED)
            b.push(0, YELLOW)
        assert b.legal_columns() == [1, 3, 4]
        assert not b.is_legal(2)
        assert b.is_legal(1)

    def test_is_full(self):
        b = Board(cols=2, rows=2, to_win=2)
        for c in (0, 0, 1, 1):
            b.push(c, RED)
        assert b.is_full()
        assert b.legal_columns() == []


class TestInvariants:
    def test_random_push_pop_sequences_keep_heights(self):
        rng = random.Random(7)
        b = Board()
        stacks = {c: [] for c in range(b.cols)}

        for _ in range(500):
            legal = b.legal_columns()
            nonempty = [c for c in range(b.cols) if b.heights[c] > 0]
            if legal and (not nonempty or rng.random() < 0.6):
                c = rng.choice(legal)
                p = rng.choice([RED, YELLOW])
                b.push(c, p)
                stacks[c].append(p)
            else:
                c = rng.choice(nonempty)
                assert b.pop(c) == stacks[c].pop()

            for col in range(b.cols):
                h = b.heights[col]
                assert 0 <= h <= b.rows
                assert h == len(stacks[col])
                assert all(b.get(col, r) is not None for r in range(h))
                assert all(b.get(col, r) is None for r in range(h, b.rows))

    def test_board_from_grid_derives_heights(self):
        grid = [[RED, YELLOW, None], [None, None, None], [YELLOW, None, None]]
        b = Board(cols=3, rows=3, to_win=3, grid=grid)
        assert b.heights == [2, 0, 1]

    def test_board_from_snapshot_is_mutable(self):
        src = Board()
        src.push(3, RED)
        b = Board(grid=src.snapshot())
        b.push(3, YELLOW)
        assert b.get(3, 1) == YELLOW
        assert src.get(3, 1) is None

    def test_floating_disk_rejected(self):
        grid = [[None] * 6 for _ in range(7)]
        grid[0][2] = RED
        with pytest.raises(InvalidConfigError):
            Board(grid=grid)

    @pytest.mark.parametrize(
        "grid",
        [
            [[None] * 6 for _ in range(3)],
            [[None] * 5 for _ in range(7)],
            [[None] * 6 for _ in range(6)] + [[None] * 7],
            [["X"] + [None] * 5 for _ in range(7)],
        ],
    )
    def test_malformed_grid_rejected(self, grid):
        with pytest.raises(InvalidConfigError):
            Board(grid=grid)


class TestEqualityAndSnapshot:
    def test_structural_equality(self):
        a, b = Board(), Board()
        for c, p in [(3, RED), (2, YELLOW), (3, RED)]:
            a.push(c, p)
            b.push(c, p)
        assert a == b
        assert hash(a) == hash(b)
        b.pop(3)
        assert a != b

    def test_snapshot_is_immutable_key(self, board):
        board.push(0, RED)
        key = board.snapshot()
        table = {key: 5}
        board.push(1, YELLOW)
        assert board.snapshot() not in table
        board.pop(1)
        assert table[board.snapshot()] == 5

    def test_copy_is_independent(self, board):
        board.push(4, RED)
        dup = board.copy()
        dup.push(4, YELLOW)
        assert board.heights[4] == 1
        assert dup.heights[4] == 2
        assert board.get(4, 1) is None
