import threading

import pytest

from conftest import play_columns
from connect4.ai.minimax import MinimaxSearch, WIN_SCORE, best_move, trial_move
from connect4.game.engine import Engine
from connect4.types import RED, YELLOW

# Red to move with three in column 0
RED_THREATENS_0 = [0, 6, 0, 6, 0, 5]
# Red to move, Yellow has three in column 0
YELLOW_THREATENS_0 = [6, 0, 6, 0, 5, 0]


class StopAfter:
    """Cancellation token that turns on after a number of polls."""

    def __init__(self, polls: int) -> None:
        self.polls = polls
        self.calls = 0

    def is_set(self) -> bool:
        self.calls += 1
        return self.calls > self.polls


class TestBestMove:
    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_takes_immediate_win(self, depth):
        e = play_columns(Engine(depth=depth), RED_THREATENS_0)
        assert e.compute_best_move() == 0

    def test_immediate_win_score(self):
        e = play_columns(Engine(), RED_THREATENS_0)
        result = best_move(e.board, RED, depth=3)
        assert result.move == 0
        assert result.score == WIN_SCORE + 3

    @pytest.mark.parametrize("depth", [2, 3])
    def test_blocks_immediate_loss(self, depth):
        e = play_columns(Engine(depth=depth), YELLOW_THREATENS_0)
        assert e.compute_best_move() == 0

    def test_search_for_other_player(self):
        e = play_columns(Engine(depth=2), YELLOW_THREATENS_0)
        # Yellow is not to move, but asked for its best column it wins at once
        assert e.compute_best_move(for_player=YELLOW) == 0

    def test_ties_keep_center_first(self):
        e = Engine(depth=1)
        assert e.compute_best_move() == 3

    def test_search_does_not_mutate_board(self):
        e = play_columns(Engine(depth=4), [3, 2, 3, 4])
        before = e.board.snapshot()
        heights = list(e.board.heights)
        e.compute_best_move()
        assert e.board.snapshot() == before
        assert e.board.heights == heights
        assert e.state().moves == 4

    def test_compute_does_not_apply_move(self, engine):
        engine.compute_best_move()
        assert engine.state().moves == 0
        assert len(engine.depth_ctl) == 0

    def test_finished_game_returns_none(self, engine):
        play_columns(engine, [0, 1, 0, 1, 0, 1, 0])
        snap = engine.state()
        assert engine.compute_best_move() is None
        assert engine.play_computer() is None
        assert engine.state() == snap

    def test_stats_reported(self, engine):
        engine.compute_best_move()
        info = engine.last_info
        assert info["depth"] == 2
        assert info["nodes"] > 0
        assert info["move_col"] == 3
        assert info["cancelled"] is False


class TestTranspositionScope:
    def test_each_search_has_its_own_table(self):
        e = play_columns(Engine(), [3, 3, 2])
        first = MinimaxSearch(board=e.board, perspective=YELLOW, depth=3)
        first.run()
        second = MinimaxSearch(board=e.board, perspective=RED, depth=3)
        assert len(first.tt) > 0
        assert len(second.tt) == 0
        assert first.tt is not second.tt

    def test_alternating_perspectives_agree_with_fresh_searches(self):
        e = play_columns(Engine(depth=3), YELLOW_THREATENS_0)
        for player in (RED, YELLOW, RED):
            expected = MinimaxSearch(board=e.board.copy(), perspective=player, depth=3).run()
            got = e.search(for_player=player)
            assert (got.move, got.score) == (expected.move, expected.score)


class TestCancellation:
    def test_cancelled_before_start(self):
        e = play_columns(Engine(depth=3), [3, 4])
        before = e.state()
        stop = threading.Event()
        stop.set()
        assert e.compute_best_move(cancel=stop) is None
        assert e.last_info["cancelled"] is True
        assert e.state() == before

    def test_cancelled_between_root_moves(self):
        e = play_columns(Engine(depth=3), [3, 4])
        before = e.board.snapshot()
        token = StopAfter(2)
        result = e.search(cancel=token)
        assert result.cancelled
        assert result.move is None
        assert e.board.snapshot() == before

    def test_cancelled_play_computer_records_nothing(self):
        e = Engine(depth=3)
        assert e.play_computer(cancel=StopAfter(3)) is None
        assert e.state().moves == 0
        assert e.depth == 3
        assert len(e.depth_ctl) == 0

    def test_cancel_after_search_but_before_apply(self):
        # Search completes (never polled as set), then the token flips
        class FlipAtEnd:
            flipped = False

            def is_set(self):
                return self.flipped

        e = Engine(depth=1)
        token = FlipAtEnd()
        original = e.search

        def search_then_flip(*args, **kwargs):
            result = original(*args, **kwargs)
            token.flipped = True
            return result

        e.search = search_then_flip
        assert e.play_computer(cancel=token) is None
        assert e.state().moves == 0


class TestTrialMove:
    def test_pop_on_exception(self, board):
        with pytest.raises(RuntimeError):
            with trial_move(board, 2, RED):
                assert board.heights[2] == 1
                raise RuntimeError("boom")
        assert board.heights[2] == 0
        assert board.get(2, 0) is None
