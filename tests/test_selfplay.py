from pathlib import Path

from connect4.scripts.selfplay import TRACE_COLUMNS, SelfPlayConfig, play_headless, run_selfplay, write_trace
from connect4_analysis.io.load_results import LoadSpec, load_trace

SMALL = dict(cols=4, rows=4, to_win=3, depth=1)


class TestSelfPlay:
    def test_headless_game_rows(self):
        cfg = SelfPlayConfig(games=1, opponent="random", opening_plies=0, **SMALL)
        rows = play_headless(1, cfg)
        assert rows
        assert all(r["player"] == "R" for r in rows)
        assert {r["result"] for r in rows} <= {"R", "Y", "D"}
        assert len({r["result"] for r in rows}) == 1
        plies = [r["ply"] for r in rows]
        assert plies == sorted(plies)
        assert all(set(TRACE_COLUMNS) <= set(r) for r in rows)

    def test_computer_vs_computer_in_process(self):
        cfg = SelfPlayConfig(games=2, opponent="computer", opening_plies=1, seed=3, **SMALL)
        rows = run_selfplay(cfg, max_workers=1)
        assert {r["game"] for r in rows} == {1, 2}
        assert {r["player"] for r in rows} == {"R", "Y"}
        assert all(r["depth"] >= 1 for r in rows)

    def test_trace_round_trips_through_loader(self, tmp_path: Path):
        cfg = SelfPlayConfig(games=1, opponent="random", **SMALL)
        rows = run_selfplay(cfg, max_workers=1)
        out = write_trace(rows, tmp_path / "out" / "selfplay_test.csv")
        assert out.exists()

        df = load_trace(LoadSpec(csv_path=out))
        assert list(df.columns) == TRACE_COLUMNS
        assert len(df) == len(rows)
        assert df["depth"].min() >= 1
