from __future__ import annotations

import argparse
import csv
import logging
import os
import random
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence

from connect4.config import COLS, CONNECT_N, ROWS
from connect4.game.engine import Engine
from connect4.log import configure_logging
from connect4.types import YELLOW

logger = logging.getLogger(__name__)

TRACE_COLUMNS = [
    "game", "ply", "player", "column",
    "depth", "time_ms", "nodes", "tt_hits", "cutoffs", "score",
    "result",
]


@dataclass(frozen=True)
class SelfPlayConfig:
    games: int = 4
    opponent: str = "computer"  # "computer" | "random" (random plays Yellow)
    depth: int = 4
    opening_plies: int = 2
    seed: int = 1234
    cols: int = COLS
    rows: int = ROWS
    to_win: int = CONNECT_N


def play_headless(game_id: int, cfg: SelfPlayConfig) -> List[Dict[str, object]]:
    """Play one game to the end and return one trace row per computer move."""
    engine = Engine(
        cols=cfg.cols,
        rows=cfg.rows,
        to_win=cfg.to_win,
        depth=cfg.depth,
        rng=random.Random(cfg.seed + game_id),
    )

    # A few random plies so games don't all repeat the same line
    for _ in range(cfg.opening_plies):
        if engine.is_over():
            break
        engine.play_random_legal()

    rows: List[Dict[str, object]] = []
    while not engine.is_over():
        player = engine.current_turn()
        if cfg.opponent == "random" and player == YELLOW:
            engine.play_random_legal()
            continue

        column = engine.play_computer()
        info = engine.last_info
        rows.append({
            "game": game_id,
            "ply": len(engine.history),
            "player": player,
            "column": column,
            "depth": info.get("depth"),
            "time_ms": info.get("time_ms"),
            "nodes": info.get("nodes"),
            "tt_hits": info.get("tt_hits"),
            "cutoffs": info.get("cutoffs"),
            "score": info.get("eval"),
        })

    for row in rows:
        row["result"] = engine.result
    logger.info("Game %d finished: %s after %d moves", game_id, engine.result, len(engine.history))
    return rows


def run_batch(args) -> List[Dict[str, object]]:
    (game_ids, cfg) = args
    out: List[Dict[str, object]] = []
    for game_id in game_ids:
        out.extend(play_headless(game_id, cfg))
    return out


def chunked(lst: Sequence[int], size: int):
    for i in range(0, len(lst), size):
        yield lst[i : i + size]


def run_selfplay(cfg: SelfPlayConfig, max_workers: int | None = None, batch_games: int = 1) -> List[Dict[str, object]]:
    game_ids = list(range(1, cfg.games + 1))
    if max_workers is None:
        max_workers = min(os.cpu_count() or 2, 6)

    rows: List[Dict[str, object]] = []
    if max_workers <= 1:
        rows = run_batch((game_ids, cfg))
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as ex:
            futures = [ex.submit(run_batch, (chunk, cfg)) for chunk in chunked(game_ids, batch_games)]
            for fut in as_completed(futures):
                rows.extend(fut.result())

    rows.sort(key=lambda r: (r["game"], r["ply"]))
    return rows


def write_trace(rows: List[Dict[str, object]], out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=TRACE_COLUMNS)
        w.writeheader()
        for row in rows:
            w.writerow(row)
    return out_path


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Play headless Connect-4 games and record per-move search stats.")
    ap.add_argument("--games", type=int, default=4, help="Number of games to play")
    ap.add_argument("--opponent", choices=["computer", "random"], default="computer", help="Who plays Yellow")
    ap.add_argument("--depth", type=int, default=4, help="Initial search depth (adapts during play)")
    ap.add_argument("--opening", type=int, default=2, help="Random opening plies before the engine takes over")
    ap.add_argument("--seed", type=int, default=1234)
    ap.add_argument("--workers", type=int, default=None, help="Worker processes (1 = run in-process)")
    ap.add_argument("--out-dir", type=str, default="data/results", help="Directory for selfplay_*.csv")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    configure_logging()

    cfg = SelfPlayConfig(
        games=args.games,
        opponent=args.opponent,
        depth=args.depth,
        opening_plies=args.opening,
        seed=args.seed,
    )
    rows = run_selfplay(cfg, max_workers=args.workers)

    ts = time.strftime("%Y%m%d_%H%M%S")
    out_path = write_trace(rows, Path(args.out_dir) / f"selfplay_{ts}.csv")
    print(f"Wrote {len(rows)} moves from {cfg.games} games to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
