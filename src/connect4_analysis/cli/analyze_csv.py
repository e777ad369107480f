from __future__ import annotations

import argparse
from pathlib import Path

from ..io.load_results import LoadSpec, load_latest_from_dir, load_trace
from ..metrics.summarize import SummaryConfig, filter_rows, game_results, numeric_summary, per_depth, per_ply, result_counts


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Summarize Connect-4 self-play search traces.")
    ap.add_argument("--csv", type=str, default=None, help="Path to a trace CSV. If omitted, uses latest in --results-dir.")
    ap.add_argument("--results-dir", type=str, default="data/results", help="Directory containing selfplay_*.csv")
    ap.add_argument("--pattern", type=str, default="selfplay_*.csv", help="Glob pattern for selecting latest file")
    ap.add_argument("--min-ply", type=int, default=0, help="Ignore moves before this ply")
    ap.add_argument("--min-moves", type=int, default=0, help="Ignore games with fewer recorded moves")
    return ap


def resolve_csv(args: argparse.Namespace) -> Path:
    if args.csv:
        return Path(args.csv)
    return load_latest_from_dir(Path(args.results_dir), pattern=args.pattern)


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    csv_path = resolve_csv(args)
    df = load_trace(LoadSpec(csv_path=csv_path))
    df = filter_rows(df, SummaryConfig(min_ply=args.min_ply, min_moves=args.min_moves))

    print(f"\nLoaded: {csv_path}")
    print(f"Moves: {len(df):,}  Games: {df['game'].nunique()}")

    print("\n=== Results ===")
    print(result_counts(df).to_string())

    print("\n=== Games ===")
    print(game_results(df).to_string(index=False))

    print("\n=== By depth ===")
    print(per_depth(df).to_string(index=False))

    print("\n=== By ply ===")
    print(per_ply(df).to_string(index=False))

    desc = numeric_summary(df)
    if not desc.empty:
        print("\n=== Numeric summary ===")
        print(desc.to_string())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
