# src/connect4_analysis/cli/make_figures.py
from __future__ import annotations

import argparse
from pathlib import Path

from ..io.load_results import LoadSpec, load_latest_from_dir, load_trace
from ..plots.chart import plot_histograms, plot_metric_over_ply, plot_scatter


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="connect4_analysis figures",
        description="Plot depth and search cost from selfplay_*.csv traces",
    )
    ap.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Path to a specific trace CSV. If omitted, uses latest CSV in --results-dir matching --pattern.",
    )
    ap.add_argument("--results-dir", type=str, default="data/results")
    ap.add_argument("--pattern", type=str, default="selfplay_*.csv")
    ap.add_argument("--figures-dir", type=str, default="data/figures", help="Output directory for PNGs.")
    ap.add_argument("--show", action="store_true", help="Show plots instead of saving")
    ap.add_argument("--no-hists", action="store_true", help="Disable histogram generation")
    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    if args.csv:
        csv_path = Path(args.csv)
    else:
        csv_path = load_latest_from_dir(Path(args.results_dir), pattern=args.pattern)

    df = load_trace(LoadSpec(csv_path=csv_path))
    outdir = Path(args.figures_dir)

    created: list[Path] = []
    for metric in ("depth", "time_ms"):
        p = plot_metric_over_ply(df, outdir, metric, show=args.show)
        if p:
            created.append(p)

    p = plot_scatter(df, outdir, x="time_ms", y="nodes", show=args.show)
    if p:
        created.append(p)

    if not args.no_hists:
        created.extend(plot_histograms(df, outdir, ["depth", "time_ms"], show=args.show))

    print(f"Loaded: {csv_path}")
    if not args.show:
        print(f"Wrote {len(created)} figures under: {outdir.resolve()}")
        for path in created:
            print(f"- {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
