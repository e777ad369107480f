from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd
import matplotlib.pyplot as plt


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _finish(fig, outdir: Path, filename: str, *, show: bool) -> Path | None:
    if show:
        plt.show()
        return None
    _ensure_dir(outdir)
    out = outdir / filename
    fig.savefig(out, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return out


def plot_histograms(df: pd.DataFrame, outdir: Path, cols: Iterable[str], *, show: bool) -> list[Path]:
    num_cols = [c for c in cols if c in df.columns and pd.api.types.is_numeric_dtype(df[c])]
    written: list[Path] = []

    for c in num_cols:
        fig = plt.figure()
        plt.hist(df[c].dropna(), bins=30)
        plt.title(f"Histogram: {c}")
        plt.xlabel(c)
        plt.ylabel("moves")
        out = _finish(fig, outdir, f"hist_{c}.png", show=show)
        if out:
            written.append(out)
    return written


def plot_metric_over_ply(df: pd.DataFrame, outdir: Path, metric: str, *, show: bool) -> Path | None:
    """
    One faint line per game plus the mean across games.
    Used for depth (how the adaptive depth moves) and time_ms (what it costs).
    """
    if metric not in df.columns or "ply" not in df.columns or "game" not in df.columns:
        return None
    if not pd.api.types.is_numeric_dtype(df[metric]):
        return None

    fig = plt.figure(figsize=(9, 5))
    for _, g in df.groupby("game"):
        plt.plot(g["ply"], g[metric], alpha=0.25, linewidth=1)

    mean = df.groupby("ply")[metric].mean()
    plt.plot(mean.index, mean.values, color="black", linewidth=2, label="mean")
    plt.title(f"{metric} by ply")
    plt.xlabel("ply")
    plt.ylabel(metric)
    plt.legend()

    return _finish(fig, outdir, f"{metric}_by_ply.png", show=show)


def plot_scatter(df: pd.DataFrame, outdir: Path, x: str, y: str, *, show: bool) -> Path | None:
    if x not in df.columns or y not in df.columns:
        return None
    if not (pd.api.types.is_numeric_dtype(df[x]) and pd.api.types.is_numeric_dtype(df[y])):
        return None

    fig = plt.figure()
    if "depth" in df.columns:
        sc = plt.scatter(df[x], df[y], c=df["depth"], cmap="viridis", alpha=0.7)
        plt.colorbar(sc, label="depth")
    else:
        plt.scatter(df[x], df[y], alpha=0.6)
    plt.title(f"{y} vs {x}")
    plt.xlabel(x)
    plt.ylabel(y)

    return _finish(fig, outdir, f"scatter_{y}_vs_{x}.png", show=show)
