from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class SummaryConfig:
    # Only consider moves at or after this ply (skip the random opening)
    min_ply: int = 0
    # Drop games shorter than this many recorded moves
    min_moves: int = 0


def _require_cols(df: pd.DataFrame, cols: list[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Present: {list(df.columns)}")


def filter_rows(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    _require_cols(df, ["game", "ply"])
    out = df[df["ply"] >= cfg.min_ply].copy()

    if cfg.min_moves > 0:
        counts = out.groupby("game")["ply"].transform("count")
        out = out[counts >= cfg.min_moves].copy()

    return out


def per_ply(df: pd.DataFrame) -> pd.DataFrame:
    """Mean depth and search cost at each ply, across games."""
    _require_cols(df, ["ply", "depth", "time_ms"])
    agg = {"depth": "mean", "time_ms": ["mean", "max"]}
    if "nodes" in df.columns:
        agg["nodes"] = "mean"

    out = df.groupby("ply").agg(agg)
    out.columns = ["_".join(c) for c in out.columns]
    out.insert(0, "moves", df.groupby("ply").size())
    return out.reset_index()


def per_depth(df: pd.DataFrame) -> pd.DataFrame:
    """How long searches at each depth took."""
    _require_cols(df, ["depth", "time_ms"])
    g = df.groupby("depth")["time_ms"]
    out = pd.DataFrame({
        "moves": g.size(),
        "time_ms_median": g.median(),
        "time_ms_p95": g.quantile(0.95),
        "time_ms_max": g.max(),
    })
    if "nodes" in df.columns:
        out["nodes_mean"] = df.groupby("depth")["nodes"].mean()
    return out.reset_index()


def game_results(df: pd.DataFrame) -> pd.DataFrame:
    """One row per game: recorded moves, final ply, total think time, depth range and result."""
    _require_cols(df, ["game", "ply", "depth", "time_ms"])
    g = df.groupby("game")
    out = pd.DataFrame({
        "moves": g.size(),
        "last_ply": g["ply"].max(),
        "time_ms": g["time_ms"].sum(),
        "min_depth": g["depth"].min(),
        "max_depth": g["depth"].max(),
    })
    if "result" in df.columns:
        out["result"] = g["result"].last()
    return out.reset_index()


def result_counts(df: pd.DataFrame) -> pd.Series:
    games = game_results(df)
    if "result" not in games.columns:
        return pd.Series(dtype="int64")
    return games["result"].value_counts()


def numeric_summary(df: pd.DataFrame) -> pd.DataFrame:
    num = df.select_dtypes(include="number")
    if num.empty:
        return pd.DataFrame()
    desc = num.describe(percentiles=[0.05, 0.25, 0.5, 0.75, 0.95]).T
    return desc
