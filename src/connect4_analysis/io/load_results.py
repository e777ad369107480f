from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import pandas as pd


NUMERIC_COLS = [
    "game", "ply", "column",
    "depth", "time_ms", "nodes", "tt_hits", "cutoffs", "score",
]

REQUIRED_COLS = ("game", "ply", "depth", "time_ms")


@dataclass(frozen=True)
class LoadSpec:
    csv_path: Path
    required_cols: tuple[str, ...] = REQUIRED_COLS


def _coerce_numeric(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    out = df.copy()
    for c in cols:
        if c in out.columns:
            out[c] = pd.to_numeric(out[c], errors="coerce")
    return out


def load_trace(spec: LoadSpec) -> pd.DataFrame:
    if not spec.csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {spec.csv_path}")

    df = pd.read_csv(spec.csv_path)

    # Trim whitespace in column names just in case
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in spec.required_cols if c not in df.columns]
    if missing:
        raise ValueError(f"CSV missing required columns {missing}. Columns: {list(df.columns)}")

    df = _coerce_numeric(df, NUMERIC_COLS)

    # Rows without a ply or depth are unusable
    df = df.dropna(subset=["ply", "depth"]).copy()
    if "result" in df.columns:
        df["result"] = df["result"].fillna("").astype(str)

    return df.sort_values(["game", "ply"]).reset_index(drop=True)


def load_latest_from_dir(results_dir: Path, pattern: str = "selfplay_*.csv") -> Path:
    if not results_dir.exists():
        raise FileNotFoundError(f"Results directory not found: {results_dir}")

    files = sorted(results_dir.glob(pattern))
    if not files:
        raise FileNotFoundError(f"No files matching {pattern} in {results_dir}")

    # Filenames include timestamp, lexicographic sort works
    return files[-1]
