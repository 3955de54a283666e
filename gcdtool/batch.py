from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from .config import BatchConfig, InputConfig
from .euclid import gcd
from .parsing import InputError, check_range, parse_int


logger = logging.getLogger(__name__)

COL_GCD = "gcd"


@dataclass(frozen=True)
class BatchSummary:
    rows: int
    coprime: int
    max_gcd: int | None


def _cell_to_int(value: object, *, name: str) -> int:
    if isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_)):
        return int(value)
    if value is None or (isinstance(value, float) and np.isnan(value)):
        raise InputError(f"{name} is missing")
    return parse_int(str(value), name=name)


def compute_gcd_frame(
    df: pd.DataFrame,
    *,
    a_col: str = "a",
    b_col: str = "b",
    bounds: InputConfig | None = None,
) -> pd.DataFrame:
    """Return a copy of `df` with a `gcd` column computed row by row."""

    missing = [c for c in (a_col, b_col) if c not in df.columns]
    if missing:
        raise KeyError(f"Missing columns in input df: {missing}")

    bounds = bounds or InputConfig()
    out = df.copy()
    values: list[int] = []
    for i, (raw_a, raw_b) in enumerate(zip(df[a_col].tolist(), df[b_col].tolist())):
        name_a, name_b = f"row {i} {a_col}", f"row {i} {b_col}"
        a = check_range(_cell_to_int(raw_a, name=name_a), bounds, name=name_a)
        b = check_range(_cell_to_int(raw_b, name=name_b), bounds, name=name_b)
        values.append(gcd(a, b))

    # Falls back to object dtype when a result does not fit in int64.
    dtype = "int64" if _fits_int64(values) else "object"
    out[COL_GCD] = pd.Series(values, index=df.index, dtype=dtype)
    return out


def _fits_int64(values: list[int]) -> bool:
    info = np.iinfo(np.int64)
    return all(info.min <= v <= info.max for v in values)


def summarize(out: pd.DataFrame) -> BatchSummary:
    g = out[COL_GCD].tolist()
    return BatchSummary(
        rows=int(len(out)),
        coprime=int(sum(1 for v in g if v == 1)),
        max_gcd=(None if not g else int(max(g))),
    )


def read_pairs_csv(path: str | Path, *, sep: str = ";") -> pd.DataFrame:
    # Read as text so arbitrarily large integers survive the round trip.
    return pd.read_csv(Path(path), sep=sep, dtype=str, keep_default_na=False)


def run_batch(
    *,
    input_csv: str | Path,
    output_csv: str | Path | None = None,
    batch: BatchConfig | None = None,
    bounds: InputConfig | None = None,
) -> tuple[pd.DataFrame, BatchSummary]:
    batch = batch or BatchConfig()
    df = read_pairs_csv(input_csv, sep=batch.sep)
    logger.info("Loaded %d pairs from %s", len(df), input_csv)

    out = compute_gcd_frame(df, a_col=batch.a_col, b_col=batch.b_col, bounds=bounds)

    if output_csv is not None:
        out_path = Path(output_csv)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out.to_csv(out_path, index=False, sep=batch.sep)
        logger.info("Wrote %d rows to %s", len(out), out_path)

    return out, summarize(out)
