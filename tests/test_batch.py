from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from gcdtool.batch import BatchSummary, compute_gcd_frame, run_batch
from gcdtool.config import BatchConfig, InputConfig
from gcdtool.parsing import InputError


def test_compute_gcd_frame_adds_gcd_column() -> None:
    df = pd.DataFrame({"a": [48, 0, 5, 17], "b": [18, 5, 0, 13]})
    out = compute_gcd_frame(df)
    assert out["gcd"].tolist() == [6, 5, 5, 1]
    assert "gcd" not in df.columns


def test_compute_gcd_frame_reports_bad_row() -> None:
    df = pd.DataFrame({"a": ["4", "x"], "b": ["2", "3"]})
    with pytest.raises(InputError, match="row 1 a"):
        compute_gcd_frame(df)


def test_compute_gcd_frame_respects_bounds() -> None:
    df = pd.DataFrame({"a": [4, 400], "b": [2, 3]})
    with pytest.raises(InputError, match="above the maximum"):
        compute_gcd_frame(df, bounds=InputConfig(max=100))


def test_compute_gcd_frame_missing_columns() -> None:
    with pytest.raises(KeyError):
        compute_gcd_frame(pd.DataFrame({"a": [1]}))


def test_run_batch_roundtrip(tmp_path: Path) -> None:
    src = tmp_path / "pairs.csv"
    src.write_text("x;y\n48;18\n17;13\n1000000;500000\n", encoding="utf-8")
    dst = tmp_path / "out" / "gcd.csv"

    out, summary = run_batch(
        input_csv=src,
        output_csv=dst,
        batch=BatchConfig(sep=";", a_col="x", b_col="y"),
    )

    assert summary == BatchSummary(rows=3, coprime=1, max_gcd=500000)
    assert out["gcd"].tolist() == [6, 1, 500000]
    written = pd.read_csv(dst, sep=";")
    assert written["gcd"].tolist() == [6, 1, 500000]


def test_run_batch_keeps_big_integers(tmp_path: Path) -> None:
    big = 2**80
    src = tmp_path / "pairs.csv"
    src.write_text(f"a;b\n{big * 3};{big * 5}\n", encoding="utf-8")

    out, summary = run_batch(input_csv=src)
    assert out["gcd"].tolist() == [big]
    assert summary.max_gcd == big
