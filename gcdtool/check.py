"""Randomized self-check of the Euclidean `gcd`.

Operand pairs are drawn from a seeded numpy generator, every pair is run through
`gcd`, and the result is validated against the algebraic properties below. The
run stops on the first failing pair, which is reported together with the
property it broke.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import numpy as np

from .config import CheckConfig
from .euclid import gcd


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckFailure:
    a: int
    b: int
    prop: str
    detail: str

    def describe(self) -> str:
        return f"{self.prop} failed for a={self.a} b={self.b}: {self.detail}"


@dataclass(frozen=True)
class CheckResult:
    runs: int
    passed: int
    failure: CheckFailure | None

    @property
    def ok(self) -> bool:
        return self.failure is None


# Each property returns None when it holds, else a short description.
Property = Callable[[int, int, int], "str | None"]


def _prop_remainder(a: int, b: int, g: int) -> str | None:
    if b == 0:
        return None
    other = gcd(b, a % b)
    return None if other == g else f"gcd(b, a % b)={other} != {g}"


def _prop_commutative(a: int, b: int, g: int) -> str | None:
    other = gcd(b, a)
    return None if other == g else f"gcd(b, a)={other} != {g}"


def _prop_idempotent(a: int, b: int, g: int) -> str | None:
    other = gcd(g, 0)
    return None if other == g else f"gcd(g, 0)={other} != {g}"


def _prop_divides(a: int, b: int, g: int) -> str | None:
    if g < 0:
        return f"result {g} is negative"
    if g == 0:
        return None if (a == 0 and b == 0) else "result 0 for non-zero operands"
    if a % g or b % g:
        return f"{g} does not divide both operands"
    return None


def _prop_reference(a: int, b: int, g: int) -> str | None:
    ref = int(np.gcd(np.int64(a), np.int64(b)))
    return None if ref == g else f"numpy.gcd={ref} != {g}"


PROPERTIES: dict[str, Property] = {
    "remainder": _prop_remainder,
    "commutative": _prop_commutative,
    "idempotent": _prop_idempotent,
    "divides": _prop_divides,
    "reference": _prop_reference,
}


def generate_pairs(n: int, *, lo: int, hi: int, seed: int) -> np.ndarray:
    """Draw an (n, 2) int64 array of operands uniformly from `[lo, hi]`."""

    if n < 1:
        raise ValueError("n must be >= 1")
    if lo > hi:
        raise ValueError(f"lo must be <= hi, got {lo} > {hi}")
    rng = np.random.default_rng(seed)
    return rng.integers(lo, hi, size=(n, 2), endpoint=True, dtype=np.int64)


def check_pair(a: int, b: int) -> CheckFailure | None:
    g = gcd(a, b)
    for name, prop in PROPERTIES.items():
        detail = prop(a, b, g)
        if detail is not None:
            return CheckFailure(a=a, b=b, prop=name, detail=detail)
    return None


def run_check(cfg: CheckConfig | None = None) -> CheckResult:
    cfg = cfg or CheckConfig()
    pairs = generate_pairs(cfg.runs, lo=cfg.min, hi=cfg.max, seed=cfg.seed)
    logger.info(
        "Checking %d pairs in [%d, %d] with seed %d",
        cfg.runs,
        cfg.min,
        cfg.max,
        cfg.seed,
    )

    passed = 0
    for a, b in pairs.tolist():
        failure = check_pair(a, b)
        if failure is not None:
            logger.warning(
                "Check stopped after %d passes: %s", passed, failure.describe()
            )
            return CheckResult(runs=cfg.runs, passed=passed, failure=failure)
        passed += 1

    logger.info("All %d pairs passed", passed)
    return CheckResult(runs=cfg.runs, passed=passed, failure=None)


def write_failure(path: str | Path, failure: CheckFailure, *, seed: int) -> None:
    """Append one line describing `failure` to the errors file."""

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
    with out_path.open("a", encoding="utf-8") as f:
        f.write(f"{stamp} seed={seed} {failure.describe()}\n")
