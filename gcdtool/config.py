from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import numpy as np
import yaml


_INT64 = np.iinfo(np.int64)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class InputConfig:
    min: int | None = None
    max: int | None = None


@dataclass(frozen=True)
class CheckConfig:
    runs: int = 1000
    seed: int = 42
    min: int = -1_000_000
    max: int = 1_000_000
    errors_file: str = "errors.txt"


@dataclass(frozen=True)
class BatchConfig:
    sep: str = ";"
    a_col: str = "a"
    b_col: str = "b"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"


@dataclass(frozen=True)
class GCDToolConfig:
    input: InputConfig = InputConfig()
    check: CheckConfig = CheckConfig()
    batch: BatchConfig = BatchConfig()
    logging: LoggingConfig = LoggingConfig()


def _as_mapping(x: Any, *, field: str) -> Mapping[str, Any]:
    if x is None:
        return {}
    if not isinstance(x, Mapping):
        raise TypeError(f"{field} must be a mapping, got {type(x).__name__}")
    return x


def _opt_int(x: Any, *, field: str) -> int | None:
    if x is None:
        return None
    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError(f"{field} must be an integer, got {type(x).__name__}")
    return int(x)


def _check_bounds(lo: int | None, hi: int | None, *, field: str) -> None:
    if (lo is not None) and (hi is not None) and not (lo <= hi):
        raise ValueError(
            f"Invalid range for {field}: expected min <= max, got {lo} > {hi}"
        )


def _load_input(data: Mapping[str, Any]) -> InputConfig:
    raw = _as_mapping(data.get("input"), field="input")
    lo = _opt_int(raw.get("min"), field="input.min")
    hi = _opt_int(raw.get("max"), field="input.max")
    _check_bounds(lo, hi, field="input")
    return InputConfig(min=lo, max=hi)


def _opt_str(raw: Mapping[str, Any], key: str, default: str, *, field: str) -> str:
    if key not in raw:
        return default
    x = raw[key]
    if x is None:
        raise ValueError(f"{field} must not be null")
    return str(x)


def validate_check(cfg: CheckConfig) -> CheckConfig:
    """Raise ValueError unless `cfg` can drive a check run."""

    if cfg.runs < 1:
        raise ValueError(f"check.runs must be >= 1, got {cfg.runs}")
    if cfg.seed < 0:
        raise ValueError(f"check.seed must be >= 0, got {cfg.seed}")
    _check_bounds(cfg.min, cfg.max, field="check")
    for name, v in (("check.min", cfg.min), ("check.max", cfg.max)):
        # abs() of int64.min overflows in numpy.gcd, so the range is symmetric.
        if not (-_INT64.max <= v <= _INT64.max):
            raise ValueError(f"{name} must be within +/-{_INT64.max}, got {v}")
    if not cfg.errors_file.strip():
        raise ValueError("check.errors_file must be non-empty")
    return cfg


def _load_check(data: Mapping[str, Any]) -> CheckConfig:
    raw = _as_mapping(data.get("check"), field="check")
    d = CheckConfig()

    runs = _opt_int(raw.get("runs"), field="check.runs")
    seed = _opt_int(raw.get("seed"), field="check.seed")
    lo = _opt_int(raw.get("min"), field="check.min")
    hi = _opt_int(raw.get("max"), field="check.max")
    errors_file = _opt_str(
        raw, "errors_file", d.errors_file, field="check.errors_file"
    ).strip()

    return validate_check(
        CheckConfig(
            runs=d.runs if runs is None else runs,
            seed=d.seed if seed is None else seed,
            min=d.min if lo is None else lo,
            max=d.max if hi is None else hi,
            errors_file=errors_file,
        )
    )


def _load_batch(data: Mapping[str, Any]) -> BatchConfig:
    raw = _as_mapping(data.get("batch"), field="batch")
    d = BatchConfig()
    sep = _opt_str(raw, "sep", d.sep, field="batch.sep")
    if len(sep) != 1:
        raise ValueError(f"batch.sep must be a single character, got {sep!r}")
    a_col = _opt_str(raw, "a_col", d.a_col, field="batch.a_col").strip()
    b_col = _opt_str(raw, "b_col", d.b_col, field="batch.b_col").strip()
    if not a_col or not b_col:
        raise ValueError("batch.a_col and batch.b_col must be non-empty")
    if a_col == b_col:
        raise ValueError(f"batch.a_col and batch.b_col must differ, both are {a_col!r}")
    return BatchConfig(sep=sep, a_col=a_col, b_col=b_col)


def _load_logging(data: Mapping[str, Any]) -> LoggingConfig:
    raw = _as_mapping(data.get("logging"), field="logging")
    level = parse_log_level(raw.get("level", LoggingConfig().level))
    return LoggingConfig(level=level)


def parse_log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        known = ", ".join(_LOG_LEVELS)
        raise ValueError(f"Unknown log level {value!r}. Known levels: {known}")
    return level


def log_level_value(cfg: GCDToolConfig) -> int:
    return int(getattr(logging, cfg.logging.level))


def load_config(path: str | Path | None = None) -> GCDToolConfig:
    """Load a gcdtool YAML config into typed dataclasses.

    `path=None` returns the defaults. Every section is optional.
    """

    if path is None:
        return GCDToolConfig()

    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, Mapping):
        raise TypeError("Config root must be a mapping")

    return GCDToolConfig(
        input=_load_input(data),
        check=_load_check(data),
        batch=_load_batch(data),
        logging=_load_logging(data),
    )
