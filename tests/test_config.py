from __future__ import annotations

from pathlib import Path

import pytest

from gcdtool.config import (
    CheckConfig,
    GCDToolConfig,
    load_config,
    log_level_value,
    validate_check,
)


def test_load_config_parses_all_sections(tmp_path: Path) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text(
        """
input: {min: -10, max: 10}
check:
  runs: 25
  seed: 7
  min: 0
  max: 500
  errors_file: out/errors.txt
batch: {sep: ",", a_col: x, b_col: y}
logging: {level: info}
""",
        encoding="utf-8",
    )

    cfg = load_config(cfg_path)
    assert cfg.input.min == -10
    assert cfg.input.max == 10
    assert cfg.check.runs == 25
    assert cfg.check.seed == 7
    assert cfg.check.max == 500
    assert cfg.check.errors_file == "out/errors.txt"
    assert cfg.batch.sep == ","
    assert cfg.batch.a_col == "x"
    assert cfg.logging.level == "INFO"
    assert log_level_value(cfg) == 20


def test_load_config_defaults_when_sections_missing(tmp_path: Path) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text("check: {runs: 3}\n", encoding="utf-8")

    cfg = load_config(cfg_path)
    assert cfg.input.min is None
    assert cfg.check.runs == 3
    assert cfg.check.seed == 42
    assert cfg.check.min == -1_000_000
    assert cfg.batch.sep == ";"
    assert cfg.logging.level == "WARNING"


def test_load_config_none_and_empty_file_give_defaults(tmp_path: Path) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text("", encoding="utf-8")
    assert load_config(cfg_path) == GCDToolConfig()
    assert load_config(None) == GCDToolConfig()


def test_example_config_ships_defaults() -> None:
    example = Path(__file__).resolve().parents[1] / "gcdtool" / "gcdtool_config.yaml"
    assert load_config(example) == GCDToolConfig()


@pytest.mark.parametrize(
    ("text", "exc", "match"),
    [
        ("- 1\n- 2\n", TypeError, "root must be a mapping"),
        ("input: 5\n", TypeError, "input must be a mapping"),
        ("input: {min: 5, max: 1}\n", ValueError, "min <= max"),
        ("input: {min: 1.5}\n", TypeError, "input.min"),
        ("check: {runs: 0}\n", ValueError, "check.runs"),
        ("check: {max: 99999999999999999999}\n", ValueError, "check.max"),
        ("batch: {sep: ';;'}\n", ValueError, "batch.sep"),
        ("batch: {a_col: z, b_col: z}\n", ValueError, "must differ"),
        ("logging: {level: LOUD}\n", ValueError, "Unknown log level"),
        ("check: {seed: -1}\n", ValueError, "check.seed"),
        ("check: {errors_file: null}\n", ValueError, "errors_file must not be null"),
        ("batch: {a_col: null}\n", ValueError, "batch.a_col must not be null"),
        ("batch: {sep: null}\n", ValueError, "batch.sep must not be null"),
    ],
)
def test_load_config_rejects_invalid(
    tmp_path: Path, text: str, exc: type[Exception], match: str
) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text(text, encoding="utf-8")
    with pytest.raises(exc, match=match):
        load_config(cfg_path)


@pytest.mark.parametrize(
    ("cfg", "match"),
    [
        (CheckConfig(runs=0), "check.runs"),
        (CheckConfig(seed=-1), "check.seed"),
        (CheckConfig(min=-(2**63), max=0), "check.min"),
        (CheckConfig(min=0, max=2**63), "check.max"),
        (CheckConfig(min=5, max=1), "min <= max"),
        (CheckConfig(errors_file="  "), "check.errors_file"),
    ],
)
def test_validate_check_rejects_unusable_settings(cfg: CheckConfig, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        validate_check(cfg)


def test_validate_check_returns_valid_config() -> None:
    cfg = CheckConfig(runs=1, seed=0, min=-(2**63 - 1), max=2**63 - 1)
    assert validate_check(cfg) is cfg
