from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from . import __version__
from .batch import run_batch
from .check import run_check, write_failure
from .config import (
    GCDToolConfig,
    LoggingConfig,
    load_config,
    log_level_value,
    parse_log_level,
    validate_check,
)
from .euclid import euclid_steps, gcd
from .parsing import InputError, parse_pair, parse_tokens


log = logging.getLogger(__name__)

EXIT_CHECK_FAILED = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gcdtool",
        description="Greatest common divisor via the Euclidean algorithm. "
        "With no command, reads two integers from stdin and prints their GCD.",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Config YAML path (default: built-in defaults)",
    )
    p.add_argument(
        "--log-level",
        type=parse_log_level,
        default=None,
        help="Logging level on stderr (default: config logging.level, WARNING)",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd")

    solve = sub.add_parser("solve", help="Print gcd(a, b) (default command)")
    solve.add_argument(
        "operands",
        nargs="*",
        help="Two integers; when omitted they are read from stdin",
    )
    solve.add_argument(
        "--trace",
        action="store_true",
        help="Log each reduction step at INFO level",
    )

    batch = sub.add_parser("batch", help="Compute GCDs for a CSV of pairs")
    batch.add_argument("--input", required=True, help="Input CSV path")
    batch.add_argument(
        "--output",
        default="",
        help="Output CSV path (if empty, does not write a file)",
    )
    batch.add_argument(
        "--sep", default=None, help="CSV separator (default: config batch.sep, ';')"
    )
    batch.add_argument(
        "--a-col", default=None, help="Column holding a (default: config batch.a_col)"
    )
    batch.add_argument(
        "--b-col", default=None, help="Column holding b (default: config batch.b_col)"
    )

    check = sub.add_parser("check", help="Randomized property check of gcd")
    check.add_argument("--runs", type=int, default=None, help="Number of random pairs")
    check.add_argument("--seed", type=int, default=None, help="Random seed")
    check.add_argument(
        "--min", type=int, default=None, dest="lo", help="Smallest operand"
    )
    check.add_argument(
        "--max", type=int, default=None, dest="hi", help="Largest operand"
    )
    check.add_argument(
        "--errors-out",
        default=None,
        help="File that failures are appended to (default: config check.errors_file; "
        "empty disables)",
    )

    return p


def _configure_logging(cfg: GCDToolConfig, override: str | None) -> None:
    if override:
        cfg = replace(cfg, logging=LoggingConfig(level=override))
    level = log_level_value(cfg)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)


def _solve(cfg: GCDToolConfig, operands: list[str], *, trace: bool) -> int:
    if operands:
        pair = parse_tokens(operands, bounds=cfg.input)
    else:
        pair = parse_pair(sys.stdin.read(), bounds=cfg.input)

    if trace:
        for step in euclid_steps(pair.a, pair.b):
            log.info("%d = %d*q + %d", step.a, step.b, step.remainder)

    print(gcd(pair.a, pair.b))
    return 0


def _batch(cfg: GCDToolConfig, args: argparse.Namespace) -> int:
    batch_cfg = replace(
        cfg.batch,
        sep=args.sep or cfg.batch.sep,
        a_col=args.a_col or cfg.batch.a_col,
        b_col=args.b_col or cfg.batch.b_col,
    )
    _, summary = run_batch(
        input_csv=args.input,
        output_csv=(args.output or None),
        batch=batch_cfg,
        bounds=cfg.input,
    )
    print(f"rows={summary.rows}")
    print(f"coprime={summary.coprime}")
    print(f"max_gcd={summary.max_gcd}")
    if args.output:
        print(f"wrote_output={args.output}")
    return 0


def _check(cfg: GCDToolConfig, args: argparse.Namespace) -> int:
    try:
        check_cfg = validate_check(
            replace(
                cfg.check,
                runs=cfg.check.runs if args.runs is None else args.runs,
                seed=cfg.check.seed if args.seed is None else args.seed,
                min=cfg.check.min if args.lo is None else args.lo,
                max=cfg.check.max if args.hi is None else args.hi,
            )
        )
    except ValueError as e:
        raise InputError(str(e)) from e
    errors_out = cfg.check.errors_file if args.errors_out is None else args.errors_out

    result = run_check(check_cfg)
    print(f"runs={result.runs}")
    print(f"passed={result.passed}")
    if result.failure is None:
        print("status=ok")
        return 0

    print("status=failed")
    print(f"failure={result.failure.describe()}")
    if errors_out:
        write_failure(errors_out, result.failure, seed=check_cfg.seed)
        print(f"wrote_errors={errors_out}")
    return EXIT_CHECK_FAILED


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)
    _configure_logging(cfg, args.log_level)

    try:
        if args.cmd in (None, "solve"):
            return _solve(
                cfg,
                list(getattr(args, "operands", [])),
                trace=bool(getattr(args, "trace", False)),
            )
        if args.cmd == "batch":
            return _batch(cfg, args)
        if args.cmd == "check":
            return _check(cfg, args)
    except InputError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    raise AssertionError(f"Unhandled command: {args.cmd}")
