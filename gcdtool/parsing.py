from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from .config import InputConfig


_INTEGER = re.compile(r"[+-]?[0-9]+")


class InputError(ValueError):
    """Raised when operand text is malformed, incomplete or out of range."""


@dataclass(frozen=True)
class Pair:
    a: int
    b: int


def parse_int(token: str, *, name: str = "operand") -> int:
    """Parse a signed decimal integer token.

    Only plain decimal digits with an optional sign are accepted; Python-only
    spellings such as `1_000` or `0x10` are rejected.
    """

    s = str(token).strip()
    if not _INTEGER.fullmatch(s):
        raise InputError(f"{name} is not an integer: {token!r}")
    return int(s)


def check_range(value: int, bounds: InputConfig, *, name: str = "operand") -> int:
    if bounds.min is not None and value < bounds.min:
        raise InputError(f"{name} {value} is below the minimum {bounds.min}")
    if bounds.max is not None and value > bounds.max:
        raise InputError(f"{name} {value} is above the maximum {bounds.max}")
    return value


def parse_tokens(tokens: Sequence[str], *, bounds: InputConfig | None = None) -> Pair:
    """Build a `Pair` from the first two tokens; extra tokens are ignored."""

    if len(tokens) < 2:
        raise InputError(f"expected two integers, got {len(tokens)}")

    bounds = bounds or InputConfig()
    a = check_range(parse_int(tokens[0], name="a"), bounds, name="a")
    b = check_range(parse_int(tokens[1], name="b"), bounds, name="b")
    return Pair(a=a, b=b)


def parse_pair(text: str, *, bounds: InputConfig | None = None) -> Pair:
    """Parse whitespace/newline separated operands, e.g. ``"48 18\\n"``."""

    return parse_tokens(text.split(), bounds=bounds)
