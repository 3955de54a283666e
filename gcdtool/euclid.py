from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class EuclidStep:
    a: int
    b: int
    remainder: int


def _require_int(x: object, *, name: str) -> int:
    # bool is an int subclass; treat it as a caller mistake.
    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError(f"{name} must be an int, got {type(x).__name__}")
    return x


def euclid_steps(a: int, b: int) -> Iterator[EuclidStep]:
    """Yield each `(a, b) -> (b, a % b)` reduction until `b` reaches zero.

    The values are raw: Python's `%` follows the sign of the divisor, so with
    negative operands the intermediate terms (and the last `a`) may be negative.
    """

    a = _require_int(a, name="a")
    b = _require_int(b, name="b")
    while b != 0:
        c = a % b
        yield EuclidStep(a=a, b=b, remainder=c)
        a, b = b, c


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of `a` and `b` via the iterative Euclidean algorithm.

    The result is always non-negative, so `gcd(4, -6) == 2` even though the raw
    reduction ends on -2. `gcd(a, 0) == abs(a)` and `gcd(0, 0) == 0`.
    """

    a = _require_int(a, name="a")
    b = _require_int(b, name="b")
    while b != 0:
        a, b = b, a % b
    return abs(a)
