"""gcdtool: greatest common divisor via the iterative Euclidean algorithm.

The package provides the `gcd` function, a stdin/stdout driver, a CSV batch
mode and a seeded randomized self-check.
"""

from __future__ import annotations

from .euclid import EuclidStep, euclid_steps, gcd

__all__ = [
    "EuclidStep",
    "__version__",
    "euclid_steps",
    "gcd",
]

__version__ = "0.1.0"
