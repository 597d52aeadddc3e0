"""Normalization of contracted Gaussian shells."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from itertools import combinations_with_replacement

from .shell import Center

_SQRT_PI_CUBED = math.pi ** 1.5


def _double_factorial(n: int) -> int:
    result = 1
    while n > 1:
        result *= n
        n -= 2
    return result


def normalized_coefficients(
    l: int, exponents: Sequence[float], coefficients: Sequence[float]
) -> list[float]:
    """Return contraction coefficients with primitive and contraction normalization folded in.

    Each primitive is scaled to unit norm, then the whole contraction is
    scaled so that its self-overlap is one.
    """
    if l < 0:
        raise ValueError(f"angular momentum must be non-negative, got {l}")
    if len(exponents) != len(coefficients):
        raise ValueError("exponents and coefficients differ in length")
    if any(alpha <= 0 for alpha in exponents):
        raise ValueError("Gaussian exponents must be positive")
    if not exponents:
        return []

    df = _double_factorial(2 * l - 1)
    scaled = [
        c * math.sqrt(2**l * (2 * alpha) ** (l + 1.5) / (_SQRT_PI_CUBED * df))
        for alpha, c in zip(exponents, coefficients)
    ]

    primitives = list(zip(exponents, scaled))
    norm = 0.0
    for (p, (ap, cp)), (q, (aq, cq)) in combinations_with_replacement(enumerate(primitives), 2):
        gamma = ap + aq
        weight = 1 if p == q else 2
        norm += weight * df * _SQRT_PI_CUBED * cp * cq / (2**l * gamma ** (l + 1.5))
    if norm <= 0:
        raise ValueError("contraction has zero norm")
    factor = 1 / math.sqrt(norm)
    return [c * factor for c in scaled]


def normalize_shells(centers: Iterable[Center]) -> None:
    """Fill in ``normalized_coefficients`` for every shell of every center."""
    for center in centers:
        for shell in center.shells:
            shell.normalized_coefficients = normalized_coefficients(
                abs(shell.type), shell.exponents, shell.coefficients
            )