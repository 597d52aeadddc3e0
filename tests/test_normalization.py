import math

import numpy as np
import pytest

from mwfnchem.normalization import normalize_shells, normalized_coefficients
from mwfnchem.shell import Center, Shell

EXPONENTS = [3.0, 0.8, 0.2]
COEFFICIENTS = [0.2, 0.5, 0.4]


def _self_overlap(l, exponents, coefficients):
    """Numerically integrate the squared x**l component of the contraction."""
    r = np.linspace(0.0, 30.0, 300001)
    dr = r[1] - r[0]
    radial = sum(c * np.exp(-a * r**2) for a, c in zip(exponents, coefficients))
    integrand = r ** (2 * l + 2) * radial**2
    return 4 * math.pi / (2 * l + 1) * float(np.sum(integrand) * dr)


@pytest.mark.parametrize("l", [0, 1, 2, 3])
def test_contraction_has_unit_norm(l):
    normalized = normalized_coefficients(l, EXPONENTS, COEFFICIENTS)
    assert _self_overlap(l, EXPONENTS, normalized) == pytest.approx(1.0, abs=1e-6)


def test_single_primitive_unit_overlap():
    normalized = normalized_coefficients(0, [math.pi / 2], [1.0])
    assert normalized[0] == pytest.approx(1.0)


def test_scale_invariance():
    base = normalized_coefficients(1, EXPONENTS, COEFFICIENTS)
    scaled = normalized_coefficients(1, EXPONENTS, [7 * c for c in COEFFICIENTS])
    assert scaled == pytest.approx(base)


def test_sign_flip():
    base = normalized_coefficients(2, EXPONENTS, COEFFICIENTS)
    flipped = normalized_coefficients(2, EXPONENTS, [-c for c in COEFFICIENTS])
    assert flipped == pytest.approx([-c for c in base])


def test_empty_contraction():
    assert normalized_coefficients(0, [], []) == []


@pytest.mark.parametrize(
    "l, exponents, coefficients",
    [
        (-1, [1.0], [1.0]),
        (0, [1.0, 2.0], [1.0]),
        (0, [0.0], [1.0]),
        (0, [-1.0], [1.0]),
        (0, [1.0], [0.0]),
    ],
)
def test_invalid_input_raises(l, exponents, coefficients):
    with pytest.raises(ValueError):
        normalized_coefficients(l, exponents, coefficients)


def test_normalize_shells_uses_absolute_type():
    pure = Shell(type=-2, exponents=list(EXPONENTS), coefficients=list(COEFFICIENTS))
    cart = Shell(type=2, exponents=list(EXPONENTS), coefficients=list(COEFFICIENTS))
    s = Shell(type=0, exponents=[1.2], coefficients=[1.0])
    centers = [Center(index=1, shells=[s]), Center(index=8, shells=[pure, cart])]
    normalize_shells(centers)
    assert pure.normalized_coefficients == pytest.approx(cart.normalized_coefficients)
    assert pure.normalized_coefficients == pytest.approx(
        normalized_coefficients(2, EXPONENTS, COEFFICIENTS)
    )
    assert _self_overlap(0, s.exponents, s.normalized_coefficients) == pytest.approx(1.0, abs=1e-6)
    assert pure.coefficients == COEFFICIENTS