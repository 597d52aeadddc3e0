import numpy as np
import pytest

from mwfnchem.nuclear import repulsion_energy, repulsion_gradient, repulsion_hessian

CHARGES = [8.0, 1.0, 1.0, 6.0]
COORDS = np.array(
    [
        [0.0, 0.0, 0.2],
        [1.4, 0.1, -0.9],
        [-1.5, 0.3, -1.0],
        [0.4, 2.6, 0.7],
    ]
)


def test_two_unit_charges():
    assert repulsion_energy([1.0, 1.0], [[0, 0, 0], [0, 0, 2]]) == pytest.approx(0.5)


def test_single_atom_has_no_repulsion():
    assert repulsion_energy([6.0], [[1.0, 2.0, 3.0]]) == 0.0
    assert np.allclose(repulsion_gradient([6.0], [[1.0, 2.0, 3.0]]), 0.0)
    hessian = repulsion_hessian([6.0], [[1.0, 2.0, 3.0]])
    assert hessian.shape == (3, 3)
    assert np.allclose(hessian, 0.0)


def test_energy_translation_invariance():
    shifted = COORDS + np.array([3.0, -1.0, 0.5])
    assert repulsion_energy(CHARGES, shifted) == pytest.approx(repulsion_energy(CHARGES, COORDS))


def test_gradient_matches_finite_differences():
    gradient = repulsion_gradient(CHARGES, COORDS)
    h = 1e-5
    numeric = np.zeros_like(COORDS)
    for idx in np.ndindex(COORDS.shape):
        plus, minus = COORDS.copy(), COORDS.copy()
        plus[idx] += h
        minus[idx] -= h
        numeric[idx] = (repulsion_energy(CHARGES, plus) - repulsion_energy(CHARGES, minus)) / (2 * h)
    assert gradient.shape == COORDS.shape
    assert np.allclose(gradient, numeric, atol=1e-6)


def test_gradient_sums_to_zero():
    assert np.allclose(repulsion_gradient(CHARGES, COORDS).sum(axis=0), 0.0)


def test_hessian_matches_finite_differences():
    hessian = repulsion_hessian(CHARGES, COORDS)
    h = 1e-5
    flat = COORDS.reshape(-1)
    numeric = np.zeros((flat.size, flat.size))
    for k in range(flat.size):
        plus, minus = flat.copy(), flat.copy()
        plus[k] += h
        minus[k] -= h
        gp = repulsion_gradient(CHARGES, plus.reshape(-1, 3)).reshape(-1)
        gm = repulsion_gradient(CHARGES, minus.reshape(-1, 3)).reshape(-1)
        numeric[:, k] = (gp - gm) / (2 * h)
    assert np.allclose(hessian, numeric, atol=1e-5)


def test_hessian_symmetric_and_translation_invariant():
    hessian = repulsion_hessian(CHARGES, COORDS)
    n = len(CHARGES)
    assert np.allclose(hessian, hessian.T)
    assert np.allclose(hessian.reshape(n, 3, n, 3).sum(axis=2), 0.0)


def test_mismatched_shapes_raise():
    with pytest.raises(ValueError):
        repulsion_energy([1.0, 1.0], [[0.0, 0.0, 0.0]])
    with pytest.raises(ValueError):
        repulsion_gradient([1.0], [[0.0, 0.0]])


def test_coincident_nuclei_raise():
    with pytest.raises(ValueError):
        repulsion_hessian([1.0, 1.0], [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])