import numpy as np
import pytest

from mwfnchem.mp2 import duplicate_cols, duplicate_rows, mp2_correlation_energy


def _random_eri(n, seed=0):
    rng = np.random.default_rng(seed)
    eri = rng.normal(scale=0.1, size=(n, n, n, n))
    eri = eri + eri.transpose(1, 0, 2, 3)
    eri = eri + eri.transpose(0, 1, 3, 2)
    eri = eri + eri.transpose(2, 3, 0, 1)
    return eri


def test_duplicate_rows():
    result = duplicate_rows([[1, 2], [3, 4]])
    assert result.tolist() == [[1, 2], [1, 2], [3, 4], [3, 4]]


def test_duplicate_cols():
    result = duplicate_cols([[1, 2], [3, 4]])
    assert result.tolist() == [[1, 1, 2, 2], [3, 3, 4, 4]]


def test_duplicate_rows_and_cols_commute():
    matrix = np.arange(6.0).reshape(2, 3)
    assert np.array_equal(duplicate_cols(duplicate_rows(matrix)), duplicate_rows(duplicate_cols(matrix)))


def test_restricted_two_orbital_value():
    eri = np.zeros((2, 2, 2, 2))
    eri[0, 1, 0, 1] = 0.5
    energy = mp2_correlation_energy([-1.0, 1.0], eri, 2, "Restricted")
    assert energy == pytest.approx(-0.0625)


def test_zero_integrals_give_zero():
    eri = np.zeros((4, 4, 4, 4))
    assert mp2_correlation_energy([-2, -1, 1, 2], eri, 4, "Restricted") == 0.0
    assert mp2_correlation_energy([-2, -1, 1, 2], eri, 2, "Unrestricted") == 0.0


def test_restricted_energy_is_negative():
    eri = _random_eri(4)
    energy = mp2_correlation_energy([-2.0, -1.0, 0.5, 1.5], eri, 4, "Restricted")
    assert energy < 0


def test_restricted_scaling_of_integrals_and_energies():
    eri = _random_eri(4, seed=1)
    energies = np.array([-2.0, -1.0, 0.5, 1.5])
    base = mp2_correlation_energy(energies, eri, 4, "Restricted")
    assert mp2_correlation_energy(energies, 2 * eri, 4, "Restricted") == pytest.approx(4 * base)
    assert mp2_correlation_energy(2 * energies, eri, 4, "Restricted") == pytest.approx(base / 2)


def test_unrestricted_single_pair_cancels():
    eri = _random_eri(2, seed=2)
    assert mp2_correlation_energy([-1.0, 1.0], eri, 1, "Unrestricted") == pytest.approx(0.0)


def test_unrestricted_energy_is_non_positive():
    eri = _random_eri(4, seed=3)
    energy = mp2_correlation_energy([-2.0, -1.0, 0.5, 1.5], eri, 2, "Unrestricted")
    assert energy <= 0


def test_column_energies_accepted():
    eri = _random_eri(3, seed=4)
    flat = mp2_correlation_energy([-1.0, 0.5, 1.0], eri, 2, "Restricted")
    column = mp2_correlation_energy([[-1.0], [0.5], [1.0]], eri, 2, "Restricted")
    assert column == pytest.approx(flat)


def test_unknown_shell_type():
    with pytest.raises(ValueError):
        mp2_correlation_energy([-1.0, 1.0], np.zeros((2, 2, 2, 2)), 2, "Open")


def test_bad_integral_shape():
    with pytest.raises(ValueError):
        mp2_correlation_energy([-1.0, 0.0, 1.0], np.zeros((2, 2, 2, 2)), 2, "Restricted")