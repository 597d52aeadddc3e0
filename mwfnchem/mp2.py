"""Second-order Moller-Plesset correlation energy from MO integrals."""

from __future__ import annotations

import numpy as np

RESTRICTED = "Restricted"
UNRESTRICTED = "Unrestricted"


def duplicate_rows(matrix) -> np.ndarray:
    """Repeat every row twice in place: rows r0, r0, r1, r1, ..."""
    return np.repeat(np.asarray(matrix), 2, axis=0)


def duplicate_cols(matrix) -> np.ndarray:
    """Repeat every column twice in place: columns c0, c0, c1, c1, ..."""
    return np.repeat(np.asarray(matrix), 2, axis=1)


def mp2_correlation_energy(orbital_energies, mo_eri, nelectron: int, shell_type: str) -> float:
    """MP2 correlation energy.

    ``mo_eri[p, q, r, s]`` holds the MO integrals in chemists' notation.
    For ``"Restricted"`` the lowest ``nelectron // 2`` spatial orbitals are
    occupied; for ``"Unrestricted"`` the lowest ``nelectron`` spin orbitals are.
    """
    energies = np.asarray(orbital_energies, dtype=float).ravel()
    eri = np.asarray(mo_eri, dtype=float)
    n = energies.size
    if eri.ndim != 4 or any(dim < n for dim in eri.shape):
        raise ValueError(f"MO integrals must be a 4-index array covering {n} orbitals")
    if shell_type == RESTRICTED:
        nocc = nelectron // 2
    elif shell_type == UNRESTRICTED:
        nocc = nelectron
    else:
        raise ValueError(f"unknown shell type: {shell_type!r}")
    if nocc < 0:
        raise ValueError("number of electrons must be non-negative")

    occ = slice(0, nocc)
    vir = slice(nocc, n)
    coulomb = eri[occ, vir, occ, vir]
    exchange = coulomb.transpose(0, 3, 2, 1)
    e_occ = energies[occ]
    e_vir = energies[vir]
    denominator = (
        e_occ[:, None, None, None]
        + e_occ[None, None, :, None]
        - e_vir[None, :, None, None]
        - e_vir[None, None, None, :]
    )
    if shell_type == RESTRICTED:
        terms = coulomb * (2 * coulomb - exchange) / denominator
    else:
        terms = (coulomb - exchange) ** 2 / denominator / 4
    return float(terms.sum())