"""Contraction of screened, non-equivalent repulsion integrals with density matrices.

The integrals are given once per non-equivalent quartet ``(i, j, k, l)``
and already multiplied by their permutational degeneracy.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .batching import arrays_to_matrices, matrices_to_arrays, zero_arrays


def _quartets(indices, integrals) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    idx = np.asarray(indices, dtype=np.intp)
    if idx.size == 0:
        idx = idx.reshape(0, 4)
    values = np.asarray(integrals, dtype=float).ravel()
    if idx.ndim != 2 or idx.shape[1] != 4:
        raise ValueError("indices must have shape (nintegrals, 4)")
    if idx.shape[0] != values.size:
        raise ValueError(f"{idx.shape[0]} index quartets but {values.size} integrals")
    return idx[:, 0], idx[:, 1], idx[:, 2], idx[:, 3], values


def _square(matrix, name: str) -> np.ndarray:
    array = np.asarray(matrix, dtype=float)
    if array.ndim != 2 or array.shape[0] != array.shape[1]:
        raise ValueError(f"{name} must be a square matrix")
    return array


def _raw_coulomb_exchange(i, j, k, l, v, density, kscale):
    """Accumulate unsymmetrized J and K; works on matrices and packed arrays alike."""
    weights = v.reshape((-1,) + (1,) * (density.ndim - 2))
    raw_j = np.zeros_like(density)
    raw_k = np.zeros_like(density)
    np.add.at(raw_j, (i, j), density[k, l] * weights)
    np.add.at(raw_j, (k, l), density[i, j] * weights)
    if kscale > 0:
        np.add.at(raw_k, (i, k), density[j, l] * weights)
        np.add.at(raw_k, (j, l), density[i, k] * weights)
        np.add.at(raw_k, (i, l), density[j, k] * weights)
        np.add.at(raw_k, (j, k), density[i, l] * weights)
    return raw_j, raw_k


def _symmetrize(raw: np.ndarray) -> np.ndarray:
    return raw + np.swapaxes(raw, 0, 1)


def contract_restricted(indices, integrals, density, kscale: float) -> np.ndarray:
    """Two-electron matrix ``2 J(D) - kscale K(D)`` for a restricted density ``D``."""
    i, j, k, l, v = _quartets(indices, integrals)
    d = _square(density, "density")
    raw_j, raw_k = _raw_coulomb_exchange(i, j, k, l, v, d, kscale)
    coulomb = 0.5 * _symmetrize(raw_j)
    exchange = 0.25 * _symmetrize(raw_k)
    return coulomb - 0.5 * kscale * exchange


def contract_multiple(indices, integrals, densities: Sequence, kscale: float) -> list[np.ndarray]:
    """Apply :func:`contract_restricted` to several densities in one pass."""
    i, j, k, l, v = _quartets(indices, integrals)
    matrices = [_square(density, "density") for density in densities]
    if not matrices:
        raise ValueError("at least one density is needed")
    packed = matrices_to_arrays(matrices)
    nbasis = packed.shape[0]
    raw_j, raw_k = _raw_coulomb_exchange(i, j, k, l, v, packed, kscale)
    result = zero_arrays(len(matrices), nbasis, nbasis)
    result += 0.5 * _symmetrize(raw_j) - 0.5 * kscale * 0.25 * _symmetrize(raw_k)
    return arrays_to_matrices(result, len(matrices))


def contract_unrestricted(
    indices, integrals, density_alpha, density_beta, kscale: float
) -> tuple[np.ndarray, np.ndarray]:
    """Alpha and beta two-electron matrices ``J(Da)+J(Db)-kscale K(Ds)``... as returned pairwise.

    The exchange parts are added unscaled when ``kscale`` is positive and
    dropped otherwise.
    """
    i, j, k, l, v = _quartets(indices, integrals)
    da = _square(density_alpha, "alpha density")
    db = _square(density_beta, "beta density")
    if da.shape != db.shape:
        raise ValueError("alpha and beta densities differ in shape")
    raw_ja, raw_ka = _raw_coulomb_exchange(i, j, k, l, v, da, kscale)
    raw_jb, raw_kb = _raw_coulomb_exchange(i, j, k, l, v, db, kscale)
    coulomb = 0.25 * (_symmetrize(raw_ja) + _symmetrize(raw_jb))
    exchange_a = 0.125 * _symmetrize(raw_ka)
    exchange_b = 0.125 * _symmetrize(raw_kb)
    return coulomb - exchange_a, coulomb - exchange_b