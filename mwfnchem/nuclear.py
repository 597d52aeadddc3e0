"""Nuclear repulsion energy and its nuclear derivatives."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def _geometry(charges: Sequence[float], coordinates) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    z = np.asarray(charges, dtype=float).reshape(-1)
    r = np.asarray(coordinates, dtype=float)
    if r.size == 0:
        r = r.reshape(0, 3)
    if r.ndim != 2 or r.shape[1] != 3 or r.shape[0] != z.size:
        raise ValueError("coordinates must have shape (len(charges), 3)")
    n = z.size
    diff = r[:, None, :] - r[None, :, :]
    dist = np.linalg.norm(diff, axis=-1)
    off = ~np.eye(n, dtype=bool)
    if np.any(dist[off] == 0):
        raise ValueError("two nuclei share the same position")
    return np.outer(z, z), diff, dist, off


def _inverse_power(dist: np.ndarray, off: np.ndarray, power: int) -> np.ndarray:
    inv = np.zeros_like(dist)
    inv[off] = dist[off] ** -power
    return inv


def repulsion_energy(charges: Sequence[float], coordinates) -> float:
    """Coulomb repulsion energy between point nuclei, in atomic units."""
    zz, _, dist, _ = _geometry(charges, coordinates)
    i, j = np.tril_indices(len(zz), k=-1)
    return float(np.sum(zz[i, j] / dist[i, j]))


def repulsion_gradient(charges: Sequence[float], coordinates) -> np.ndarray:
    """Gradient of the repulsion energy, shape (natoms, 3)."""
    zz, diff, dist, off = _geometry(charges, coordinates)
    inv3 = _inverse_power(dist, off, 3)
    return -np.einsum("ij,ijk->ik", zz * inv3, diff)


def repulsion_hessian(charges: Sequence[float], coordinates) -> np.ndarray:
    """Hessian of the repulsion energy, shape (3 * natoms, 3 * natoms)."""
    zz, diff, dist, off = _geometry(charges, coordinates)
    n = len(zz)
    inv3 = _inverse_power(dist, off, 3)
    inv5 = _inverse_power(dist, off, 5)
    blocks = (zz * inv3)[:, :, None, None] * np.eye(3) - 3 * (zz * inv5)[:, :, None, None] * (
        diff[:, :, :, None] * diff[:, :, None, :]
    )
    diagonal = -blocks.sum(axis=1)
    blocks[np.arange(n), np.arange(n)] = diagonal
    return blocks.transpose(0, 2, 1, 3).reshape(3 * n, 3 * n)