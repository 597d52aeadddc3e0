"""Packing several equally shaped matrices into one array of element vectors.

Element ``(i, j)`` of every matrix is gathered into a vector, so that an
update to ``(i, j)`` applies to all matrices in one operation.  The packed
layout has shape ``(nrows, ncols, nmatrices)``.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def matrices_to_arrays(matrices: Sequence, nmatrices_padded: int | None = None) -> np.ndarray:
    """Pack matrices into shape ``(nrows, ncols, nmatrices_padded)``.

    Slots beyond the number of matrices are left at zero.
    """
    stack = [np.asarray(matrix, dtype=float) for matrix in matrices]
    if not stack:
        raise ValueError("at least one matrix is needed")
    shape = stack[0].shape
    if len(shape) != 2 or any(matrix.shape != shape for matrix in stack):
        raise ValueError("matrices must be two-dimensional and of equal shape")
    if nmatrices_padded is None:
        nmatrices_padded = len(stack)
    if nmatrices_padded < len(stack):
        raise ValueError(
            f"padded size {nmatrices_padded} is smaller than the {len(stack)} matrices"
        )
    arrays = zero_arrays(nmatrices_padded, *shape)
    arrays[:, :, : len(stack)] = np.stack(stack, axis=-1)
    return arrays


def arrays_to_matrices(arrays, nmatrices: int | None = None) -> list[np.ndarray]:
    """Unpack the first ``nmatrices`` matrices from a packed array."""
    packed = np.asarray(arrays, dtype=float)
    if packed.ndim != 3:
        raise ValueError("packed arrays must have shape (nrows, ncols, nmatrices)")
    if nmatrices is None:
        nmatrices = packed.shape[2]
    if not 0 <= nmatrices <= packed.shape[2]:
        raise ValueError(f"cannot unpack {nmatrices} matrices from {packed.shape[2]} slots")
    return [packed[:, :, k].copy() for k in range(nmatrices)]


def zero_arrays(nmatrices: int, nrows: int, ncols: int) -> np.ndarray:
    """Zero-filled packed array for ``nmatrices`` matrices of ``nrows`` by ``ncols``."""
    if nmatrices < 0 or nrows < 0 or ncols < 0:
        raise ValueError("dimensions must be non-negative")
    return np.zeros((nrows, ncols, nmatrices))


def reduce_arrays(target: np.ndarray, source) -> None:
    """Add ``source`` into ``target`` in place."""
    addend = np.asarray(source, dtype=float)
    if target.shape != addend.shape:
        raise ValueError(f"shapes differ: {target.shape} and {addend.shape}")
    target += addend