"""Cauchy-Schwarz screening of shell quartets and work division among threads."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from itertools import accumulate, product

import numpy as np

Quartet = tuple[int, int, int, int]


def shell_offsets(shell_sizes: Sequence[int]) -> list[int]:
    """Index of the first basis function of every shell."""
    sizes = list(shell_sizes)
    if any(size <= 0 for size in sizes):
        raise ValueError("shell sizes must be positive")
    return list(accumulate(sizes, initial=0))[:-1]


def _is_unique(i: int, j: int, k: int, l: int) -> bool:
    return j <= i and k <= i and l <= (j if i == k else k)


def degeneracy(i: int, j: int, k: int, l: int) -> int:
    """How many index permutations of (ij|kl) share its value."""
    ij = 1 if i == j else 2
    kl = 1 if k == l else 2
    ij_kl = 1 if (i == k and j == l) else 2
    return ij * kl * ij_kl


def _unique_in_quartet(
    offsets: Sequence[int], sizes: Sequence[int], quartet: Quartet
) -> list[Quartet]:
    ranges = [range(offsets[s], offsets[s] + sizes[s]) for s in quartet]
    return [bfs for bfs in product(*ranges) if _is_unique(*bfs)]


def unique_basis_quartets(shell_sizes: Sequence[int], quartet: Quartet) -> list[Quartet]:
    """Non-equivalent basis function quartets inside a shell quartet, in storage order."""
    sizes = list(shell_sizes)
    offsets = shell_offsets(sizes)
    if len(quartet) != 4 or any(not 0 <= s < len(sizes) for s in quartet):
        raise ValueError(f"invalid shell quartet {quartet!r}")
    return _unique_in_quartet(offsets, sizes, tuple(quartet))


def _shell_quartets(nshells: int) -> Iterator[Quartet]:
    for s1 in range(nshells):
        for s2 in range(s1 + 1):
            for s3 in range(s1 + 1):
                for s4 in range(max(s2, s3) + 1):
                    yield (s1, s2, s3, s4)


def _checked_diag(shell_sizes: Sequence[int], diag) -> np.ndarray:
    nbasis = sum(shell_sizes)
    matrix = np.asarray(diag, dtype=float)
    if matrix.shape != (nbasis, nbasis):
        raise ValueError(f"diagonal repulsion matrix must have shape ({nbasis}, {nbasis})")
    return matrix


def _bound(diag: np.ndarray, i: int, j: int, k: int, l: int) -> float:
    return math.sqrt(abs(diag[i, j] * diag[k, l]))


def screening_counts(shell_sizes: Sequence[int], diag, threshold: float) -> tuple[int, int]:
    """Numbers of kept non-equivalent integrals and of kept shell quartets.

    A shell quartet is kept when the Cauchy-Schwarz bound of any of its
    unique basis quartets exceeds ``threshold``; all its unique integrals
    are then kept.
    """
    sizes = list(shell_sizes)
    offsets = shell_offsets(sizes)
    matrix = _checked_diag(sizes, diag)
    nintegrals = 0
    nquartets = 0
    for quartet in _shell_quartets(len(sizes)):
        unique = _unique_in_quartet(offsets, sizes, quartet)
        if any(_bound(matrix, *bfs) > threshold for bfs in unique):
            nquartets += 1
            nintegrals += len(unique)
    return nintegrals, nquartets


def screened_shell_quartets(shell_sizes: Sequence[int], diag, threshold: float) -> list[Quartet]:
    """Shell quartets whose largest Cauchy-Schwarz bound reaches ``threshold``."""
    sizes = list(shell_sizes)
    offsets = shell_offsets(sizes)
    matrix = _checked_diag(sizes, diag)
    return [
        quartet
        for quartet in _shell_quartets(len(sizes))
        if any(
            _bound(matrix, *bfs) >= threshold
            for bfs in _unique_in_quartet(offsets, sizes, quartet)
        )
    ]


def thread_heads(nitems: int, nthreads: int) -> list[int]:
    """First item of each thread when ``nitems`` are shared as evenly as possible.

    The first threads take the smaller share, the rest one item more.
    """
    if nthreads <= 0:
        raise ValueError("number of threads must be positive")
    if nitems < 0:
        raise ValueError("number of items must be non-negative")
    fewer = nitems // nthreads
    nfewers = nthreads - nitems + fewer * nthreads
    heads = []
    position = 0
    for thread in range(nthreads):
        heads.append(position)
        position += fewer if thread < nfewers else fewer + 1
    return heads


def quartet_heads(
    shell_sizes: Sequence[int], quartets: Sequence[Quartet], nthreads: int
) -> tuple[list[int], list[int]]:
    """First shell quartet and first basis quartet of each thread."""
    sizes = list(shell_sizes)
    offsets = shell_offsets(sizes)
    quartets = list(quartets)
    sqheads = thread_heads(len(quartets), nthreads)
    ends = sqheads[1:] + [len(quartets)]
    counts = [
        sum(len(_unique_in_quartet(offsets, sizes, tuple(q))) for q in quartets[start:end])
        for start, end in zip(sqheads, ends)
    ]
    bqheads = list(accumulate(counts, initial=0))[:-1]
    return sqheads, bqheads