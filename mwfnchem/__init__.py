"""Multiwfn wavefunction files, Gaussian basis sets, nuclear repulsion, integral screening and contraction, and MP2 energies."""

__version__ = "0.1.0"

__all__ = [
    "units",
    "shell",
    "normalization",
    "nuclear",
    "basis",
    "wavefunction",
    "mwfn_io",
    "mp2",
    "screening",
    "batching",
    "contraction",
]