"""Basis shells, atomic centers and molecular orbitals."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .units import z_to_symbol


@dataclass
class Shell:
    """A contracted Gaussian shell.

    ``type`` follows the mwfn convention: a non-negative value is a
    Cartesian shell of that angular momentum, a negative one is a pure
    spherical-harmonic shell of angular momentum ``-type``.
    """

    type: int
    exponents: list[float] = field(default_factory=list)
    coefficients: list[float] = field(default_factory=list)
    normalized_coefficients: list[float] = field(default_factory=list)

    def size(self) -> int:
        """Number of basis functions in the shell."""
        if self.type >= 0:
            return (self.type + 1) * (self.type + 2) // 2
        return -2 * self.type + 1

    def num_prims(self) -> int:
        """Number of primitive Gaussians in the contraction."""
        return len(self.exponents)

    def describe(self) -> str:
        """Human-readable summary of the shell."""
        lines = [f"Type: {self.type}", "Exponents and Coefficients:"]
        lines.extend(
            f"{exponent:f} {coefficient:f}"
            for exponent, coefficient in zip(self.exponents, self.coefficients)
        )
        return "\n".join(lines) + "\n"


@dataclass
class Center:
    """An atomic center carrying a nucleus and its basis shells."""

    index: int = 0
    nuclear_charge: float = 0.0
    coordinates: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    shells: list[Shell] = field(default_factory=list)

    def num_shells(self) -> int:
        return len(self.shells)

    def num_basis(self) -> int:
        return sum(shell.size() for shell in self.shells)

    def symbol(self) -> str:
        return z_to_symbol(self.index)

    def describe(self) -> str:
        """Human-readable summary of the center and its shells."""
        x, y, z = self.coordinates
        header = (
            f"Symbol: {self.symbol()}\n"
            f"Index: {self.index}\n"
            f"Nuclear charge: {self.nuclear_charge:f}\n"
            f"Coordinates (a.u.): {x:f} {y:f} {z:f}\n"
            "Shells:\n"
        )
        return header + "".join(shell.describe() for shell in self.shells)


@dataclass
class Orbital:
    """A molecular orbital: its kind, energy, occupation, symmetry and coefficients."""

    type: int = 0
    energy: float = 0.0
    occ: float = 0.0
    sym: str = "A"
    coeff: np.ndarray = field(default_factory=lambda: np.zeros(0))