"""A molecular wavefunction: centers, basis shells and orbitals."""

from __future__ import annotations

import copy
import math
import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np

from .basis import basis_file_path, read_gbs
from .normalization import normalize_shells
from .nuclear import repulsion_energy, repulsion_gradient, repulsion_hessian
from .shell import Center, Orbital, Shell
from .units import HARTREE_TO_EV

MAX_ANGULAR_MOMENTUM = 6


def _pure_permutation(l: int) -> np.ndarray:
    """Map the internal order m = -l..l onto the file order 0, +1, -1, +2, -2, ..."""
    size = 2 * l + 1
    matrix = np.zeros((size, size))
    for row in range(size):
        k = (row + 1) // 2
        m = 0 if row == 0 else (k if row % 2 else -k)
        matrix[row, l + m] = 1.0
    return matrix


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(eq=False)
class Wavefunction:
    """Wavefunction data: ``wfntype`` 0 is restricted, 1 is unrestricted."""

    wfntype: int = 0
    e_tot: float = 0.0
    vt_ratio: float = 0.0
    centers: list[Center] = field(default_factory=list)
    orbitals: list[Orbital] = field(default_factory=list)
    overlap: np.ndarray | None = None
    gradient: np.ndarray | None = None
    hessian: np.ndarray | None = None
    temperature: float = 0.0
    chemical_potential: float = 0.0

    def _shells(self) -> Iterator[Shell]:
        for center in self.centers:
            yield from center.shells

    def _spin_offset(self, spin: int) -> int:
        if self.wfntype == 0 and spin != 0:
            raise ValueError(f"invalid spin {spin} for a restricted wavefunction")
        if self.wfntype == 1 and spin not in (1, 2):
            raise ValueError(f"invalid spin {spin} for an unrestricted wavefunction")
        return 0 if self.wfntype == 0 else (spin - 1) * self.num_ind_basis()

    def _spin_orbitals(self, spin: int) -> list[Orbital]:
        offset = self._spin_offset(spin)
        return self.orbitals[offset:offset + self.num_ind_basis()]

    def num_electrons(self, spin: int = -1) -> float:
        """Electron count of one spin, or of all orbitals when ``spin`` is -1."""
        orbitals = self.orbitals if spin == -1 else self._spin_orbitals(spin)
        return float(sum(orbital.occ for orbital in orbitals))

    def charge(self) -> float:
        nuclear = sum(center.nuclear_charge for center in self.centers)
        return nuclear - self.num_electrons(-1)

    def num_centers(self) -> int:
        return len(self.centers)

    def num_basis(self) -> int:
        return sum(shell.size() for shell in self._shells())

    def num_ind_basis(self) -> int:
        return len(self.orbitals) // (1 if self.wfntype == 0 else 2)

    def num_prims(self) -> int:
        """Number of Cartesian primitive functions."""
        total = 0
        for shell in self._shells():
            l = abs(shell.type)
            total += (l + 1) * (l + 2) // 2 * shell.num_prims()
        return total

    def num_shells(self) -> int:
        return sum(center.num_shells() for center in self.centers)

    def num_prim_shells(self) -> int:
        return sum(shell.num_prims() for shell in self._shells())

    def matrix_transform(self) -> np.ndarray:
        """Matrix taking internal basis order to the mwfn file order.

        Pure shells are stored internally as m = -l..l, while the file
        lists them as 0, +1, -1, +2, -2, ...; Cartesian shells keep their order.
        """
        blocks = []
        for shell in self._shells():
            l = abs(shell.type)
            if l > MAX_ANGULAR_MOMENTUM:
                raise ValueError(f"unsupported shell type {shell.type}")
            if shell.type >= 0:
                blocks.append(np.eye(shell.size()))
            else:
                blocks.append(_pure_permutation(l))
        nbasis = sum(block.shape[0] for block in blocks)
        transform = np.zeros((nbasis, nbasis))
        start = 0
        for block in blocks:
            size = block.shape[0]
            transform[start:start + size, start:start + size] = block
            start += size
        return transform

    def coefficient_matrix(self, spin: int = 0) -> np.ndarray:
        """Orbital coefficients as columns, shape (nbasis, nindbasis)."""
        orbitals = self._spin_orbitals(spin)
        matrix = np.zeros((self.num_basis(), len(orbitals)))
        for column, orbital in enumerate(orbitals):
            matrix[:, column] = orbital.coeff
        return matrix

    def set_coefficient_matrix(self, matrix, spin: int = 0) -> None:
        orbitals = self._spin_orbitals(spin)
        matrix = np.asarray(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[1] < len(orbitals):
            raise ValueError(
                f"coefficient matrix needs at least {len(orbitals)} columns"
            )
        for column, orbital in enumerate(orbitals):
            orbital.coeff = matrix[:, column].copy()

    def energies(self, spin: int = 0) -> np.ndarray:
        return np.array([orbital.energy for orbital in self._spin_orbitals(spin)], dtype=float)

    def set_energies(self, energies: Sequence[float], spin: int = 0) -> None:
        orbitals = self._spin_orbitals(spin)
        values = np.asarray(energies, dtype=float).ravel()
        if values.size < len(orbitals):
            raise ValueError(f"expected {len(orbitals)} orbital energies, got {values.size}")
        for orbital, value in zip(orbitals, values):
            orbital.energy = float(value)

    def occupations(self, spin: int = 0) -> np.ndarray:
        return np.array([orbital.occ for orbital in self._spin_orbitals(spin)], dtype=float)

    def set_occupations(self, occupations: Sequence[float], spin: int = 0) -> None:
        """Set leading occupations; extra values beyond the orbital count are ignored."""
        values = np.asarray(occupations, dtype=float).ravel()
        for orbital, value in zip(self._spin_orbitals(spin), values):
            orbital.occ = float(value)

    def fock(self, spin: int = 0) -> np.ndarray:
        """Fock matrix rebuilt from orbitals and energies: S C E C^T S."""
        if self.overlap is None:
            raise ValueError("overlap matrix is not set")
        s = np.asarray(self.overlap, dtype=float)
        c = self.coefficient_matrix(spin)
        return s @ (c * self.energies(spin)) @ c.T @ s

    def density(self, spin: int = 0) -> np.ndarray:
        c = self.coefficient_matrix(spin)
        return (c * self.occupations(spin)) @ c.T

    def energy_density(self, spin: int = 0) -> np.ndarray:
        c = self.coefficient_matrix(spin)
        return (c * (self.occupations(spin) * self.energies(spin))) @ c.T

    def set_centers(self, atoms: Iterable[Sequence[float]]) -> None:
        """Replace centers with atoms given as (index, charge, x, y, z) in bohr."""
        self.centers = [
            Center(
                index=_round_half_away(atom[0]),
                nuclear_charge=float(atom[1]),
                coordinates=[float(atom[2]), float(atom[3]), float(atom[4])],
            )
            for atom in atoms
        ]

    def set_basis(self, basis_name: str, basis_dir: str | os.PathLike | None = None) -> None:
        """Attach shells of a named basis set to every center and normalize them."""
        bare = {center.index: center.shells for center in read_gbs(basis_file_path(basis_name, basis_dir))}
        for center in self.centers:
            if center.index not in bare:
                raise ValueError(
                    f"basis set {basis_name!r} does not include element {center.index}"
                )
            center.shells = copy.deepcopy(bare[center.index])
        normalize_shells(self.centers)

    def centers_table(self) -> str:
        lines = [
            "Atoms:",
            "| Number | Symbol | Index | Charge |  X (Bohr)  |  Y (Bohr)  |  Z (Bohr)  |",
        ]
        for number, center in enumerate(self.centers):
            x, y, z = center.coordinates
            lines.append(
                "| %6d | %6s | %5d | %6.2f | % 10.5f | % 10.5f | % 10.5f |"
                % (number, center.symbol(), center.index, center.nuclear_charge, x, y, z)
            )
        return "\n".join(lines) + "\n"

    def orbitals_table(self) -> str:
        lines = ["Orbitals:"]
        nind = self.num_ind_basis()
        if self.wfntype == 0:
            lines.append("| Number | Energy (eV) | Occupation |")
            for number, orbital in enumerate(self.orbitals[:nind]):
                lines.append(
                    "| %6d | % 11.4f | %10.8f |"
                    % (number, orbital.energy * HARTREE_TO_EV, orbital.occ)
                )
        elif self.wfntype == 1:
            lines.append(
                "| Number | Energy (eV) | Occupation | Number | Energy (eV) | Occupation |"
            )
            for number in range(nind):
                alpha = self.orbitals[number]
                beta = self.orbitals[number + nind]
                lines.append(
                    "| %6d | % 11.4f | %10.8f | %6d | % 11.4f | %10.8f |"
                    % (
                        number, alpha.energy * HARTREE_TO_EV, alpha.occ,
                        number + nind, beta.energy * HARTREE_TO_EV, beta.occ,
                    )
                )
        return "\n".join(lines) + "\n"

    def nuclear_repulsion(self, orders: Iterable[int] = (0, 1, 2)) -> None:
        """Add nuclear repulsion energy, gradient and hessian for the requested orders."""
        orders = set(orders)
        charges = [center.nuclear_charge for center in self.centers]
        coordinates = np.array([center.coordinates for center in self.centers], dtype=float).reshape(-1, 3)
        n = len(charges)
        if 0 in orders:
            self.e_tot += repulsion_energy(charges, coordinates)
        if 1 in orders:
            if self.gradient is None or np.shape(self.gradient) != (n, 3):
                raise ValueError("nuclear gradient is not allocated")
            self.gradient = self.gradient + repulsion_gradient(charges, coordinates)
        if 2 in orders:
            if self.hessian is None or np.shape(self.hessian) != (3 * n, 3 * n):
                raise ValueError("nuclear hessian is not allocated")
            self.hessian = self.hessian + repulsion_hessian(charges, coordinates)