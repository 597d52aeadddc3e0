"""Reading and writing wavefunctions in the mwfn text format."""

from __future__ import annotations

import math
import os
import sys
from collections.abc import Iterator
from pathlib import Path

import numpy as np

from .normalization import normalize_shells
from .shell import Center, Orbital, Shell
from .units import ANGSTROM_TO_BOHR
from .wavefunction import Wavefunction


def safe_float(word: str) -> float:
    """Parse a number, mapping values that overflow or underflow a double to zero.

    Tiny occupation numbers in finite-temperature runs can fall below the
    smallest normal double; such values are stored as zero.
    """
    value = float(word)
    if math.isinf(value) and "inf" not in word.lower():
        return 0.0
    if value != 0.0 and abs(value) < sys.float_info.min:
        return 0.0
    return value


def _read_words(lines: Iterator[str], total: int) -> list[str]:
    """Collect ``total`` words from following lines, stopping at an empty line."""
    words: list[str] = []
    for line in lines:
        if not line:
            break
        for word in line.split():
            if len(words) >= total:
                break
            words.append(word)
        if len(words) == total:
            break
    return words


def _value(words: list[str]) -> str:
    if len(words) < 2:
        raise ValueError(f"line {' '.join(words)!r} has no value")
    return words[1]


class _Reader:
    def __init__(self, text: str) -> None:
        self.lines = iter(text.splitlines())
        self.wfn = Wavefunction(wfntype=0)
        self.nbasis: int | None = None
        self.nindbasis: int | None = None
        self.shells: list[Shell] = []
        self.shell_centers: list[int] = []
        self.transform: np.ndarray | None = None
        self.current: int | None = None

    def _build_orbitals(self) -> None:
        count = self.nindbasis * (1 if self.wfn.wfntype == 0 else 2)
        self.wfn.orbitals = [Orbital(coeff=np.zeros(self.nbasis)) for _ in range(count)]

    def _attach_shells(self) -> None:
        centers = self.wfn.centers
        for shell, center_number in zip(self.shells, self.shell_centers):
            index = center_number - 1
            if not 0 <= index < len(centers):
                raise ValueError(f"shell refers to missing center {center_number}")
            centers[index].shells.append(shell)
        self.shells = []
        self.shell_centers = []
        self.transform = self.wfn.matrix_transform()

    def _orbital(self) -> Orbital:
        if self.current is None or not 0 <= self.current < len(self.wfn.orbitals):
            raise ValueError("orbital record refers to an orbital that does not exist")
        return self.wfn.orbitals[self.current]

    def _read_centers(self) -> None:
        for center in self.wfn.centers:
            line = next(self.lines, None)
            if line is None:
                raise ValueError("center list ends early")
            fields = line.split()
            if len(fields) < 7:
                raise ValueError(f"center line {line.strip()!r} has too few fields")
            center.index = int(fields[2])
            center.nuclear_charge = safe_float(fields[3])
            center.coordinates = [safe_float(word) * ANGSTROM_TO_BOHR for word in fields[4:7]]

    def _read_shell_array(self, kind: str) -> None:
        words = _read_words(self.lines, len(self.shells))
        for shell_number, word in enumerate(words):
            if kind == "types":
                self.shells[shell_number].type = int(word)
            elif kind == "centers":
                self.shell_centers[shell_number] = int(word)
            elif kind == "contraction":
                nprims = int(word)
                shell = self.shells[shell_number]
                shell.exponents = [0.0] * nprims
                shell.coefficients = [0.0] * nprims
                shell.normalized_coefficients = [0.0] * nprims

    def _read_primitives(self, attribute: str) -> None:
        sizes = [len(getattr(shell, attribute)) for shell in self.shells]
        values = iter(safe_float(word) for word in _read_words(self.lines, sum(sizes)))
        for shell in self.shells:
            target = getattr(shell, attribute)
            for position in range(len(target)):
                value = next(values, None)
                if value is None:
                    return
                target[position] = value

    def _handle(self, words: list[str]) -> None:
        key = words[0]
        wfn = self.wfn
        if key == "Wfntype=":
            wfn.wfntype = int(_value(words))
        elif key == "E_tot=":
            wfn.e_tot = safe_float(_value(words))
        elif key == "VT_ratio=":
            wfn.vt_ratio = safe_float(_value(words))
        elif key == "Ncenter=":
            wfn.centers = [Center() for _ in range(int(_value(words)))]
        elif key == "$Centers":
            self._read_centers()
        elif key == "Nbasis=":
            self.nbasis = int(_value(words))
            if self.nindbasis is not None:
                self._build_orbitals()
        elif key == "Nindbasis=":
            self.nindbasis = int(_value(words))
            if self.nbasis is not None:
                self._build_orbitals()
        elif key == "Nshell=":
            nshells = int(_value(words))
            self.shells = [Shell(type=0) for _ in range(nshells)]
            self.shell_centers = [0] * nshells
        elif key == "$Shell":
            if len(words) > 1 and words[1] in ("types", "centers", "contraction"):
                self._read_shell_array(words[1])
        elif key == "$Primitive":
            self._read_primitives("exponents")
        elif key == "$Contraction":
            self._read_primitives("coefficients")
        elif key == "Index=":
            if self.transform is None:
                self._attach_shells()
            self.current = int(_value(words)) - 1
        elif key == "Type=":
            self._orbital().type = int(_value(words))
        elif key == "Energy=":
            self._orbital().energy = safe_float(_value(words))
        elif key == "Occ=":
            self._orbital().occ = safe_float(_value(words))
        elif key == "Sym=":
            self._orbital().sym = _value(words)
        elif key == "$Coeff":
            orbital = self._orbital()
            for position, word in enumerate(_read_words(self.lines, orbital.coeff.size)):
                orbital.coeff[position] = safe_float(word)

    def read(self) -> Wavefunction:
        for line in self.lines:
            words = line.split()
            if words:
                self._handle(words)
        if self.transform is None:
            self._attach_shells()
        spins = (0,) if self.wfn.wfntype == 0 else (1, 2)
        for spin in spins:
            matrix = self.transform.T @ self.wfn.coefficient_matrix(spin)
            self.wfn.set_coefficient_matrix(matrix, spin)
        normalize_shells(self.wfn.centers)
        return self.wfn


def loads(text: str) -> Wavefunction:
    """Build a wavefunction from mwfn text."""
    return _Reader(text).read()


def load(path: str | os.PathLike) -> Wavefunction:
    """Read a wavefunction from an mwfn file."""
    return loads(Path(path).read_text())


def dumps(wfn: Wavefunction) -> str:
    """Render a wavefunction as mwfn text."""
    out: list[str] = ["# Generated by mwfnchem\n"]

    out.append("\n\n# Overview\n")
    out.append("Wfntype= %d\n" % wfn.wfntype)
    out.append("Charge= %f\n" % wfn.charge())
    if wfn.wfntype == 0:
        half = wfn.num_electrons(-1) / 2
        out.append("Naelec= %f\n" % half)
        out.append("Nbelec= %f\n" % half)
    else:
        out.append("Naelec= %f\n" % wfn.num_electrons(1))
        out.append("Nbelec= %f\n" % wfn.num_electrons(2))
    out.append("E_tot= %f\n" % wfn.e_tot)
    out.append("VT_ratio= %f\n" % wfn.vt_ratio)

    out.append("\n\n# Atoms\n")
    out.append("Ncenter= %d\n" % wfn.num_centers())
    out.append("$Centers\n")
    for number, center in enumerate(wfn.centers, start=1):
        x, y, z = (value / ANGSTROM_TO_BOHR for value in center.coordinates)
        out.append(
            "%d %s %d %f % f % f % f\n"
            % (number, center.symbol(), center.index, center.nuclear_charge, x, y, z)
        )

    out.append("\n\n# Basis set\n")
    out.append("Nbasis= %d\n" % wfn.num_basis())
    out.append("Nindbasis= %d\n" % wfn.num_ind_basis())
    out.append("Nprims= %d\n" % wfn.num_prims())
    out.append("Nshell= %d\n" % wfn.num_shells())
    out.append("Nprimshell= %d\n" % wfn.num_prim_shells())
    out.append("$Shell types\n")
    for center in wfn.centers:
        out.append("".join(" %d" % shell.type for shell in center.shells) + "\n")
    out.append("$Shell centers\n")
    for number, center in enumerate(wfn.centers, start=1):
        out.append(" %d" % number * center.num_shells() + "\n")
    out.append("$Shell contraction degrees\n")
    for center in wfn.centers:
        out.append("".join(" %d" % shell.num_prims() for shell in center.shells) + "\n")
    out.append("$Primitive exponents\n")
    for center in wfn.centers:
        out.append(
            "".join(" %E" % value for shell in center.shells for value in shell.exponents) + "\n"
        )
    out.append("$Contraction coefficients\n")
    for center in wfn.centers:
        out.append(
            "".join(" %E" % value for shell in center.shells for value in shell.coefficients) + "\n"
        )

    out.append("\n\n# Orbitals\n")
    transform = wfn.matrix_transform()
    for number, orbital in enumerate(wfn.orbitals, start=1):
        out.append("Index= %9d\n" % number)
        out.append("Type= %d\n" % orbital.type)
        out.append("Energy= %.10E\n" % orbital.energy)
        out.append("Occ= %E\n" % orbital.occ)
        out.append("Sym= %s\n" % orbital.sym)
        out.append("$Coeff\n")
        coefficients = transform @ np.asarray(orbital.coeff, dtype=float)
        out.append("".join(" %.10E" % value for value in coefficients))
        out.append("\n\n")
    return "".join(out)


def dump(wfn: Wavefunction, path: str | os.PathLike) -> None:
    """Write a wavefunction to an mwfn file."""
    Path(path).write_text(dumps(wfn))