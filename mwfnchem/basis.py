"""Reading basis sets in the Gaussian ``.gbs`` text format."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from pathlib import Path

from .shell import Center, Shell
from .units import symbol_to_z

BASIS_PATH_VARIABLE = "MWFNCHEM_PATH"

_SHELL_TYPES: dict[str, tuple[int, ...]] = {
    "S": (0,),
    "SP": (0, 1),
    "P": (1,),
    "D": (-2,),
    "F": (-3,),
    "G": (-4,),
    "H": (-5,),
    "I": (-6,),
}

_FORTRAN_EXPONENT = re.compile("[Dd]")


def _number(word: str) -> float:
    return float(_FORTRAN_EXPONENT.sub("E", word))


def _read_shells(kind: str, words: list[str], lines: Iterator[str]) -> list[Shell]:
    types = _SHELL_TYPES[kind]
    if len(words) < 2:
        raise ValueError(f"shell line {' '.join(words)!r} lacks the number of primitives")
    nprims = int(words[1])
    shells = [Shell(type=shell_type) for shell_type in types]
    for _ in range(nprims):
        try:
            line = next(lines)
        except StopIteration:
            raise ValueError(f"{kind} shell ends before its {nprims} primitives") from None
        fields = line.split()
        if len(fields) < 1 + len(types):
            raise ValueError(f"primitive line {line.strip()!r} has too few numbers")
        exponent = _number(fields[0])
        for shell, word in zip(shells, fields[1:]):
            shell.exponents.append(exponent)
            shell.coefficients.append(_number(word))
            shell.normalized_coefficients.append(0.0)
    return shells


def parse_gbs(text: str) -> list[Center]:
    """Parse basis-set text into bare centers, one per element block.

    An element block starts with ``-Symbol`` and ends with ``****``.
    The returned centers carry only ``index`` and ``shells``.
    """
    centers: list[Center] = []
    index = 0
    shells: list[Shell] = []
    lines = iter(text.splitlines())
    for line in lines:
        words = line.split()
        if not words:
            continue
        word = words[0]
        if word.startswith("-"):
            index = symbol_to_z(word[1:])
        elif word in _SHELL_TYPES:
            shells.extend(_read_shells(word, words, lines))
        elif word == "****":
            centers.append(Center(index=index, shells=shells))
            shells = []
    return centers


def read_gbs(path: str | os.PathLike) -> list[Center]:
    """Read and parse a basis-set file."""
    return parse_gbs(Path(path).read_text())


def basis_file_path(basis_name: str, basis_dir: str | os.PathLike | None = None) -> Path:
    """Locate the file of a named basis set.

    Without ``basis_dir`` the ``BasisSets`` directory under the path in
    the ``MWFNCHEM_PATH`` environment variable is used.
    """
    if basis_dir is None:
        root = os.environ.get(BASIS_PATH_VARIABLE)
        if not root:
            raise ValueError(
                f"no basis directory given and {BASIS_PATH_VARIABLE} is not set"
            )
        basis_dir = Path(root) / "BasisSets"
    return Path(basis_dir) / f"{basis_name}.gbs"