"""Unit conversion factors and element symbol tables."""

ANGSTROM_TO_BOHR = 1.8897259886
HARTREE_TO_EV = 27.21139664130791

ELEMENT_SYMBOLS = (
    "H", "He", "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar", "K", "Ca",
    "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
)

_SYMBOL_TO_Z = {symbol.upper(): z for z, symbol in enumerate(ELEMENT_SYMBOLS, start=1)}


def symbol_to_z(symbol: str) -> int:
    """Return the atomic number of an element symbol, ignoring case."""
    try:
        return _SYMBOL_TO_Z[symbol.strip().upper()]
    except KeyError:
        raise ValueError(f"unknown element symbol: {symbol!r}") from None


def z_to_symbol(z: int) -> str:
    """Return the element symbol for an atomic number."""
    if not 1 <= z <= len(ELEMENT_SYMBOLS):
        raise ValueError(f"no element symbol for atomic number {z}")
    return ELEMENT_SYMBOLS[z - 1]