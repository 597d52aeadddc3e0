# mwfnchem

A small quantum-chemistry library built around the Multiwfn `.mwfn`
wavefunction format. It provides:

- reading and writing `.mwfn` text (`mwfnchem.mwfn_io.load`, `loads`, `dump`,
  `dumps`). Numbers too small or too large for a double are read as zero
  (`safe_float`);
- reading Gaussian-format `.gbs` basis sets (`mwfnchem.basis.parse_gbs`,
  `read_gbs`, `basis_file_path`), and attaching them to atoms with
  `Wavefunction.set_basis`;
- normalisation of contracted Gaussian shells
  (`mwfnchem.normalization.normalized_coefficients`, `normalize_shells`);
- the nuclear repulsion energy, gradient and Hessian
  (`mwfnchem.nuclear.repulsion_energy`, `repulsion_gradient`,
  `repulsion_hessian`, or `Wavefunction.nuclear_repulsion`);
- coefficient, density, energy-density and Fock matrices built from the
  orbitals (`mwfnchem.wavefunction.Wavefunction`), and text tables of atoms
  and orbitals (`centers_table`, `orbitals_table`);
- the data classes `Shell`, `Center` and `Orbital` (`mwfnchem.shell`), plus
  element symbols H to Zn and unit factors (`mwfnchem.units`);
- Cauchy–Schwarz screening of shell quartets and an even split of the work
  across threads (`mwfnchem.screening`);
- contraction of stored, degeneracy-weighted two-electron integrals with one
  or more density matrices into Coulomb/exchange matrices
  (`mwfnchem.contraction.contract_restricted`, `contract_multiple`,
  `contract_unrestricted`), using the packed layout from `mwfnchem.batching`;
- the MP2 correlation energy computed from molecular-orbital integrals, for
  restricted and unrestricted orbitals (`mwfnchem.mp2.mp2_correlation_energy`).

Coordinates are held in bohr. `.mwfn` files store them in ångström, and the
conversion happens on read and on write. Pure shells are stored internally
in the order m = -l..l and reordered to the file's order when written
(`Wavefunction.matrix_transform`).

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from mwfnchem import mwfn_io

wfn = mwfn_io.load("water.mwfn")
print(wfn.num_basis(), wfn.num_electrons(-1))
print(wfn.centers_table())

density = wfn.density(0)          # closed-shell density matrix
wfn.nuclear_repulsion([0])        # adds the nuclear repulsion energy to e_tot
mwfn_io.dump(wfn, "water-out.mwfn")
```

Nuclear repulsion can also be used directly:

```python
import numpy as np
from mwfnchem.nuclear import repulsion_energy

charges = [1.0, 1.0]
coords = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.4]])
print(repulsion_energy(charges, coords))
```

Basis sets are looked up by name. `Wavefunction.set_basis("sto-3g", "basis")`
reads `basis/sto-3g.gbs`. If no directory is given, the `BasisSets`
directory under the path in the `MWFNCHEM_PATH` environment variable is used.

## What it does not do

The package computes no Gaussian integrals of its own: there are no overlap,
kinetic, nuclear-attraction or electron-repulsion integrals. The screening
and contraction functions expect the diagonal repulsion matrix and the
integral values as input. There is no SCF or DFT driver, no orbital
localisation, no integration grid, and no command-line program. It is a
library for use from Python.