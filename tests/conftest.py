"""Shared molecule text fixtures."""

from __future__ import annotations

import pytest

WATER_XYZ = "3\nwater\nO 0 0 0\nH 0.96 0 0\nH -0.24 0.93 0"

WATER_MOL = """\
water
  molcore

  3  2  0  0  0  0  0  0  0  0999 V2000
    0.0000    0.0000    0.0000 O   0  0  0  0  0  0  0  0  0  0  0  0
    0.9600    0.0000    0.0000 H   0  0  0  0  0  0  0  0  0  0  0  0
   -0.2400    0.9300    0.0000 H   0  0  0  0  0  0  0  0  0  0  0  0
  1  2  1  0  0  0  0
  1  3  1  0  0  0  0
M  END
"""


def pdb_atom(serial, name, x, y, z, element="", charge="", record="HETATM"):
    """One fixed-column ATOM/HETATM record."""
    return (
        f"{record:<6}{serial:>5} {name:<4} EOH A   1    "
        f"{x:>8.3f}{y:>8.3f}{z:>8.3f}  1.00  0.00          {element:>2}{charge:<2}"
    )


def pdb_conect(src, *targets):
    return f"CONECT{src:>5}" + "".join(f"{t:>5}" for t in targets)


def pdb_header(text):
    return f"HEADER    {text:<40}01-JAN-24   XXXX"


ETHANOL_ATOMS = [
    pdb_atom(1, "C1", 0.0, 0.0, 0.0, "C"),
    pdb_atom(2, "C2", 1.54, 0.0, 0.0, "C"),
    pdb_atom(3, "O", 2.05, 1.35, 0.0, "O"),
]


@pytest.fixture
def water_xyz() -> str:
    return WATER_XYZ


@pytest.fixture
def water_mol() -> str:
    return WATER_MOL


@pytest.fixture
def ethanol_pdb() -> str:
    return "\n".join([
        pdb_header("ETHANOL TEST"),
        "COMPND    MOLECULE: ETHANOL;",
        *ETHANOL_ATOMS,
        pdb_conect(1, 2),
        pdb_conect(2, 1, 3),
        pdb_conect(3, 2),
        "END",
    ])
