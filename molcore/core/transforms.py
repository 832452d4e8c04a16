"""Coordinate transforms that return new Molecule values."""

from __future__ import annotations

from dataclasses import replace

from molcore.core.elements import DEFAULT_ELEMENTS, ElementTable
from molcore.core.geometry import center_of_mass
from molcore.core.molecule import Molecule


def center_molecule(molecule: Molecule, elements: ElementTable = DEFAULT_ELEMENTS) -> Molecule:
    """Translate so the center of mass sits at the origin."""
    cx, cy, cz = center_of_mass(molecule.atoms, elements)
    return molecule.replace_atoms(
        replace(a, position=(a.x - cx, a.y - cy, a.z - cz)) for a in molecule.atoms
    )


def scale_molecule(molecule: Molecule, factor: float) -> Molecule:
    return molecule.replace_atoms(
        replace(a, position=(a.x * factor, a.y * factor, a.z * factor)) for a in molecule.atoms
    )
