"""Value objects for a parsed molecule.

Hierarchy:
    Molecule
    ├── atoms: tuple[Atom, ...]   (file order; bond indices point here)
    ├── bonds: tuple[Bond, ...]
    └── properties: SD data fields (SDF only)

All objects are frozen. Operations that "change" a molecule (centering,
scaling) build a new one with `Molecule.replace_atoms`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import IntEnum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from molcore.core.elements import DEFAULT_ELEMENTS, ElementTable
from molcore.core.formula import molecular_formula, molecular_weight

Vec3 = tuple[float, float, float]


class BondOrder(IntEnum):
    """Bond order; values follow the MDL bond type codes (4 = aromatic)."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    AROMATIC = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_code(cls, code: object) -> "BondOrder":
        """Map a raw bond type code to an order, defaulting to SINGLE."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return cls.SINGLE


@dataclass(frozen=True)
class Atom:
    """Single atom with an element symbol and a position in Angstrom."""

    element: str
    position: Vec3
    id: str
    formal_charge: Optional[int] = None
    label: Optional[str] = None

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def z(self) -> float:
        return self.position[2]


@dataclass(frozen=True)
class Bond:
    """Bond between two atoms, referenced by 0-based index into Molecule.atoms."""

    atom1: int
    atom2: int
    order: BondOrder = BondOrder.SINGLE
    id: str = ""

    def __post_init__(self) -> None:
        if self.atom1 == self.atom2:
            raise ValueError(f"Bond {self.id or '?'} connects atom {self.atom1} to itself")

    @property
    def key(self) -> tuple[int, int]:
        """Unordered pair key used for de-duplication."""
        return (min(self.atom1, self.atom2), max(self.atom1, self.atom2))


def new_molecule_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class Molecule:
    """Atoms plus bonds, as produced by exactly one parser invocation."""

    id: str
    name: str
    atoms: tuple[Atom, ...] = ()
    bonds: tuple[Bond, ...] = ()
    properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "atoms", tuple(self.atoms))
        object.__setattr__(self, "bonds", tuple(self.bonds))
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        n = len(self.atoms)
        for b in self.bonds:
            if not (0 <= b.atom1 < n and 0 <= b.atom2 < n):
                raise ValueError(f"Bond {b.id or b.key} references a missing atom (atoms={n})")

    @property
    def num_atoms(self) -> int:
        return len(self.atoms)

    @property
    def num_bonds(self) -> int:
        return len(self.bonds)

    @property
    def formula(self) -> str:
        return molecular_formula(self.atoms)

    def molecular_weight(self, elements: ElementTable = DEFAULT_ELEMENTS) -> float:
        return molecular_weight(self.atoms, elements)

    def bond_atoms(self, bond: Bond) -> tuple[Atom, Atom]:
        return self.atoms[bond.atom1], self.atoms[bond.atom2]

    def bond_atom_ids(self, bond: Bond) -> tuple[str, str]:
        a1, a2 = self.bond_atoms(bond)
        return a1.id, a2.id

    def get_atom(self, atom_id: str) -> Optional[Atom]:
        for a in self.atoms:
            if a.id == atom_id:
                return a
        return None

    def replace_atoms(self, atoms: Iterable[Atom]) -> "Molecule":
        """Return a copy with new atoms; bonds are kept as-is."""
        return replace(self, atoms=tuple(atoms), properties=dict(self.properties))

    def to_dict(self) -> dict:
        """Flat dict for manifest / DataFrame usage."""
        return {
            "molecule_id": self.id,
            "name": self.name,
            "formula": self.formula,
            "molecular_weight": round(self.molecular_weight(), 4),
            "atom_count": self.num_atoms,
            "bond_count": self.num_bonds,
        }

    def __repr__(self) -> str:
        return (
            f"<Molecule {self.name!r} formula={self.formula} "
            f"atoms={self.num_atoms} bonds={self.num_bonds}>"
        )
