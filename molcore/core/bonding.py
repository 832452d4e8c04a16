"""Distance-based bond perception for formats without explicit topology.

Two atoms are bonded when their distance is at most the expected
single-bond length for the element pair plus a tolerance. Only single
bonds are produced; bond order cannot be read from geometry alone.

Atoms are bucketed into a cubic grid whose cell edge is the longest
possible cutoff, so each atom only needs to be compared with atoms in the
27 surrounding cells. The result is identical to the all-pairs scan.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import TYPE_CHECKING, Sequence

import numpy as np

from molcore.core.elements import DEFAULT_BOND_LENGTHS, BondLengthTable
from molcore.core.logging_utils import get_logger
from molcore.core.molecule import Atom, Bond, BondOrder

if TYPE_CHECKING:
    from molcore.config import MolcoreSettings

logger = get_logger(__name__)

DEFAULT_TOLERANCE = 0.4

_NEIGHBOUR_OFFSETS = [
    (dx, dy, dz) for dx in (-1, 0, 1) for dy in (-1, 0, 1) for dz in (-1, 0, 1)
]


class BondInferenceEngine:
    """Infer single bonds from interatomic distances.

    Usage::

        engine = BondInferenceEngine()
        bonds = engine.infer_bonds(atoms)
    """

    def __init__(
        self,
        bond_lengths: BondLengthTable = DEFAULT_BOND_LENGTHS,
        tolerance: float = DEFAULT_TOLERANCE,
    ):
        self.bond_lengths = bond_lengths
        self.tolerance = tolerance

    @classmethod
    def from_settings(cls, settings: "MolcoreSettings") -> "BondInferenceEngine":
        return cls(
            bond_lengths=DEFAULT_BOND_LENGTHS.with_default(settings.default_bond_distance),
            tolerance=settings.bond_tolerance,
        )

    @property
    def cell_size(self) -> float:
        return self.bond_lengths.max_length() + self.tolerance

    def is_bonded(self, a1: Atom, a2: Atom, dist: float) -> bool:
        return dist <= self.bond_lengths.expected(a1.element, a2.element) + self.tolerance

    def infer_bonds(self, atoms: Sequence[Atom]) -> list[Bond]:
        """Return single bonds in ascending (i, j) order, ids b1, b2, ..."""
        if len(atoms) < 2:
            return []
        coords = np.array([a.position for a in atoms], dtype=float)
        pairs = sorted(self._candidate_pairs(coords))

        bonds: list[Bond] = []
        for i, j in pairs:
            dist = float(np.linalg.norm(coords[i] - coords[j]))
            if self.is_bonded(atoms[i], atoms[j], dist):
                bonds.append(Bond(atom1=i, atom2=j, order=BondOrder.SINGLE, id=f"b{len(bonds) + 1}"))
        logger.debug("Inferred %d bonds for %d atoms", len(bonds), len(atoms))
        return bonds

    def _candidate_pairs(self, coords: np.ndarray) -> set[tuple[int, int]]:
        cell = self.cell_size
        if not math.isfinite(cell) or cell <= 0:
            n = len(coords)
            return {(i, j) for i in range(n) for j in range(i + 1, n)}

        keys = np.floor(coords / cell).astype(np.int64)
        grid: dict[tuple[int, int, int], list[int]] = defaultdict(list)
        for idx, key in enumerate(map(tuple, keys)):
            grid[key].append(idx)

        pairs: set[tuple[int, int]] = set()
        for (cx, cy, cz), members in grid.items():
            for dx, dy, dz in _NEIGHBOUR_OFFSETS:
                others = grid.get((cx + dx, cy + dy, cz + dz))
                if not others:
                    continue
                for i in members:
                    for j in others:
                        if i < j:
                            pairs.add((i, j))
        return pairs


def infer_bonds(atoms: Sequence[Atom], engine: BondInferenceEngine | None = None) -> list[Bond]:
    return (engine or BondInferenceEngine()).infer_bonds(atoms)
