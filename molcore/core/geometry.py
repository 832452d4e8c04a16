"""Vector geometry over atom positions (Angstrom, degrees).

Every function returns a well-defined value for degenerate input
(coincident points, empty atom lists, out-of-range indices) instead of
raising: 0, the origin or an all-zero box.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from molcore.core.elements import DEFAULT_ELEMENTS, ElementTable

if TYPE_CHECKING:
    from molcore.core.molecule import Atom, Bond

Vec3 = tuple[float, float, float]
ORIGIN: Vec3 = (0.0, 0.0, 0.0)


def _vec(p: Sequence[float]) -> np.ndarray:
    return np.asarray(p, dtype=float)


def _tuple(v: np.ndarray) -> Vec3:
    return (float(v[0]), float(v[1]), float(v[2]))


def distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    return float(np.linalg.norm(_vec(p2) - _vec(p1)))


def midpoint(p1: Sequence[float], p2: Sequence[float]) -> Vec3:
    return _tuple((_vec(p1) + _vec(p2)) / 2.0)


def center_of_mass(atoms: Sequence["Atom"], elements: ElementTable = DEFAULT_ELEMENTS) -> Vec3:
    """Mass-weighted mean position; the origin when the total mass is zero."""
    if not atoms:
        return ORIGIN
    masses = np.array([elements.atomic_mass(a.element) for a in atoms], dtype=float)
    total = masses.sum()
    if total == 0:
        return ORIGIN
    coords = np.array([a.position for a in atoms], dtype=float)
    return _tuple((coords * masses[:, None]).sum(axis=0) / total)


@dataclass(frozen=True)
class BoundingBox:
    min: Vec3 = ORIGIN
    max: Vec3 = ORIGIN
    size: Vec3 = ORIGIN
    center: Vec3 = ORIGIN


def bounding_box(atoms: Sequence["Atom"]) -> BoundingBox:
    if not atoms:
        return BoundingBox()
    coords = np.array([a.position for a in atoms], dtype=float)
    lo = coords.min(axis=0)
    hi = coords.max(axis=0)
    return BoundingBox(
        min=_tuple(lo),
        max=_tuple(hi),
        size=_tuple(hi - lo),
        center=_tuple((lo + hi) / 2.0),
    )


def bond_length(atoms: Sequence["Atom"], bond: "Bond") -> float:
    """Distance between a bond's endpoints, 0 if either index is out of range."""
    n = len(atoms)
    if not (0 <= bond.atom1 < n and 0 <= bond.atom2 < n):
        return 0.0
    return distance(atoms[bond.atom1].position, atoms[bond.atom2].position)


def angle(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> float:
    """Angle p1-p2-p3 at p2, in degrees within [0, 180]."""
    v1 = _vec(p1) - _vec(p2)
    v2 = _vec(p3) - _vec(p2)
    mag1 = np.linalg.norm(v1)
    mag2 = np.linalg.norm(v2)
    if mag1 == 0 or mag2 == 0:
        return 0.0
    # floating point can push |cos| slightly past 1
    cos_theta = max(-1.0, min(1.0, float(np.dot(v1, v2) / (mag1 * mag2))))
    return math.degrees(math.acos(cos_theta))


def dihedral(
    p1: Sequence[float],
    p2: Sequence[float],
    p3: Sequence[float],
    p4: Sequence[float],
) -> float:
    """Torsion angle about the p2-p3 axis, in degrees within (-180, 180].

    The sign encodes the handedness of the rotation; swapping p1 and p4
    flips it. Returns 0 when p2 and p3 coincide.
    """
    a, b, c, d = _vec(p1), _vec(p2), _vec(p3), _vec(p4)
    b1 = b - a
    b2 = c - b
    b3 = d - c

    b2_norm = np.linalg.norm(b2)
    if b2_norm == 0:
        return 0.0

    n1 = np.cross(b1, b2)
    n2 = np.cross(b2, b3)
    m1 = np.cross(n1, b2 / b2_norm)

    x = float(np.dot(n1, n2))
    y = float(np.dot(m1, n2))
    result = math.degrees(math.atan2(y, x))
    if result <= -180.0:
        result += 360.0
    return result
