"""Read-only element and bond-length tables.

Both tables are immutable values passed into the formula, geometry and bond
inference code, so tests can substitute their own data without patching
module globals::

    from molcore.core.elements import DEFAULT_ELEMENTS, BondLengthTable

    DEFAULT_ELEMENTS.atomic_mass("O")          # 15.999
    BondLengthTable({"C-C": 1.54}).expected("C", "C")
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Optional


@dataclass(frozen=True)
class ElementProperties:
    """Static properties of one chemical element."""

    symbol: str
    name: str
    atomic_number: int
    atomic_mass: float
    covalent_radius: float
    vdw_radius: float
    color: str


# symbol, name, Z, mass (u), covalent radius (A), vdW radius (A), CPK color
_ELEMENT_ROWS: tuple[tuple[str, str, int, float, float, float, str], ...] = (
    ("H", "Hydrogen", 1, 1.008, 0.31, 1.20, "#FFFFFF"),
    ("He", "Helium", 2, 4.0026, 0.28, 1.40, "#D9FFFF"),
    ("Li", "Lithium", 3, 6.94, 1.28, 1.82, "#CC80FF"),
    ("Be", "Beryllium", 4, 9.0122, 0.96, 1.53, "#C2FF00"),
    ("B", "Boron", 5, 10.81, 0.84, 1.92, "#FFB5B5"),
    ("C", "Carbon", 6, 12.011, 0.76, 1.70, "#909090"),
    ("N", "Nitrogen", 7, 14.007, 0.71, 1.55, "#3050F8"),
    ("O", "Oxygen", 8, 15.999, 0.66, 1.52, "#FF0D0D"),
    ("F", "Fluorine", 9, 18.998, 0.57, 1.47, "#90E050"),
    ("Ne", "Neon", 10, 20.180, 0.58, 1.54, "#B3E3F5"),
    ("Na", "Sodium", 11, 22.990, 1.66, 2.27, "#AB5CF2"),
    ("Mg", "Magnesium", 12, 24.305, 1.41, 1.73, "#8AFF00"),
    ("Al", "Aluminium", 13, 26.982, 1.21, 1.84, "#BFA6A6"),
    ("Si", "Silicon", 14, 28.085, 1.11, 2.10, "#F0C8A0"),
    ("P", "Phosphorus", 15, 30.974, 1.07, 1.80, "#FF8000"),
    ("S", "Sulfur", 16, 32.06, 1.05, 1.80, "#FFFF30"),
    ("Cl", "Chlorine", 17, 35.45, 1.02, 1.75, "#1FF01F"),
    ("Ar", "Argon", 18, 39.948, 1.06, 1.88, "#80D1E3"),
    ("K", "Potassium", 19, 39.098, 2.03, 2.75, "#8F40D4"),
    ("Ca", "Calcium", 20, 40.078, 1.76, 2.31, "#3DFF00"),
    ("Sc", "Scandium", 21, 44.956, 1.70, 2.11, "#E6E6E6"),
    ("Ti", "Titanium", 22, 47.867, 1.60, 1.87, "#BFC2C7"),
    ("V", "Vanadium", 23, 50.942, 1.53, 1.79, "#A6A6AB"),
    ("Cr", "Chromium", 24, 51.996, 1.39, 1.89, "#8A99C7"),
    ("Mn", "Manganese", 25, 54.938, 1.39, 1.97, "#9C7AC7"),
    ("Fe", "Iron", 26, 55.845, 1.32, 1.94, "#E06633"),
    ("Co", "Cobalt", 27, 58.933, 1.26, 1.92, "#F090A0"),
    ("Ni", "Nickel", 28, 58.693, 1.24, 1.63, "#50D050"),
    ("Cu", "Copper", 29, 63.546, 1.32, 1.40, "#C88033"),
    ("Zn", "Zinc", 30, 65.38, 1.22, 1.39, "#7D80B0"),
    ("Ga", "Gallium", 31, 69.723, 1.22, 1.87, "#C28F8F"),
    ("Ge", "Germanium", 32, 72.630, 1.20, 2.11, "#668F8F"),
    ("As", "Arsenic", 33, 74.922, 1.19, 1.85, "#BD80E3"),
    ("Se", "Selenium", 34, 78.971, 1.20, 1.90, "#FFA100"),
    ("Br", "Bromine", 35, 79.904, 1.20, 1.85, "#A62929"),
    ("Kr", "Krypton", 36, 83.798, 1.16, 2.02, "#5CB8D1"),
    ("Ag", "Silver", 47, 107.87, 1.45, 1.72, "#C0C0C0"),
    ("Sn", "Tin", 50, 118.71, 1.39, 2.17, "#668080"),
    ("I", "Iodine", 53, 126.90, 1.39, 1.98, "#940094"),
    ("Xe", "Xenon", 54, 131.29, 1.40, 2.16, "#429EB0"),
    ("Pt", "Platinum", 78, 195.08, 1.36, 1.75, "#D0D0E0"),
    ("Au", "Gold", 79, 196.97, 1.36, 1.66, "#FFD123"),
    ("Hg", "Mercury", 80, 200.59, 1.32, 1.55, "#B8B8D0"),
    ("Pb", "Lead", 82, 207.2, 1.46, 2.02, "#575961"),
)


class ElementTable:
    """Immutable symbol -> ElementProperties lookup with fallback values.

    Unknown symbols are not an error: mass falls back to 0, radii and
    color to neutral defaults.
    """

    DEFAULT_MASS = 0.0
    DEFAULT_COVALENT_RADIUS = 1.5
    DEFAULT_VDW_RADIUS = 2.0
    DEFAULT_COLOR = "#808080"

    def __init__(self, elements: Mapping[str, ElementProperties]):
        self._elements = MappingProxyType(dict(elements))

    @classmethod
    def from_rows(cls, rows) -> "ElementTable":
        return cls({r[0]: ElementProperties(*r) for r in rows})

    def get(self, symbol: str) -> Optional[ElementProperties]:
        """Exact symbol first, then capitalized ("CL" -> "Cl")."""
        props = self._elements.get(symbol)
        if props is None and symbol:
            props = self._elements.get(symbol.capitalize())
        return props

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.get(symbol) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def atomic_mass(self, symbol: str) -> float:
        props = self.get(symbol)
        return props.atomic_mass if props else self.DEFAULT_MASS

    def covalent_radius(self, symbol: str) -> float:
        props = self.get(symbol)
        return props.covalent_radius if props else self.DEFAULT_COVALENT_RADIUS

    def vdw_radius(self, symbol: str) -> float:
        props = self.get(symbol)
        return props.vdw_radius if props else self.DEFAULT_VDW_RADIUS

    def color(self, symbol: str) -> str:
        props = self.get(symbol)
        return props.color if props else self.DEFAULT_COLOR

    def __repr__(self) -> str:
        return f"<ElementTable n={len(self)}>"


class BondLengthTable:
    """Expected single-bond lengths keyed by "A-B" element pairs (Angstrom).

    Lookup is symmetric: "A-B" is tried before "B-A"; missing pairs fall
    back to `default`.
    """

    def __init__(self, lengths: Mapping[str, float], default: float = 1.6):
        self._lengths = MappingProxyType(dict(lengths))
        self.default = default

    def expected(self, el1: str, el2: str) -> float:
        length = self._lengths.get(f"{el1}-{el2}")
        if length is None:
            length = self._lengths.get(f"{el2}-{el1}")
        return self.default if length is None else length

    def max_length(self) -> float:
        """Largest length the table can return, default included."""
        return max([self.default, *self._lengths.values()])

    def with_default(self, default: float) -> "BondLengthTable":
        return BondLengthTable(self._lengths, default=default)

    def __len__(self) -> int:
        return len(self._lengths)

    def __repr__(self) -> str:
        return f"<BondLengthTable pairs={len(self)} default={self.default}>"


DEFAULT_ELEMENTS = ElementTable.from_rows(_ELEMENT_ROWS)

DEFAULT_BOND_LENGTHS = BondLengthTable({
    "H-H": 0.74,
    "C-C": 1.54,
    "C-H": 1.09,
    "C-N": 1.47,
    "C-O": 1.43,
    "N-H": 1.01,
    "O-H": 0.96,
    "N-N": 1.45,
    "O-O": 1.48,
    "C-S": 1.82,
    "C-Cl": 1.77,
    "C-F": 1.35,
    "C-Br": 1.94,
})
