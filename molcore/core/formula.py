"""Molecular formula and weight from a list of atoms."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Iterable

from molcore.core.elements import DEFAULT_ELEMENTS, ElementTable

if TYPE_CHECKING:
    from molcore.core.molecule import Atom

SUBSCRIPT_DIGITS = "₀₁₂₃₄₅₆₇₈₉"

_TO_SUBSCRIPT = str.maketrans("0123456789", SUBSCRIPT_DIGITS)
_FROM_SUBSCRIPT = str.maketrans(SUBSCRIPT_DIGITS, "0123456789")


def element_counts(atoms: Iterable["Atom"]) -> Counter[str]:
    return Counter(a.element for a in atoms)


def molecular_formula(atoms: Iterable["Atom"]) -> str:
    """Hill-style formula: C, then H, then the rest alphabetically.

    A count of 1 is omitted; larger counts use Unicode subscripts, so
    water renders as "H₂O".
    """
    counts = element_counts(atoms)
    order = [el for el in ("C", "H") if counts.get(el)]
    order += sorted(el for el in counts if el not in ("C", "H") and counts[el])
    return "".join(
        el if counts[el] == 1 else f"{el}{subscript_number(counts[el])}"
        for el in order
    )


def subscript_number(n: int) -> str:
    return str(n).translate(_TO_SUBSCRIPT)


def digits_to_subscript(text: str) -> str:
    """Turn ASCII digits into subscripts, e.g. H2O -> H₂O."""
    return text.translate(_TO_SUBSCRIPT)


def subscript_to_digits(text: str) -> str:
    """Inverse of digits_to_subscript; other characters pass through."""
    return text.translate(_FROM_SUBSCRIPT)


def molecular_weight(atoms: Iterable["Atom"], elements: ElementTable = DEFAULT_ELEMENTS) -> float:
    """Sum of atomic masses in g/mol; unknown elements count as 0."""
    return sum((elements.atomic_mass(a.element) for a in atoms), 0.0)
