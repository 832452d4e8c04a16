"""Size limits for imported molecules.

The parsers never enforce these; callers check a file before parsing it
and a molecule before handing it on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from molcore.core.molecule import Molecule

if TYPE_CHECKING:
    from molcore.config import MolcoreSettings


@dataclass(frozen=True)
class ValidationLimits:
    max_atoms: int = 10_000
    max_bonds: int = 15_000
    max_file_size: int = 50 * 1024 * 1024
    max_name_length: int = 256

    @classmethod
    def from_settings(cls, settings: "MolcoreSettings") -> "ValidationLimits":
        return cls(
            max_atoms=settings.max_atoms,
            max_bonds=settings.max_bonds,
            max_file_size=settings.max_file_size,
            max_name_length=settings.max_name_length,
        )


def check_file_size(nbytes: int, limits: ValidationLimits = ValidationLimits()) -> list[str]:
    if nbytes > limits.max_file_size:
        return [f"File is {nbytes} bytes, limit is {limits.max_file_size}"]
    return []


def check_molecule(molecule: Molecule, limits: ValidationLimits = ValidationLimits()) -> list[str]:
    """Return human-readable limit violations; empty when the molecule is fine."""
    issues = []
    if molecule.num_atoms == 0:
        issues.append("Molecule has no atoms")
    if molecule.num_atoms > limits.max_atoms:
        issues.append(f"Too many atoms: {molecule.num_atoms} > {limits.max_atoms}")
    if molecule.num_bonds > limits.max_bonds:
        issues.append(f"Too many bonds: {molecule.num_bonds} > {limits.max_bonds}")
    if len(molecule.name) > limits.max_name_length:
        issues.append(f"Name longer than {limits.max_name_length} characters")
    return issues
