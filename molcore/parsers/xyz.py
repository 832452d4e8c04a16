"""XYZ coordinate parser.

Layout::

    3                  <- atom count
    water              <- comment / title
    O  0.000 0.000 0.000
    H  0.960 0.000 0.000
    H -0.240 0.930 0.000

XYZ carries no topology, so bonds always come from the inference engine.
"""

from __future__ import annotations

from typing import Optional

from molcore.core.molecule import Atom, Molecule, new_molecule_id
from molcore.parsers.base import (
    DEFAULT_MOLECULE_NAME,
    FileFormat,
    MoleculeParseError,
    MoleculeParser,
    collect_records,
    first_name,
    parse_float,
    parse_int,
)


class XYZParser(MoleculeParser):
    format = FileFormat.XYZ

    def parse_molecule(self, text: str, name: Optional[str] = None) -> Molecule:
        lines = text.strip().splitlines()
        if len(lines) < 3:
            raise MoleculeParseError("Invalid XYZ file: too few lines")

        header = lines[0].split()
        atom_count = parse_int(header[0]) if header else None
        if atom_count is None or atom_count < 0:
            raise MoleculeParseError("Invalid XYZ file: first line must be atom count")

        comment = lines[1].strip()
        rows = list(enumerate(lines[2 : 2 + atom_count], start=2))
        atoms, skipped = collect_records(rows, lambda row: self._parse_atom_line(*row))
        self._log_skipped("atom", skipped)

        return Molecule(
            id=new_molecule_id("xyz"),
            name=first_name(comment, name, DEFAULT_MOLECULE_NAME),
            atoms=atoms,
            bonds=self.engine.infer_bonds(atoms),
        )

    @staticmethod
    def _parse_atom_line(line_idx: int, line: str) -> Optional[Atom]:
        parts = line.split()
        if len(parts) < 4:
            return None
        element = parts[0]
        coords = [parse_float(p) for p in parts[1:4]]
        if any(c is None for c in coords):
            return None
        x, y, z = coords
        return Atom(element=element, position=(x, y, z), id=f"{element}{line_idx - 1}")

    @staticmethod
    def extensions() -> list[str]:
        return [".xyz"]
