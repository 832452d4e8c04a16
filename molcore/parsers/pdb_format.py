"""PDB format parser: fixed-column ATOM/HETATM and CONECT records.

Single Responsibility: only handles PDB format. Bonds come from CONECT
records when the file has any; otherwise they are inferred from distances.
Only the first MODEL is read.
"""

from __future__ import annotations

import re
from typing import Optional

from molcore.core.molecule import Atom, Bond, BondOrder, Molecule, new_molecule_id
from molcore.parsers.base import (
    FileFormat,
    MoleculeParser,
    collect_records,
    first_name,
    parse_float,
    parse_int,
)

DEFAULT_PDB_NAME = "PDB Structure"

_CHARGE_RE = re.compile(r"^(?:(\d)([+-])|([+-])(\d))$")


class PDBFormatParser(MoleculeParser):
    """Parse PDB-format text into a Molecule."""

    format = FileFormat.PDB

    def parse_molecule(self, text: str, name: Optional[str] = None) -> Molecule:
        lines = text.strip().splitlines()

        atom_lines = []
        for line in lines:
            rec = line[:6].strip()
            if rec == "ENDMDL":
                break
            if rec in ("ATOM", "HETATM"):
                atom_lines.append(line)

        parsed, skipped = collect_records(
            list(enumerate(atom_lines, start=1)), lambda row: self._parse_atom_line(*row)
        )
        self._log_skipped("atom", skipped)

        serials = [serial for serial, _ in parsed]
        atoms = [atom for _, atom in parsed]

        bonds = self._parse_conect(lines, serials)
        if not bonds:
            bonds = self.engine.infer_bonds(atoms)

        return Molecule(
            id=new_molecule_id("pdb"),
            name=first_name(*self._title_candidates(lines), name, DEFAULT_PDB_NAME),
            atoms=atoms,
            bonds=bonds,
        )

    @staticmethod
    def _title_candidates(lines: list[str]) -> tuple[Optional[str], Optional[str]]:
        """(HEADER classification, COMPND MOLECULE) from the first such records."""
        header = compnd = None
        for line in lines:
            if header is None and line.startswith("HEADER"):
                header = line[10:50].strip()
            elif compnd is None and line.startswith("COMPND") and "MOLECULE:" in line:
                compnd = line.split("MOLECULE:", 1)[1].split(";", 1)[0].strip()
            if header is not None and compnd is not None:
                break
        return header, compnd

    @staticmethod
    def _parse_atom_line(ordinal: int, line: str) -> Optional[tuple[Optional[int], Atom]]:
        x = parse_float(line[30:38])
        y = parse_float(line[38:46])
        z = parse_float(line[46:54])
        if x is None or y is None or z is None:
            return None

        atom_name = line[12:16].strip()
        element = line[76:78].strip() if len(line) > 76 else ""
        if not element:
            element = re.sub(r"\d", "", atom_name)[:1]
        if not element:
            return None
        element = element.capitalize()

        serial = parse_int(line[6:11])
        return serial, Atom(
            element=element,
            position=(x, y, z),
            id=f"{element}{serial if serial is not None else ordinal}",
            formal_charge=_parse_charge(line[78:80]),
            label=atom_name or None,
        )

    @staticmethod
    def _parse_conect(lines: list[str], serials: list[Optional[int]]) -> list[Bond]:
        """Explicit bonds from CONECT records, de-duplicated by unordered pair."""
        index_of: dict[int, int] = {}
        for idx, serial in enumerate(serials):
            if serial is not None:
                index_of.setdefault(serial, idx)

        bonds: list[Bond] = []
        seen: set[tuple[int, int]] = set()
        for line in lines:
            if not line.startswith("CONECT"):
                continue
            fields = _conect_serials(line)
            if not fields or fields[0] not in index_of:
                continue
            src = index_of[fields[0]]
            for target in fields[1:]:
                dst = index_of.get(target)
                if dst is None or dst == src:
                    continue
                key = (min(src, dst), max(src, dst))
                if key in seen:
                    continue
                seen.add(key)
                bonds.append(Bond(atom1=src, atom2=dst, order=BondOrder.SINGLE, id=f"b{len(bonds) + 1}"))
        return bonds

    @staticmethod
    def extensions() -> list[str]:
        return [".pdb", ".ent"]


def _conect_serials(line: str) -> list[Optional[int]]:
    """Serials of a CONECT record: 5-column fields, else whitespace tokens.

    Hand-written files often separate serials by single spaces
    ("CONECT 1 2"), which breaks the fixed columns.
    """
    body = line.rstrip()
    fields = [parse_int(body[i : i + 5]) for i in range(6, len(body), 5)]
    if fields and None not in fields:
        return fields
    return [parse_int(tok) for tok in body[6:].split()]


def _parse_charge(field: str) -> Optional[int]:
    """PDB charge columns: "2+", "1-" (also accepts "+2")."""
    m = _CHARGE_RE.match(field.strip())
    if not m:
        return None
    digit = m.group(1) or m.group(4)
    sign = m.group(2) or m.group(3)
    value = int(digit)
    return -value if sign == "-" else value
