"""MDL MOL (V2000) parser.

Only the connection table is read:

    line 1        molecule name
    lines 2-3     program / comment lines (ignored)
    line 4        counts line: "aaa bbb ..." atom and bond counts
    atom block    "x y z symbol massDiff charge ..."
    bond block    "a1 a2 type ..." with 1-based atom numbers
    M  CHG        formal charge property lines, up to "M  END"

V3000 blocks are not supported.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from molcore.core.logging_utils import get_logger
from molcore.core.molecule import Atom, Bond, BondOrder, Molecule, new_molecule_id
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

logger = get_logger(__name__)

# Atom-block charge field; 4 means "doublet radical", not a charge
_CHARGE_CODES = {1: 3, 2: 2, 3: 1, 5: -1, 6: -2, 7: -3}


class MOLParser(MoleculeParser):
    format = FileFormat.MOL

    def parse_molecule(self, text: str, name: Optional[str] = None) -> Molecule:
        # Leading blank lines are kept: an empty first line is an empty name.
        lines = text.rstrip().splitlines()
        if len(lines) < 4:
            raise MoleculeParseError("Invalid MOL file: too few lines")

        counts = _split_fields(lines[3], 2)
        atom_count = parse_int(counts[0]) if len(counts) > 0 else None
        bond_count = parse_int(counts[1]) if len(counts) > 1 else None
        if atom_count is None or bond_count is None or atom_count < 0 or bond_count < 0:
            raise MoleculeParseError("Invalid MOL file: cannot parse counts line")

        atom_start = 4
        bond_start = atom_start + atom_count
        prop_start = bond_start + bond_count

        atom_rows = list(enumerate(lines[atom_start:bond_start], start=1))
        parsed, skipped = collect_records(atom_rows, lambda row: self._parse_atom_line(*row))
        self._log_skipped("atom", skipped)

        ordinals = [ordinal for ordinal, _ in parsed]
        atoms = [atom for _, atom in parsed]
        index_of = {ordinal: idx for idx, ordinal in enumerate(ordinals)}

        charges = self._parse_charge_properties(lines[prop_start:])
        if charges is not None:
            atoms = [replace(a, formal_charge=charges.get(o)) for o, a in zip(ordinals, atoms)]

        bond_rows = list(enumerate(lines[bond_start:prop_start], start=1))
        bonds, skipped = collect_records(
            bond_rows, lambda row: self._parse_bond_line(row[0], row[1], index_of)
        )
        self._log_skipped("bond", skipped)

        return Molecule(
            id=new_molecule_id("mol"),
            name=first_name(lines[0], name, DEFAULT_MOLECULE_NAME),
            atoms=atoms,
            bonds=bonds,
        )

    @staticmethod
    def _parse_atom_line(ordinal: int, line: str) -> Optional[tuple[int, Atom]]:
        parts = line.split()
        if len(parts) < 4:
            return None
        coords = [parse_float(p) for p in parts[:3]]
        if any(c is None for c in coords):
            return None
        x, y, z = coords
        element = parts[3]

        charge = None
        if len(parts) > 5:
            charge = _CHARGE_CODES.get(parse_int(parts[5]))

        return ordinal, Atom(
            element=element,
            position=(x, y, z),
            id=f"{element}{ordinal}",
            formal_charge=charge,
        )

    @staticmethod
    def _parse_bond_line(ordinal: int, line: str, index_of: dict[int, int]) -> Optional[Bond]:
        parts = _split_fields(line, 3)
        if len(parts) < 3:
            return None
        a1 = index_of.get(parse_int(parts[0]))
        a2 = index_of.get(parse_int(parts[1]))
        if a1 is None or a2 is None or a1 == a2:
            return None
        return Bond(atom1=a1, atom2=a2, order=BondOrder.from_code(parts[2]), id=f"b{ordinal}")

    @staticmethod
    def _parse_charge_properties(lines: list[str]) -> Optional[dict[int, int]]:
        """Collect "M  CHG" entries as {atom ordinal: charge}.

        Returns None when the block has no CHG line, in which case the
        atom-block charges stand.
        """
        charges: Optional[dict[int, int]] = None
        for line in lines:
            if line.startswith("M  END"):
                break
            if not line.startswith("M  CHG"):
                continue
            if charges is None:
                charges = {}
            values = [parse_int(p) for p in line.split()[3:]]
            for atom_no, charge in zip(values[0::2], values[1::2]):
                if atom_no is not None and charge is not None:
                    charges[atom_no] = charge
        return charges

    @staticmethod
    def extensions() -> list[str]:
        return [".mol", ".mol2"]


def _split_fields(line: str, nfields: int) -> list[str]:
    """Leading integer fields of a counts or bond line.

    Fields are normally whitespace-separated, but V2000 defines them as
    3-column fields, so values of 100 or more run together ("120125  0",
    "  1100  1"). A leading run of more than three digits is read by column.
    """
    tokens = line.split()
    if tokens and len(tokens[0]) > 3 and tokens[0].isdigit():
        logger.debug("Reading fixed-column fields from %r", line)
        return [line[i : i + 3] for i in range(0, 3 * nfields, 3)]
    return tokens
