"""SDF (Structure-Data File) parser.

An SDF is a sequence of MOL V2000 blocks, each optionally followed by
data items, separated by a "$$$$" line. Only the first record is read;
its connection table goes through MOLParser and its data items become
`Molecule.properties`.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Optional

from molcore.core.molecule import Molecule, new_molecule_id
from molcore.parsers.base import FileFormat, MoleculeParseError, MoleculeParser
from molcore.parsers.mol import MOLParser

_RECORD_SEPARATOR = re.compile(r"^\$\$\$\$[ \t]*\r?$", re.MULTILINE)
_DATA_HEADER = re.compile(r"^>.*<([^>]+)>")


def first_record(text: str) -> str:
    return _RECORD_SEPARATOR.split(text, maxsplit=1)[0]


class SDFParser(MoleculeParser):
    format = FileFormat.SDF

    def parse_molecule(self, text: str, name: Optional[str] = None) -> Molecule:
        block = first_record(text)
        if not block.strip():
            raise MoleculeParseError("Invalid SDF file: no molecule data")

        mol = MOLParser(engine=self.engine).parse_molecule(block, name)
        return replace(
            mol,
            id=new_molecule_id("sdf"),
            properties=self._parse_properties(block.splitlines()),
        )

    @staticmethod
    def _parse_properties(lines: list[str]) -> dict[str, str]:
        """Parse SD data items ("> <NAME>" then value lines up to a blank line)."""
        try:
            start = next(i for i, line in enumerate(lines) if line.startswith("M  END")) + 1
        except StopIteration:
            return {}

        props: dict[str, str] = {}
        i = start
        while i < len(lines):
            m = _DATA_HEADER.match(lines[i].strip())
            i += 1
            if not m:
                continue
            values = []
            while i < len(lines) and lines[i].strip():
                values.append(lines[i].strip())
                i += 1
            props[m.group(1)] = "\n".join(values)
        return props

    @staticmethod
    def extensions() -> list[str]:
        return [".sdf", ".sd"]
