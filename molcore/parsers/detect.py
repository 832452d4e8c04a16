"""Guess the file format of molecule text.

Precedence, first match wins:

1. filename extension (EXTENSION_FORMATS)
2. content sniffing, in the order of CONTENT_RULES
3. FileFormat.UNKNOWN

The extension is trusted over the content: a mislabeled file is parsed
with the grammar its name claims and no mismatch check is made.
"""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import Callable, Optional

from molcore.parsers.base import FileFormat

EXTENSION_FORMATS: dict[str, FileFormat] = {
    ".mol": FileFormat.MOL,
    ".mol2": FileFormat.MOL,
    ".pdb": FileFormat.PDB,
    ".xyz": FileFormat.XYZ,
    ".sdf": FileFormat.SDF,
}

_PDB_RECORD = re.compile(r"^(HEADER|ATOM|HETATM|CRYST1)")
_INTEGER_LINE = re.compile(r"^\s*\d+\s*$")
_COUNTS_LINE = re.compile(r"^\s*\d+\s+\d+")


def format_from_filename(filename: Optional[str]) -> Optional[FileFormat]:
    if not filename:
        return None
    return EXTENSION_FORMATS.get(PurePath(filename).suffix.lower())


def _looks_like_pdb(content: str, lines: list[str]) -> Optional[FileFormat]:
    if any(_PDB_RECORD.match(line) for line in lines):
        return FileFormat.PDB
    return None


def _looks_like_xyz(content: str, lines: list[str]) -> Optional[FileFormat]:
    first = next((line for line in lines if line.strip()), None)
    if first is not None and _INTEGER_LINE.match(first):
        return FileFormat.XYZ
    return None


def _looks_like_mol(content: str, lines: list[str]) -> Optional[FileFormat]:
    if len(lines) > 3 and _COUNTS_LINE.match(lines[3]):
        return FileFormat.SDF if "$$$$" in content else FileFormat.MOL
    return None


CONTENT_RULES: list[Callable[[str, list[str]], Optional[FileFormat]]] = [
    _looks_like_pdb,
    _looks_like_xyz,
    _looks_like_mol,
]


def format_from_content(content: str) -> FileFormat:
    lines = content.rstrip().splitlines()
    for rule in CONTENT_RULES:
        fmt = rule(content, lines)
        if fmt is not None:
            return fmt
    return FileFormat.UNKNOWN


def detect_format(content: str, filename: Optional[str] = None) -> FileFormat:
    """Classify `content`, using `filename` as the first and strongest hint."""
    return format_from_filename(filename) or format_from_content(content)
