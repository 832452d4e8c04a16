"""Shared types for the molecule file parsers.

    FileFormat    which grammar a text was read with
    ParseResult   ParseSuccess | ParseFailure, the only thing a parser returns
    MoleculeParser  one subclass per format

Parsers are tolerant per record and strict per file: a malformed atom or
bond line is dropped by `collect_records`, while a structural problem
(missing header, bad counts line) raises MoleculeParseError, which
`MoleculeParser.parse` turns into a ParseFailure. Nothing escapes `parse`.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Iterable, Optional, TypeVar, Union

from molcore.core.bonding import BondInferenceEngine
from molcore.core.logging_utils import get_logger
from molcore.core.molecule import Molecule

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_MOLECULE_NAME = "Imported Molecule"


class FileFormat(str, Enum):
    XYZ = "xyz"
    MOL = "mol"
    PDB = "pdb"
    SDF = "sdf"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return "Unknown" if self is FileFormat.UNKNOWN else self.name


class MoleculeParseError(ValueError):
    """Structural problem that makes a whole file unreadable."""


@dataclass(frozen=True)
class ParseSuccess:
    molecule: Molecule
    format: FileFormat

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseFailure:
    error: str
    format: FileFormat = FileFormat.UNKNOWN

    @property
    def ok(self) -> bool:
        return False


ParseResult = Union[ParseSuccess, ParseFailure]


# ======================================================================
# Helpers
# ======================================================================

def collect_records(
    rows: Iterable[T],
    parse_one: Callable[[T], Optional[R]],
) -> tuple[list[R], int]:
    """Apply `parse_one` to each row, keeping results that are not None.

    Returns (records, skipped).
    """
    records: list[R] = []
    skipped = 0
    for row in rows:
        rec = parse_one(row)
        if rec is None:
            skipped += 1
        else:
            records.append(rec)
    return records, skipped


def first_name(*candidates: Optional[str]) -> str:
    """First candidate that is non-empty after stripping.

    Parsers list their sources in precedence order, e.g.
    ``first_name(title_line, caller_name, DEFAULT_MOLECULE_NAME)``.
    """
    for c in candidates:
        if c and c.strip():
            return c.strip()
    return DEFAULT_MOLECULE_NAME


def parse_float(token: str) -> Optional[float]:
    """Finite float or None ("nan" and "inf" count as malformed)."""
    try:
        value = float(token)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except (TypeError, ValueError):
        return None


# ======================================================================
# Parser protocol
# ======================================================================

class MoleculeParser(ABC):
    """Parse file content into a ParseResult.

    Single Responsibility: one parser per format. Formats without bonds
    use the injected BondInferenceEngine.
    """

    format: ClassVar[FileFormat] = FileFormat.UNKNOWN

    def __init__(self, engine: Optional[BondInferenceEngine] = None):
        self.engine = engine or BondInferenceEngine()

    def parse(self, text: str, name: Optional[str] = None) -> ParseResult:
        """Parse `text`; `name` is the caller's fallback molecule name."""
        try:
            molecule = self.parse_molecule(text, name)
        except MoleculeParseError as e:
            logger.warning("Invalid %s content: %s", self.format.label, e)
            return ParseFailure(error=str(e), format=self.format)
        except Exception as e:
            logger.warning("Failed to parse %s: %s", self.format.label, e)
            return ParseFailure(error=f"Failed to parse {self.format.label}: {e}", format=self.format)
        return ParseSuccess(molecule=molecule, format=self.format)

    @abstractmethod
    def parse_molecule(self, text: str, name: Optional[str] = None) -> Molecule:
        """Build the Molecule or raise MoleculeParseError."""
        ...

    @staticmethod
    @abstractmethod
    def extensions() -> list[str]:
        """File extensions this parser handles (e.g. ['.xyz'])."""
        ...

    def _log_skipped(self, kind: str, skipped: int) -> None:
        if skipped:
            logger.debug("%s parser skipped %d malformed %s record(s)", self.format.label, skipped, kind)
