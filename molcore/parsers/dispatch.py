"""Public entry point: detect the format, dispatch to its parser.

Usage::

    from molcore.parsers import parse_text, parse_path

    result = parse_text(open("water.xyz").read(), filename="water.xyz")
    if result.ok:
        print(result.molecule.formula)
    else:
        print(result.format, result.error)

    result = parse_path("1abc.pdb.gz")
"""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import Optional

from molcore.core.bonding import BondInferenceEngine
from molcore.core.logging_utils import get_logger
from molcore.core.validation import ValidationLimits, check_file_size
from molcore.parsers.base import FileFormat, MoleculeParser, ParseFailure, ParseResult
from molcore.parsers.detect import detect_format

logger = get_logger(__name__)

# ======================================================================
# Parser registry (Open/Closed: register new formats without changes)
# ======================================================================

_REGISTRY: dict[FileFormat, type[MoleculeParser]] = {}
_defaults_loaded = False


def register_parser(parser_cls: type[MoleculeParser]) -> None:
    """Register a parser class for the format it declares."""
    _REGISTRY[parser_cls.format] = parser_cls


def _ensure_registry() -> None:
    """Add the built-in parsers once; formats registered earlier keep their parser."""
    global _defaults_loaded
    if _defaults_loaded:
        return
    from molcore.parsers.mol import MOLParser
    from molcore.parsers.pdb_format import PDBFormatParser
    from molcore.parsers.sdf import SDFParser
    from molcore.parsers.xyz import XYZParser
    for cls in (XYZParser, MOLParser, PDBFormatParser, SDFParser):
        _REGISTRY.setdefault(cls.format, cls)
    _defaults_loaded = True


def parser_for(fmt: FileFormat, engine: Optional[BondInferenceEngine] = None) -> Optional[MoleculeParser]:
    _ensure_registry()
    cls = _REGISTRY.get(fmt)
    return cls(engine=engine) if cls else None


def auto_parser(path: str | Path, engine: Optional[BondInferenceEngine] = None) -> MoleculeParser:
    """Return the parser for a file path based on its extension.

    Matches the `extensions()` of the registered parsers, longest first,
    after dropping a trailing ``.gz``.
    """
    _ensure_registry()
    by_ext = {ext.lower(): cls for cls in _REGISTRY.values() for ext in cls.extensions()}
    name = _strip_gz(str(path)).lower()
    for ext in sorted(by_ext, key=len, reverse=True):
        if name.endswith(ext):
            return by_ext[ext](engine=engine)
    raise ValueError(f"No parser for '{path}'. Supported: {sorted(by_ext)}")


# ======================================================================
# Orchestration
# ======================================================================

def parse_text(
    content: str,
    filename: Optional[str] = None,
    *,
    engine: Optional[BondInferenceEngine] = None,
) -> ParseResult:
    """Detect the format of `content` and parse it.

    The filename stem is passed to the parser as the fallback molecule name.
    """
    fmt = detect_format(content, filename)
    parser = parser_for(fmt, engine)
    if parser is None:
        logger.warning("Unknown file format for %s", filename or "<text>")
        return ParseFailure(error="Unknown file format", format=FileFormat.UNKNOWN)
    name = Path(filename).stem if filename else None
    return parser.parse(content, name)


def parse_path(
    path: str | Path,
    *,
    engine: Optional[BondInferenceEngine] = None,
    limits: Optional[ValidationLimits] = None,
) -> ParseResult:
    """Read a (possibly gzipped) file and parse it.

    Raises FileNotFoundError for a missing path; every problem with the
    content itself comes back as a ParseFailure.
    """
    path = Path(path)
    filename = _strip_gz(path.name)
    issues = check_file_size(path.stat().st_size, limits or ValidationLimits())
    if issues:
        return ParseFailure(error=issues[0], format=detect_format("", filename))
    try:
        content = _read_text(path)
    except (OSError, EOFError) as e:
        logger.error("Failed to read %s: %s", path, e)
        return ParseFailure(error=f"Failed to read {path.name}: {e}", format=detect_format("", filename))
    return parse_text(content, filename=filename, engine=engine)


def _strip_gz(name: str) -> str:
    return name[:-3] if name.lower().endswith(".gz") else name


def _read_text(path: Path) -> str:
    opener = gzip.open if path.suffix == ".gz" else open
    mode = "rt" if path.suffix == ".gz" else "r"
    with opener(path, mode, encoding="utf-8", errors="ignore") as f:
        return f.read()
