"""molcore.parsers: molecule file parsers.

Architecture:
    - base.py: FileFormat, ParseResult (ParseSuccess | ParseFailure), MoleculeParser
    - detect.py: detect_format (filename first, then content sniffing)
    - xyz.py / mol.py / pdb_format.py / sdf.py: one parser per format
    - dispatch.py: parse_text / parse_path entry points and the parser registry

Usage::

    from molcore.parsers import parse_text

    result = parse_text("3\\nwater\\nO 0 0 0\\nH 0.96 0 0\\nH -0.24 0.93 0")
    assert result.ok
    print(result.molecule.name, result.molecule.formula)   # water H₂O

    # A specific grammar
    from molcore.parsers import PDBFormatParser
    result = PDBFormatParser().parse(pdb_text, name="fallback")
"""

from molcore.parsers.base import (
    FileFormat,
    MoleculeParseError,
    MoleculeParser,
    ParseFailure,
    ParseResult,
    ParseSuccess,
)
from molcore.parsers.detect import detect_format
from molcore.parsers.xyz import XYZParser
from molcore.parsers.mol import MOLParser
from molcore.parsers.pdb_format import PDBFormatParser
from molcore.parsers.sdf import SDFParser
from molcore.parsers.dispatch import auto_parser, parse_path, parse_text, parser_for, register_parser

__all__ = [
    # Result types
    "FileFormat",
    "ParseResult",
    "ParseSuccess",
    "ParseFailure",
    "MoleculeParseError",
    "MoleculeParser",
    # Concrete parsers
    "XYZParser",
    "MOLParser",
    "PDBFormatParser",
    "SDFParser",
    # Entry points
    "detect_format",
    "parse_text",
    "parse_path",
    "parser_for",
    "auto_parser",
    "register_parser",
]
