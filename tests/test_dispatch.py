"""Tests for format dispatch, the parser registry and file loading."""

import gzip

import pytest
from conftest import WATER_MOL, WATER_XYZ

from molcore.core.bonding import BondInferenceEngine
from molcore.core.elements import BondLengthTable
from molcore.core.validation import ValidationLimits
from molcore.parsers import (
    FileFormat,
    MOLParser,
    ParseFailure,
    ParseSuccess,
    PDBFormatParser,
    SDFParser,
    XYZParser,
    auto_parser,
    dispatch,
    parse_path,
    parse_text,
    parser_for,
    register_parser,
)


class TaggedPDBParser(PDBFormatParser):
    """Stand-in for a user-supplied PDB parser."""


@pytest.fixture
def fresh_registry(monkeypatch):
    monkeypatch.setattr(dispatch, "_REGISTRY", {})
    monkeypatch.setattr(dispatch, "_defaults_loaded", False)


# -- parse_text ----------------------------------------------------------------


class TestParseText:
    def test_sniffed_xyz(self):
        result = parse_text(WATER_XYZ)
        assert isinstance(result, ParseSuccess)
        assert result.format is FileFormat.XYZ

    def test_filename_stem_is_fallback_name(self):
        text = "2\n\nH 0 0 0\nH 0.74 0 0"
        assert parse_text(text, filename="hydrogen.xyz").molecule.name == "hydrogen"

    def test_unknown(self):
        result = parse_text("hello\nworld")
        assert isinstance(result, ParseFailure)
        assert result.format is FileFormat.UNKNOWN
        assert result.error == "Unknown file format"

    def test_mislabeled_file_fails_with_format_error(self):
        result = parse_text(WATER_XYZ, filename="water.mol")
        assert not result.ok
        assert result.format is FileFormat.MOL
        assert result.error.startswith("Invalid MOL file")

    def test_engine_is_used(self):
        strict = BondInferenceEngine(bond_lengths=BondLengthTable({}, default=0.1), tolerance=0.0)
        assert parse_text(WATER_XYZ, engine=strict).molecule.num_bonds == 0

    def test_never_raises(self):
        for text in ["", "\n\n\n", "$$$$", "0\n\n", "1\nx\nH"]:
            result = parse_text(text)
            assert result.format in FileFormat


# -- registry ------------------------------------------------------------------


class TestRegistry:
    @pytest.mark.parametrize(
        "fmt, cls",
        [(FileFormat.XYZ, XYZParser), (FileFormat.MOL, MOLParser),
         (FileFormat.PDB, PDBFormatParser), (FileFormat.SDF, SDFParser)],
    )
    def test_parser_for(self, fmt, cls):
        assert isinstance(parser_for(fmt), cls)

    def test_parser_for_unknown(self):
        assert parser_for(FileFormat.UNKNOWN) is None

    def test_auto_parser(self):
        assert isinstance(auto_parser("x/1abc.pdb.gz"), PDBFormatParser)
        assert isinstance(auto_parser("lig.sdf"), SDFParser)

    def test_auto_parser_unsupported(self):
        with pytest.raises(ValueError, match="No parser for"):
            auto_parser("notes.txt")

    def test_auto_parser_passes_engine(self):
        engine = BondInferenceEngine(tolerance=0.1)
        assert auto_parser("w.xyz", engine).engine is engine

    @pytest.mark.parametrize(
        "path, cls",
        [("1abc.ent", PDBFormatParser), ("1ABC.ENT.GZ", PDBFormatParser),
         ("lig.sd", SDFParser), ("lig.mol2", MOLParser), ("lig.mol", MOLParser)],
    )
    def test_auto_parser_every_listed_extension(self, path, cls):
        assert type(auto_parser(path)) is cls

    def test_unsupported_lists_extensions(self):
        with pytest.raises(ValueError, match=r"\.ent"):
            auto_parser("notes.txt")


class TestCustomParsers:
    def test_custom_parser_before_first_use_keeps_builtins(self, fresh_registry):
        register_parser(TaggedPDBParser)
        result = parse_text(WATER_XYZ, filename="water.xyz")
        assert isinstance(result, ParseSuccess)
        assert result.format is FileFormat.XYZ
        assert isinstance(parser_for(FileFormat.MOL), MOLParser)

    def test_custom_parser_wins_over_builtin(self, fresh_registry):
        register_parser(TaggedPDBParser)
        assert type(parser_for(FileFormat.PDB)) is TaggedPDBParser
        assert type(auto_parser("1abc.pdb")) is TaggedPDBParser

    def test_register_after_first_use(self, fresh_registry):
        assert type(parser_for(FileFormat.PDB)) is PDBFormatParser
        register_parser(TaggedPDBParser)
        assert type(parser_for(FileFormat.PDB)) is TaggedPDBParser


# -- parse_path ----------------------------------------------------------------


class TestParsePath:
    def test_plain_file(self, tmp_path):
        p = tmp_path / "water.mol"
        p.write_text(WATER_MOL)
        result = parse_path(p)
        assert result.ok
        assert result.format is FileFormat.MOL
        assert result.molecule.name == "water"

    def test_gzip_file(self, tmp_path):
        p = tmp_path / "h2.xyz.gz"
        with gzip.open(p, "wt") as f:
            f.write("2\n\nH 0 0 0\nH 0.74 0 0\n")
        result = parse_path(p)
        assert result.ok
        assert result.format is FileFormat.XYZ
        assert result.molecule.name == "h2"
        assert result.molecule.num_bonds == 1

    def test_oversized_file(self, tmp_path):
        p = tmp_path / "big.xyz"
        p.write_text(WATER_XYZ)
        result = parse_path(p, limits=ValidationLimits(max_file_size=10))
        assert isinstance(result, ParseFailure)
        assert result.format is FileFormat.XYZ
        assert "limit is 10" in result.error

    def test_corrupt_gzip(self, tmp_path):
        p = tmp_path / "broken.pdb.gz"
        p.write_bytes(b"not gzip data")
        result = parse_path(p)
        assert not result.ok
        assert result.format is FileFormat.PDB
        assert result.error.startswith("Failed to read broken.pdb.gz")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_path(tmp_path / "nope.xyz")
