"""Tests for the XYZ parser."""

from molcore.core.molecule import BondOrder
from molcore.parsers.base import FileFormat, ParseFailure, ParseSuccess
from molcore.parsers.xyz import XYZParser


class TestXYZParser:
    def test_water(self, water_xyz):
        result = XYZParser().parse(water_xyz)
        assert isinstance(result, ParseSuccess)
        assert result.format is FileFormat.XYZ
        mol = result.molecule
        assert mol.name == "water"
        assert [a.element for a in mol.atoms] == ["O", "H", "H"]
        assert [a.id for a in mol.atoms] == ["O1", "H2", "H3"]
        assert mol.atoms[1].position == (0.96, 0.0, 0.0)
        assert mol.formula == "H₂O"
        assert mol.id.startswith("xyz-")

    def test_bonds_are_inferred(self, water_xyz):
        mol = XYZParser().parse(water_xyz).molecule
        assert [(b.atom1, b.atom2) for b in mol.bonds] == [(0, 1), (0, 2)]
        assert all(b.order is BondOrder.SINGLE for b in mol.bonds)

    def test_malformed_atom_lines_are_skipped(self):
        text = "4\nmixed\nO 0 0 0\nH x 0 0\nH 0.96\nH -0.24 0.93 0"
        mol = XYZParser().parse(text).molecule
        assert [a.id for a in mol.atoms] == ["O1", "H4"]

    def test_non_finite_coordinates_are_skipped(self):
        text = "2\nc\nH nan 0 0\nH 0 0 0"
        mol = XYZParser().parse(text).molecule
        assert mol.num_atoms == 1

    def test_reads_only_declared_count(self):
        text = "1\nc\nO 0 0 0\nH 0.96 0 0"
        assert XYZParser().parse(text).molecule.num_atoms == 1

    def test_declared_count_larger_than_file(self):
        text = "5\nc\nO 0 0 0"
        assert XYZParser().parse(text).molecule.num_atoms == 1

    def test_extra_columns_ignored(self):
        text = "1\nc\nC 0.0 1.0 2.0 -0.35"
        atom = XYZParser().parse(text).molecule.atoms[0]
        assert atom.position == (0.0, 1.0, 2.0)


class TestXYZNames:
    def test_empty_comment_uses_caller_name(self):
        text = "2\n\nH 0 0 0\nH 0.74 0 0"
        assert XYZParser().parse(text, name="h2").molecule.name == "h2"

    def test_default_name(self):
        text = "2\n   \nH 0 0 0\nH 0.74 0 0"
        assert XYZParser().parse(text).molecule.name == "Imported Molecule"

    def test_comment_wins_over_caller(self, water_xyz):
        assert XYZParser().parse(water_xyz, name="other").molecule.name == "water"


class TestXYZFailures:
    def test_too_few_lines(self):
        result = XYZParser().parse("1\nonly a comment")
        assert isinstance(result, ParseFailure)
        assert result.format is FileFormat.XYZ
        assert result.error == "Invalid XYZ file: too few lines"

    def test_header_not_integer(self):
        result = XYZParser().parse("three\nc\nH 0 0 0")
        assert not result.ok
        assert result.error == "Invalid XYZ file: first line must be atom count"

    def test_negative_count(self):
        result = XYZParser().parse("-1\nc\nH 0 0 0")
        assert not result.ok

    def test_empty_text(self):
        assert not XYZParser().parse("").ok

    def test_extensions(self):
        assert XYZParser.extensions() == [".xyz"]
