"""Tests for the fixed-column PDB parser."""

from conftest import ETHANOL_ATOMS, pdb_atom, pdb_conect, pdb_header

from molcore.parsers.base import FileFormat
from molcore.parsers.pdb_format import DEFAULT_PDB_NAME, PDBFormatParser


def _parse(*lines, name=None):
    result = PDBFormatParser().parse("\n".join(lines), name=name)
    assert result.ok, getattr(result, "error", None)
    assert result.format is FileFormat.PDB
    return result.molecule


# -- atoms ---------------------------------------------------------------------


class TestPDBAtoms:
    def test_ethanol(self, ethanol_pdb):
        mol = PDBFormatParser().parse(ethanol_pdb).molecule
        assert [a.element for a in mol.atoms] == ["C", "C", "O"]
        assert [a.id for a in mol.atoms] == ["C1", "C2", "O3"]
        assert [a.label for a in mol.atoms] == ["C1", "C2", "O"]
        assert mol.atoms[2].position == (2.05, 1.35, 0.0)
        assert mol.id.startswith("pdb-")

    def test_atom_and_hetatm_records(self):
        mol = _parse(pdb_atom(1, "N", 0, 0, 0, "N", record="ATOM"), pdb_atom(2, "ZN", 5, 0, 0, "ZN"))
        assert [a.element for a in mol.atoms] == ["N", "Zn"]

    def test_element_from_atom_name(self):
        mol = _parse(pdb_atom(1, "CA", 0, 0, 0), pdb_atom(2, "1HB", 5, 0, 0))
        assert [a.element for a in mol.atoms] == ["C", "H"]

    def test_element_is_capitalized(self):
        mol = _parse(pdb_atom(1, "FE", 0, 0, 0, "FE"))
        assert mol.atoms[0].element == "Fe"
        assert mol.atoms[0].id == "Fe1"

    def test_bad_coordinates_skipped(self):
        bad = pdb_atom(2, "C2", 1.54, 0, 0, "C")
        bad = bad[:30] + "     bad" + bad[38:]
        mol = _parse(ETHANOL_ATOMS[0], bad, ETHANOL_ATOMS[2])
        assert [a.id for a in mol.atoms] == ["C1", "O3"]

    def test_charges(self):
        mol = _parse(
            pdb_atom(1, "O", 0, 0, 0, "O", "1-"),
            pdb_atom(2, "FE", 5, 0, 0, "FE", "2+"),
            pdb_atom(3, "N", 9, 0, 0, "N"),
        )
        assert [a.formal_charge for a in mol.atoms] == [-1, 2, None]

    def test_only_first_model(self):
        mol = _parse(
            "MODEL        1",
            *ETHANOL_ATOMS,
            "ENDMDL",
            "MODEL        2",
            *ETHANOL_ATOMS,
            "ENDMDL",
        )
        assert mol.num_atoms == 3

    def test_no_atoms(self):
        mol = _parse(pdb_header("EMPTY"), "END")
        assert mol.num_atoms == 0
        assert mol.bonds == ()


# -- names ---------------------------------------------------------------------


class TestPDBNames:
    def test_header_name(self, ethanol_pdb):
        assert PDBFormatParser().parse(ethanol_pdb).molecule.name == "ETHANOL TEST"

    def test_compnd_name(self):
        mol = _parse("COMPND    MOLECULE: ETHANOL;", *ETHANOL_ATOMS)
        assert mol.name == "ETHANOL"

    def test_blank_header_falls_back_to_compnd(self):
        mol = _parse("HEADER    ", "COMPND    MOLECULE: ETHANOL;", *ETHANOL_ATOMS)
        assert mol.name == "ETHANOL"

    def test_caller_name(self):
        assert _parse(*ETHANOL_ATOMS, name="frag").name == "frag"

    def test_default_name(self):
        assert _parse(*ETHANOL_ATOMS).name == DEFAULT_PDB_NAME


# -- bonds ---------------------------------------------------------------------


class TestPDBBonds:
    def test_conect_deduplicated(self, ethanol_pdb):
        mol = PDBFormatParser().parse(ethanol_pdb).molecule
        assert [(b.atom1, b.atom2) for b in mol.bonds] == [(0, 1), (1, 2)]
        assert [b.id for b in mol.bonds] == ["b1", "b2"]

    def test_conect_by_serial(self):
        mol = _parse(
            pdb_atom(10, "C1", 0, 0, 0, "C"),
            pdb_atom(20, "C2", 9, 0, 0, "C"),
            pdb_atom(30, "O", 18, 0, 0, "O"),
            pdb_conect(10, 20),
            pdb_conect(20, 30, 99),
        )
        # far apart, so these can only come from CONECT
        assert [(b.atom1, b.atom2) for b in mol.bonds] == [(0, 1), (1, 2)]

    def test_space_separated_conect(self):
        mol = _parse(
            pdb_atom(1, "C1", 0, 0, 0, "C"),
            pdb_atom(2, "O", 9, 0, 0, "O"),
            pdb_atom(3, "N", 18, 0, 0, "N"),
            "CONECT 1 2",
            "CONECT 2 1 3",
        )
        assert [(b.atom1, b.atom2) for b in mol.bonds] == [(0, 1), (1, 2)]

    def test_inferred_without_conect(self):
        mol = _parse(*ETHANOL_ATOMS)
        assert [(b.atom1, b.atom2) for b in mol.bonds] == [(0, 1), (1, 2)]

    def test_unresolvable_conect_falls_back_to_inference(self):
        mol = _parse(*ETHANOL_ATOMS, pdb_conect(7, 8))
        assert mol.num_bonds == 2

    def test_extensions(self):
        assert PDBFormatParser.extensions() == [".pdb", ".ent"]
