"""Tests for topology parsing, bond tables and replication."""

import numpy as np
import pytest

from mduniverse.constants import ANGSTROM, ELEMENTARY_CHARGE
from mduniverse.errors import MalformedTopologyError, ResourceError
from mduniverse.system import Atom
from mduniverse.topology import BondTable, Topology, parse_topology, read_topology


class TestParser:
    """Test the topology reader."""

    def test_header(self, water):
        assert water.name == "Water"
        assert water.author == "Test Suite"
        assert water.comment == "Three-site water"
        assert water.n_atoms == 3
        assert water.n_bonds == 2

    def test_units(self, water):
        """Test conversion to SI units."""
        assert water.positions[1].tolist() == pytest.approx([0.9572 * ANGSTROM, 0.0, 0.0])
        assert water.charges[0] == pytest.approx(-0.834 * ELEMENTARY_CHARGE)
        assert water.sigma[0] == pytest.approx(3.15 * ANGSTROM)
        assert water.epsilon[0] == pytest.approx(1.05e-21)
        assert water.symbols == ["O", "H", "H"]

    def test_bonds_zero_based(self, water):
        assert water.bonds.tolist() == [[0, 1], [0, 2]]
        assert np.allclose(water.bond_strengths, [450.0, 450.0])

    def test_equilibrium_length_from_geometry(self, diatomic):
        assert diatomic.bond_lengths[0] == pytest.approx(0.74 * ANGSTROM)

    def test_read_file(self, diatomic_file):
        topology = read_topology(diatomic_file)
        assert topology.n_atoms == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceError):
            read_topology(tmp_path / "missing.top")

    def test_short_header(self):
        with pytest.raises(MalformedTopologyError):
            parse_topology("Name\nAuthor\n")

    def test_bad_counts(self):
        with pytest.raises(MalformedTopologyError) as excinfo:
            parse_topology("Name\nAuthor\nComment\ntwo 1\n")
        assert excinfo.value.line == 4

    def test_truncated_file(self, diatomic_text):
        truncated = "\n".join(diatomic_text.splitlines()[:-1])
        with pytest.raises(MalformedTopologyError):
            parse_topology(truncated)

    def test_bad_atom_record_reports_line(self, diatomic_text):
        lines = diatomic_text.splitlines()
        lines[5] = "0.74 0.0 zero 1 0.0 1.0e-22 0.6"
        with pytest.raises(MalformedTopologyError) as excinfo:
            parse_topology("\n".join(lines))
        assert excinfo.value.line == 6
        assert "line 6" in str(excinfo.value)

    def test_wrong_field_count(self, diatomic_text):
        lines = diatomic_text.splitlines()
        lines[4] = "0.0 0.0 0.0 1 0.0"
        with pytest.raises(MalformedTopologyError) as excinfo:
            parse_topology("\n".join(lines))
        assert excinfo.value.line == 5

    def test_unknown_element(self, diatomic_text):
        lines = diatomic_text.splitlines()
        lines[4] = "0.0 0.0 0.0 99 0.0 1.0e-22 0.6"
        with pytest.raises(MalformedTopologyError):
            parse_topology("\n".join(lines))

    @pytest.mark.parametrize("bond", ["1 3 575.0", "0 2 575.0", "1 1 575.0"])
    def test_invalid_bond_index(self, diatomic_text, bond):
        lines = diatomic_text.splitlines()
        lines[6] = bond
        with pytest.raises(MalformedTopologyError) as excinfo:
            parse_topology("\n".join(lines))
        assert excinfo.value.line == 7


class TestBondTable:
    """Test the bond adjacency table."""

    def test_symmetry(self, water):
        """Test that every bond appears in both atoms' ranges."""
        table = water.bond_table
        for a, b in water.bonds:
            assert b in table.neighbors(a)[0]
            assert a in table.neighbors(b)[0]

    def test_degrees(self, water):
        table = water.bond_table
        assert [table.degree(i) for i in range(3)] == [2, 1, 1]
        assert table.n_bonds == 2
        assert table.n_atoms == 3

    def test_strengths_follow_partners(self):
        table = BondTable.build(3, [[0, 1], [1, 2]], [10.0, 20.0], [1.0, 2.0])
        partners, strengths, lengths = table.neighbors(1)
        assert partners.tolist() == [0, 2]
        assert strengths.tolist() == [10.0, 20.0]
        assert lengths.tolist() == [1.0, 2.0]

    def test_isolated_atom(self):
        table = BondTable.build(3, [[0, 1]], [1.0])
        assert table.degree(2) == 0
        assert len(table.neighbors(2)[0]) == 0

    def test_out_of_range(self):
        with pytest.raises(IndexError):
            BondTable.build(2, [[0, 2]], [1.0])

    def test_atoms_filled_from_table(self):
        atoms = [Atom(element=1), Atom(element=8), Atom(element=1)]
        atoms[0].position = np.array([1e-10, 0.0, 0.0])
        atoms[2].position = np.array([0.0, 1e-10, 0.0])
        Topology.from_atoms("w", "a", "c", atoms, [(1, 0, 450.0), (1, 2, 450.0)])
        assert atoms[1].bonds.tolist() == [0, 2]
        assert atoms[0].bonds.tolist() == [1]
        assert atoms[0].bond_strengths.tolist() == [450.0]


class TestReplication:
    """Test tiling of the reference topology."""

    @pytest.mark.parametrize("copies", [1, 2, 5])
    def test_counts(self, water, copies):
        replicated = water.replicate(copies)
        assert replicated.n_atoms == copies * water.n_atoms
        assert replicated.n_bonds == copies * water.n_bonds

    def test_bond_indices_stay_in_replica(self, water):
        """Test that no bond crosses replicas."""
        copies = 4
        m = water.n_atoms
        replicated = water.replicate(copies)
        for k, (a, b) in enumerate(replicated.bonds):
            copy = k // water.n_bonds
            assert copy * m <= a < (copy + 1) * m
            assert copy * m <= b < (copy + 1) * m

    def test_identity_copied(self, water):
        replicated = water.replicate(3)
        assert replicated.symbols == water.symbols * 3
        assert np.array_equal(replicated.charges[3:6], water.charges)
        assert np.array_equal(replicated.bond_lengths, np.tile(water.bond_lengths, 3))

    def test_invalid_copies(self, water):
        with pytest.raises(ValueError):
            water.replicate(0)

    def test_atom_snapshot(self, water):
        atom = water.replicate(2).atom(3)
        assert atom.symbol == "O"
        assert atom.bonds.tolist() == [4, 5]

    def test_atom_index_range(self, water):
        with pytest.raises(IndexError):
            water.atom(3)
