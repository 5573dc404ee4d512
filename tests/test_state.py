"""Tests for MDState, vector helpers, elements and atoms."""

import numpy as np
import pytest

from mduniverse.constants import ATOMIC_MASS
from mduniverse.errors import ConfigurationError, MalformedTopologyError
from mduniverse.system import Atom, Box, MDState, elements, get_element
from mduniverse.system.vectors import magnitude, random_unit_vector, random_unit_vectors


class TestMDState:
    """Test MDState container."""

    @pytest.fixture
    def state(self):
        return MDState.create(
            positions=np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]),
            masses=np.array([2.0, 4.0]),
            box=Box.cubic(10.0),
            velocities=np.array([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]]),
        )

    def test_create_zero_fills(self, state):
        """Test that missing arrays default to zeros."""
        assert np.all(state.accelerations == 0.0)
        assert np.all(state.forces == 0.0)
        assert state.time == 0.0
        assert state.step == 0

    def test_create_copies_inputs(self):
        """Test that the state owns its arrays."""
        positions = np.array([[1.0, 2.0, 3.0]])
        velocities = np.array([[0.5, 0.0, 0.0]])
        state = MDState.create(
            positions=positions,
            masses=np.ones(1),
            box=Box.cubic(10.0),
            velocities=velocities,
        )
        state.positions[0] += 1.0
        state.velocities[0] += 1.0
        assert positions.tolist() == [[1.0, 2.0, 3.0]]
        assert velocities.tolist() == [[0.5, 0.0, 0.0]]

    def test_shape_mismatch(self):
        """Test that inconsistent shapes are rejected."""
        with pytest.raises(ValueError):
            MDState.create(
                positions=np.zeros((3, 3)),
                masses=np.ones(2),
                box=Box.cubic(1.0),
            )

    def test_kinetic_energy(self, state):
        """Test KE = sum(0.5 m v^2)."""
        assert state.kinetic_energy == pytest.approx(0.5 * 2.0 * 1.0 + 0.5 * 4.0 * 4.0)

    def test_copy_is_deep(self, state):
        """Test that copies do not share arrays."""
        clone = state.copy()
        clone.positions[0, 0] = 5.0
        assert state.positions[0, 0] == 0.0

    def test_with_positions_shares_other_arrays(self, state):
        """Test that the position view keeps the kinematics."""
        view = state.with_positions(np.ones((2, 3)))
        assert np.all(view.positions == 1.0)
        assert view.velocities is state.velocities
        assert view.box is state.box


class TestVectors:
    """Test vector helpers."""

    def test_magnitude(self):
        assert magnitude([3.0, 4.0, 0.0]) == pytest.approx(5.0)
        assert np.allclose(magnitude([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]]), [1.0, 2.0])

    def test_random_unit_vector_norm(self):
        """Test that Marsaglia vectors are unit length."""
        rng = np.random.default_rng(3)
        vectors = random_unit_vectors(200, rng)
        assert vectors.shape == (200, 3)
        assert np.allclose(np.linalg.norm(vectors, axis=1), 1.0)

    def test_random_unit_vector_isotropic(self):
        """Test that the mean direction is close to zero."""
        rng = np.random.default_rng(5)
        vectors = random_unit_vectors(5000, rng)
        assert np.all(np.abs(vectors.mean(axis=0)) < 0.05)

    def test_deterministic_with_seed(self):
        a = random_unit_vector(np.random.default_rng(42))
        b = random_unit_vector(np.random.default_rng(42))
        assert np.array_equal(a, b)

    def test_exhausted_generator(self):
        """Test that a generator never landing in the disc fails loudly."""

        class CornerGenerator:
            def uniform(self, low, high, size):
                return np.full(size, high)

        with pytest.raises(ConfigurationError):
            random_unit_vector(CornerGenerator(), max_attempts=10)


class TestElements:
    """Test element table."""

    def test_lookup(self):
        oxygen = get_element(8)
        assert oxygen.symbol == "O"
        assert oxygen.mass == pytest.approx(15.999)
        assert elements.mass(1) == pytest.approx(1.008 * ATOMIC_MASS)

    def test_batch(self):
        assert elements.symbols([1, 8, 1]) == ["H", "O", "H"]
        assert elements.masses([6, 6]).shape == (2,)

    @pytest.mark.parametrize("code", [0, -1, 37])
    def test_unknown_code(self, code):
        with pytest.raises(MalformedTopologyError):
            get_element(code)


class TestAtom:
    """Test Atom record."""

    def test_properties(self):
        atom = Atom(element=8, bonds=[1, 2], bond_strengths=[500.0, 500.0])
        assert atom.symbol == "O"
        assert atom.mass == pytest.approx(15.999 * ATOMIC_MASS)
        assert atom.n_bonds == 2

    def test_bond_length_mismatch(self):
        with pytest.raises(ValueError):
            Atom(element=1, bonds=[1], bond_strengths=[])

    def test_clean(self):
        atom = Atom(
            element=1,
            position=[1.0, 2.0, 3.0],
            velocity=[1.0, 1.0, 1.0],
            bonds=[0],
            bond_strengths=[1.0],
        )
        atom.clean()
        assert atom.n_bonds == 0
        assert np.all(atom.position == 0.0)
        assert np.all(atom.velocity == 0.0)
