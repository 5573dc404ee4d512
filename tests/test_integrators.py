"""Tests for the velocity Verlet integrator."""

import numpy as np
import pytest

from mduniverse.integrators import Integrator, VelocityVerletIntegrator
from mduniverse.system import Box, MDState


class TestIntegratorInterface:
    def test_abstract_class(self):
        with pytest.raises(TypeError):
            Integrator()

    @pytest.mark.parametrize("dt", [0.0, -1e-15])
    def test_invalid_timestep(self, dt):
        with pytest.raises(ValueError):
            VelocityVerletIntegrator(dt)


class TestVelocityVerlet:
    """Test Velocity Verlet integrator."""

    @pytest.fixture
    def free_particle(self):
        return MDState.create(
            positions=np.array([[1.0, 1.0, 1.0]]),
            masses=np.array([2.0]),
            box=Box.cubic(10.0),
            velocities=np.array([[1.0, 0.5, 0.0]]),
        )

    def test_free_particle(self, free_particle):
        """Test straight-line motion without forces."""
        integrator = VelocityVerletIntegrator(0.1)
        state = free_particle
        for _ in range(10):
            state = integrator.step(state, lambda r: np.zeros_like(r))
        assert np.allclose(state.positions, [[2.0, 1.5, 1.0]])
        assert np.allclose(state.velocities, [[1.0, 0.5, 0.0]])
        assert state.step == 10
        assert state.time == pytest.approx(1.0)

    def test_does_not_mutate_input(self, free_particle):
        integrator = VelocityVerletIntegrator(0.1)
        before = free_particle.positions.copy()
        integrator.step(free_particle, lambda r: np.zeros_like(r))
        assert np.array_equal(free_particle.positions, before)
        assert free_particle.step == 0

    def test_positions_wrapped_before_forces(self, free_particle):
        """Test that the force call sees wrapped positions."""
        seen = []

        def force_fn(positions):
            seen.append(positions.copy())
            return np.zeros_like(positions)

        integrator = VelocityVerletIntegrator(10.0)
        state = integrator.step(free_particle, force_fn)
        assert np.all(seen[0] >= 0.0) and np.all(seen[0] < 10.0)
        assert np.allclose(state.positions, [[1.0, 6.0, 1.0]])

    def test_constant_force(self):
        """Test x = x0 + v0 t + a t^2 / 2 under a constant force."""
        state = MDState.create(
            positions=np.array([[0.0, 0.0, 0.0]]),
            masses=np.array([1.0]),
            box=Box.cubic(1000.0),
            accelerations=np.array([[2.0, 0.0, 0.0]]),
        )
        integrator = VelocityVerletIntegrator(0.01)
        for _ in range(100):
            state = integrator.step(state, lambda r: np.array([[2.0, 0.0, 0.0]]))
        assert state.positions[0, 0] == pytest.approx(1.0)
        assert state.velocities[0, 0] == pytest.approx(2.0)

    def test_harmonic_energy_conservation(self):
        """Test bounded energy error for a harmonic oscillator."""
        k, m, x0 = 1.0, 1.0, 50.0
        state = MDState.create(
            positions=np.array([[x0 + 1.0, 0.0, 0.0]]),
            masses=np.array([m]),
            box=Box.cubic(100.0),
        )

        def force_fn(positions):
            return np.array([[-k * (positions[0, 0] - x0), 0.0, 0.0]])

        state.forces = force_fn(state.positions)
        state.accelerations = state.forces / m
        integrator = VelocityVerletIntegrator(0.01)

        energies = []
        for _ in range(2000):
            state = integrator.step(state, force_fn)
            x = state.positions[0, 0] - x0
            energies.append(0.5 * k * x**2 + state.kinetic_energy)

        energies = np.array(energies)
        assert np.max(np.abs(energies - 0.5)) < 1e-4
