"""Velocity Verlet integrator implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .base import ForceFunction, Integrator

if TYPE_CHECKING:
    from ..system import MDState


class VelocityVerletIntegrator(Integrator):
    """
    Velocity Verlet integrator (position-first formulation).

    Algorithm:
        r(t + dt) = r(t) + dt * v(t) + 0.5 * dt^2 * a(t)
        wrap r(t + dt) into the cell
        a(t + dt) = F(r(t + dt)) / m
        v(t + dt) = v(t) + 0.5 * dt * [a(t) + a(t + dt)]

    All positions are moved and wrapped before the force call, since the
    force on any atom depends on every position. One force evaluation per
    step; the state carries a(t) from the previous step.

    Properties:
    - Symplectic: preserves phase space volume
    - Time-reversible
    - Second-order accurate in positions and velocities

    Attributes:
        dt: Integration timestep.
    """

    def __init__(self, dt: float) -> None:
        """
        Initialize Velocity Verlet integrator.

        Args:
            dt: Integration timestep (s).
        """
        if dt <= 0:
            raise ValueError(f"timestep must be positive, got {dt}")
        self._dt = dt

    @property
    def timestep(self) -> float:
        """Return the integration timestep."""
        return self._dt

    def step(self, state: MDState, force_fn: ForceFunction) -> MDState:
        """
        Perform one Velocity Verlet step.

        Args:
            state: Current MD state; ``accelerations`` must hold a(t).
            force_fn: Function that computes forces given positions.

        Returns:
            New MDState with r(t+dt), v(t+dt), a(t+dt) and F(t+dt).
        """
        dt = self._dt
        masses = state.masses[:, np.newaxis]
        accel_old = state.accelerations

        # Drift with the current acceleration
        positions_new = (
            state.positions + dt * state.velocities + 0.5 * dt**2 * accel_old
        )
        positions_new = state.box.wrap_positions(positions_new)

        # Forces at the new positions
        forces_new = force_fn(positions_new)
        accel_new = forces_new / masses

        # Average of old and new acceleration
        velocities_new = state.velocities + 0.5 * dt * (accel_old + accel_new)

        new_state = state.copy()
        new_state.positions = positions_new
        new_state.velocities = velocities_new
        new_state.accelerations = accel_new
        new_state.forces = np.array(forces_new, dtype=np.float64)
        new_state.time = state.time + dt
        new_state.step = state.step + 1

        return new_state
