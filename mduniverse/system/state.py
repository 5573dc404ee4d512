"""MD system state representation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .box import Box


@dataclass
class MDState:
    """
    Kinematic state of every working atom.

    Pure data container; identity (element, charge, LJ parameters, bonds)
    lives in the Topology. All quantities are SI.

    Attributes:
        positions: Atomic positions (m), shape (N, 3).
        velocities: Atomic velocities (m/s), shape (N, 3).
        accelerations: Atomic accelerations (m/s^2), shape (N, 3).
        forces: Atomic forces (N), shape (N, 3).
        masses: Atomic masses (kg), shape (N,).
        box: Periodic cell.
        time: Elapsed simulated time (s).
        step: Number of completed integration steps.
    """

    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    accelerations: NDArray[np.floating]
    forces: NDArray[np.floating]
    masses: NDArray[np.floating]
    box: Box
    time: float = 0.0
    step: int = 0

    def __post_init__(self) -> None:
        """Validate and convert arrays."""
        self.positions = np.asarray(self.positions, dtype=np.float64)
        self.velocities = np.asarray(self.velocities, dtype=np.float64)
        self.accelerations = np.asarray(self.accelerations, dtype=np.float64)
        self.forces = np.asarray(self.forces, dtype=np.float64)
        self.masses = np.asarray(self.masses, dtype=np.float64)

        n_atoms = len(self.masses)
        for name in ("positions", "velocities", "accelerations", "forces"):
            shape = getattr(self, name).shape
            if shape != (n_atoms, 3):
                raise ValueError(
                    f"{name} shape {shape} incompatible with {n_atoms} atoms"
                )

    @property
    def n_atoms(self) -> int:
        """Return number of atoms."""
        return len(self.masses)

    @classmethod
    def create(
        cls,
        positions: ArrayLike,
        masses: ArrayLike,
        box: Box,
        velocities: ArrayLike | None = None,
        accelerations: ArrayLike | None = None,
        forces: ArrayLike | None = None,
        time: float = 0.0,
        step: int = 0,
    ) -> MDState:
        """
        Create an MDState, zero-filling the kinematic arrays not given.

        Args:
            positions: Atomic positions, shape (N, 3).
            masses: Atomic masses, shape (N,).
            box: Periodic cell.
            velocities: Atomic velocities, shape (N, 3). Defaults to zeros.
            accelerations: Atomic accelerations, shape (N, 3). Defaults to zeros.
            forces: Atomic forces, shape (N, 3). Defaults to zeros.
            time: Current simulation time.
            step: Current step number.

        Returns:
            New MDState instance.
        """
        positions = np.array(positions, dtype=np.float64)
        masses = np.array(masses, dtype=np.float64)
        n_atoms = len(masses)

        if velocities is None:
            velocities = np.zeros((n_atoms, 3), dtype=np.float64)
        else:
            velocities = np.array(velocities, dtype=np.float64)
        if accelerations is None:
            accelerations = np.zeros((n_atoms, 3), dtype=np.float64)
        else:
            accelerations = np.array(accelerations, dtype=np.float64)
        if forces is None:
            forces = np.zeros((n_atoms, 3), dtype=np.float64)
        else:
            forces = np.array(forces, dtype=np.float64)

        return cls(
            positions=positions,
            velocities=velocities,
            accelerations=accelerations,
            forces=forces,
            masses=masses,
            box=box,
            time=time,
            step=step,
        )

    def copy(self) -> MDState:
        """Create a deep copy of this state."""
        return MDState(
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            accelerations=self.accelerations.copy(),
            forces=self.forces.copy(),
            masses=self.masses.copy(),
            box=self.box,  # Box is immutable
            time=self.time,
            step=self.step,
        )

    def with_positions(self, positions: NDArray[np.floating]) -> MDState:
        """Return a shallow view of this state at other positions."""
        return MDState(
            positions=positions,
            velocities=self.velocities,
            accelerations=self.accelerations,
            forces=self.forces,
            masses=self.masses,
            box=self.box,
            time=self.time,
            step=self.step,
        )

    @property
    def kinetic_energy(self) -> float:
        """Compute total kinetic energy: sum(0.5 * m * v^2)."""
        return float(0.5 * np.sum(self.masses[:, np.newaxis] * self.velocities**2))
