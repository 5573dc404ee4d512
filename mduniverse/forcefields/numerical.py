"""Finite-difference forces from any potential."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .base import ForceProvider

if TYPE_CHECKING:
    from ..system import MDState

DEFAULT_DELTA = 1e-14  # m


class NumericalForce(ForceProvider):
    """
    Forces obtained by differencing the potential energy.

    For each atom and each axis the coordinate is displaced by ``delta``,
    the energy of that atom is re-evaluated and the coordinate restored.
    The atom's energy holds every term that depends on its position, so
    F_i = -dE_i/dx_i.

    Costs 6 (central) or 3 (forward) O(N) energy evaluations per atom,
    i.e. O(N^2) per force call. Meant for cross-checking the analytic
    path on small systems.

    Attributes:
        provider: Term whose energy is differenced.
        delta: Coordinate displacement (m).
        scheme: "central" or "forward".
    """

    SCHEMES = ("central", "forward")

    def __init__(
        self,
        provider: ForceProvider,
        delta: float = DEFAULT_DELTA,
        scheme: str = "central",
    ) -> None:
        if delta <= 0:
            raise ValueError(f"delta must be positive, got {delta}")
        if scheme not in self.SCHEMES:
            raise ValueError(f"scheme must be one of {self.SCHEMES}, got {scheme!r}")
        self.provider = provider
        self.delta = delta
        self.scheme = scheme

    def compute(self, state: MDState) -> NDArray[np.floating]:
        """Compute forces by finite differences."""
        forces = np.zeros((state.n_atoms, 3), dtype=np.float64)
        positions = state.positions.copy()
        probe = state.with_positions(positions)

        for i in range(state.n_atoms):
            if self.scheme == "forward":
                base = self.provider.atom_energy(probe, i)
            for axis in range(3):
                original = positions[i, axis]

                positions[i, axis] = original + self.delta
                e_plus = self.provider.atom_energy(probe, i)

                if self.scheme == "central":
                    positions[i, axis] = original - self.delta
                    e_minus = self.provider.atom_energy(probe, i)
                    forces[i, axis] = -(e_plus - e_minus) / (2.0 * self.delta)
                else:
                    forces[i, axis] = -(e_plus - base) / self.delta

                positions[i, axis] = original

        return forces

    def compute_with_energy(
        self, state: MDState
    ) -> tuple[NDArray[np.floating], float]:
        """Compute finite-difference forces and the provider's energy."""
        _, energy = self.provider.compute_with_energy(state)
        return self.compute(state), energy

    def atom_energies(self, state: MDState) -> NDArray[np.floating]:
        """Delegate to the wrapped provider."""
        return self.provider.atom_energies(state)

    def atom_energy(self, state: MDState, index: int) -> float:
        """Delegate to the wrapped provider."""
        return self.provider.atom_energy(state, index)
