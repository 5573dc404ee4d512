"""Shared all-pairs machinery for nonbonded terms."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ...errors import NumericalError
from ..base import ForceProvider

if TYPE_CHECKING:
    from ...system import MDState


class PairForce(ForceProvider):
    """
    Pairwise term evaluated over all atom pairs under minimum image.

    No cutoff and no neighbor list: every atom interacts with every other
    atom of the cell once, through the nearest periodic image.
    Subclasses supply the pair energy and the radial force.
    """

    @abstractmethod
    def pair_terms(
        self,
        i_indices: NDArray[np.integer],
        j_indices: NDArray[np.integer],
        r: NDArray[np.floating],
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """
        Evaluate the pair potential.

        Args:
            i_indices: First atom of each pair.
            j_indices: Second atom of each pair.
            r: Pair distances.

        Returns:
            Tuple of (energies, force magnitudes -dV/dr), one per pair.
        """
        ...

    @staticmethod
    def _distances(
        state: MDState,
        i_indices: NDArray[np.integer],
        j_indices: NDArray[np.integer],
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return minimum image displacements (i -> j) and distances."""
        dr = state.box.minimum_image(
            state.positions[i_indices], state.positions[j_indices]
        )
        r = np.linalg.norm(dr, axis=1)
        if np.any(r == 0.0):
            k = int(np.argmax(r == 0.0))
            raise NumericalError(
                f"atoms {i_indices[k]} and {j_indices[k]} occupy the same position"
            )
        return dr, r

    def compute_with_energy(
        self, state: MDState
    ) -> tuple[NDArray[np.floating], float]:
        """Compute pair forces and potential energy (each pair once)."""
        forces = np.zeros((state.n_atoms, 3), dtype=np.float64)
        if state.n_atoms < 2:
            return forces, 0.0

        i_indices, j_indices = np.triu_indices(state.n_atoms, k=1)
        dr, r = self._distances(state, i_indices, j_indices)
        energies, force_mag = self.pair_terms(i_indices, j_indices, r)

        # Force vectors (pointing from i to j)
        unit_dr = dr / r[:, np.newaxis]
        force_vectors = force_mag[:, np.newaxis] * unit_dr

        # Newton's third law
        np.add.at(forces, j_indices, force_vectors)
        np.add.at(forces, i_indices, -force_vectors)

        return forces, float(np.sum(energies))

    def atom_energies(self, state: MDState) -> NDArray[np.floating]:
        """Compute per-atom pair energies."""
        energies = np.zeros(state.n_atoms, dtype=np.float64)
        if state.n_atoms < 2:
            return energies

        i_indices, j_indices = np.triu_indices(state.n_atoms, k=1)
        _, r = self._distances(state, i_indices, j_indices)
        pair_energies, _ = self.pair_terms(i_indices, j_indices, r)

        np.add.at(energies, i_indices, pair_energies)
        np.add.at(energies, j_indices, pair_energies)
        return energies

    def atom_energy(self, state: MDState, index: int) -> float:
        """Compute the pair energy of one atom against all others."""
        others = np.delete(np.arange(state.n_atoms), index)
        if len(others) == 0:
            return 0.0
        i_indices = np.full(len(others), index)
        _, r = self._distances(state, i_indices, others)
        pair_energies, _ = self.pair_terms(i_indices, others, r)
        return float(np.sum(pair_energies))
