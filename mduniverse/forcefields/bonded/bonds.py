"""Harmonic bond force implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ...errors import NumericalError
from ...topology.bonds import BondTable
from ..base import ForceProvider

if TYPE_CHECKING:
    from ...system import MDState
    from ...topology import Topology


class HarmonicBondForce(ForceProvider):
    """
    Harmonic bond stretching force.

    V(r) = 0.5 * k * (r - r0)^2

    Attributes:
        bond_indices: Bond atom pairs, shape (N_bonds, 2).
        force_constants: Spring constants k (N/m), shape (N_bonds,).
        equilibrium_lengths: Equilibrium distances r0 (m), shape (N_bonds,).
        bond_table: Per-atom adjacency used for single-atom energies.
    """

    def __init__(
        self,
        bond_indices: ArrayLike,
        force_constants: ArrayLike,
        equilibrium_lengths: ArrayLike,
        bond_table: BondTable | None = None,
    ) -> None:
        """
        Initialize harmonic bond force.

        Args:
            bond_indices: Bond atom pairs, shape (N_bonds, 2).
            force_constants: Spring constants k, shape (N_bonds,).
            equilibrium_lengths: Equilibrium distances r0, shape (N_bonds,).
            bond_table: Adjacency matching the bond arrays. Built on first
                use when omitted.
        """
        self.bond_indices = np.asarray(bond_indices, dtype=np.int64).reshape(-1, 2)
        self.force_constants = np.asarray(force_constants, dtype=np.float64)
        self.equilibrium_lengths = np.asarray(equilibrium_lengths, dtype=np.float64)
        self.bond_table = bond_table

        n_bonds = len(self.bond_indices)
        if len(self.force_constants) != n_bonds:
            raise ValueError(
                f"force_constants length {len(self.force_constants)} != "
                f"number of bonds {n_bonds}"
            )
        if len(self.equilibrium_lengths) != n_bonds:
            raise ValueError(
                f"equilibrium_lengths length {len(self.equilibrium_lengths)} != "
                f"number of bonds {n_bonds}"
            )

    @classmethod
    def from_topology(cls, topology: Topology) -> HarmonicBondForce:
        """Create from a topology's bonds, strengths and equilibrium lengths."""
        return cls(
            topology.bonds,
            topology.bond_strengths,
            topology.bond_lengths,
            bond_table=topology.bond_table,
        )

    def _table(self, n_atoms: int) -> BondTable:
        if self.bond_table is None or self.bond_table.n_atoms != n_atoms:
            self.bond_table = BondTable.build(
                n_atoms,
                self.bond_indices,
                self.force_constants,
                self.equilibrium_lengths,
            )
        return self.bond_table

    def _bond_terms(
        self, state: MDState
    ) -> tuple[NDArray[np.floating], NDArray[np.floating], NDArray[np.floating]]:
        """Return displacements (i -> j), distances and energies of all bonds."""
        i_indices = self.bond_indices[:, 0]
        j_indices = self.bond_indices[:, 1]

        # Compute displacement vectors with minimum image convention
        dr = state.box.minimum_image(
            state.positions[i_indices], state.positions[j_indices]
        )
        r = np.linalg.norm(dr, axis=1)
        if np.any(r == 0.0):
            raise NumericalError("bonded atoms occupy the same position")

        energies = 0.5 * self.force_constants * (r - self.equilibrium_lengths) ** 2
        return dr, r, energies

    def compute_with_energy(
        self, state: MDState
    ) -> tuple[NDArray[np.floating], float]:
        """Compute bond forces and potential energy."""
        forces = np.zeros((state.n_atoms, 3), dtype=np.float64)

        if len(self.bond_indices) == 0:
            return forces, 0.0

        dr, r, energies = self._bond_terms(state)

        # Compute force magnitude: F = -k * (r - r0)
        force_mag = -self.force_constants * (r - self.equilibrium_lengths)

        # Forces on each atom
        unit_dr = dr / r[:, np.newaxis]
        force_vectors = force_mag[:, np.newaxis] * unit_dr

        # Accumulate forces
        np.add.at(forces, self.bond_indices[:, 1], force_vectors)
        np.add.at(forces, self.bond_indices[:, 0], -force_vectors)

        return forces, float(np.sum(energies))

    def atom_energies(self, state: MDState) -> NDArray[np.floating]:
        """Compute per-atom bond energies (each bond shared by both ends)."""
        result = np.zeros(state.n_atoms, dtype=np.float64)

        if len(self.bond_indices) == 0:
            return result

        _, _, energies = self._bond_terms(state)
        np.add.at(result, self.bond_indices[:, 0], energies)
        np.add.at(result, self.bond_indices[:, 1], energies)
        return result

    def atom_energy(self, state: MDState, index: int) -> float:
        """Compute the bond energy of one atom from its adjacency range."""
        partners, strengths, lengths = self._table(state.n_atoms).neighbors(index)
        if len(partners) == 0:
            return 0.0

        r = state.box.minimum_image_distance(
            state.positions[index], state.positions[partners]
        )
        return float(np.sum(0.5 * strengths * (r - lengths) ** 2))
