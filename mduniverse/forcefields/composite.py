"""Composite force field combining multiple force providers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .base import ForceProvider

if TYPE_CHECKING:
    from ..system import MDState
    from ..topology import Topology


class ForceField(ForceProvider):
    """
    Composite force field combining multiple force providers.

    Implements the composite pattern: a ForceField is itself a ForceProvider
    that aggregates contributions from multiple terms. Forces are the
    analytic gradients supplied by each term.

    Example:
        ff = ForceField([
            HarmonicBondForce.from_topology(topology),
            LennardJonesForce(topology.epsilon, topology.sigma),
            CoulombForce(topology.charges),
        ])
        forces = ff.compute(state)
    """

    def __init__(self, terms: list[ForceProvider] | None = None) -> None:
        """
        Initialize composite force field.

        Args:
            terms: List of force providers to combine.
        """
        self.terms: list[ForceProvider] = terms if terms is not None else []

    @classmethod
    def from_topology(cls, topology: Topology) -> ForceField:
        """
        Build the standard bonded + Lennard-Jones + Coulomb force field.

        The Coulomb term is left out when no atom is charged.
        """
        from .bonded import HarmonicBondForce
        from .nonbonded import CoulombForce, LennardJonesForce

        terms: list[ForceProvider] = [
            HarmonicBondForce.from_topology(topology),
            LennardJonesForce(topology.epsilon, topology.sigma),
        ]
        coulomb = CoulombForce(topology.charges)
        if not coulomb.is_neutral:
            terms.append(coulomb)
        return cls(terms)

    def add_term(self, term: ForceProvider) -> None:
        """Add a force term to the force field."""
        self.terms.append(term)

    def remove_term(self, term: ForceProvider) -> None:
        """Remove a force term from the force field."""
        self.terms.remove(term)

    def compute_with_energy(
        self, state: MDState
    ) -> tuple[NDArray[np.floating], float]:
        """
        Compute total forces and potential energy from all terms.

        Args:
            state: Current MD state.

        Returns:
            Tuple of (total forces array, total potential energy).
        """
        total_forces = np.zeros((state.n_atoms, 3), dtype=np.float64)
        total_energy = 0.0

        for term in self.terms:
            forces, energy = term.compute_with_energy(state)
            total_forces += forces
            total_energy += energy

        return total_forces, total_energy

    def atom_energies(self, state: MDState) -> NDArray[np.floating]:
        """Sum per-atom energies over all terms."""
        total = np.zeros(state.n_atoms, dtype=np.float64)
        for term in self.terms:
            total += term.atom_energies(state)
        return total

    def atom_energy(self, state: MDState, index: int) -> float:
        """Sum one atom's energy over all terms."""
        return float(sum(term.atom_energy(state, index) for term in self.terms))

    def compute_per_term(
        self, state: MDState
    ) -> list[tuple[NDArray[np.floating], float]]:
        """
        Compute forces and energies from each term separately.

        Useful for debugging and analysis.
        """
        return [term.compute_with_energy(state) for term in self.terms]
