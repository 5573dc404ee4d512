"""Base interface for force providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..system import MDState


class ForceProvider(ABC):
    """
    Abstract base class for all force and potential terms.

    Two energy conventions are exposed:

    - ``compute_with_energy`` returns the interaction energy with every
      pair or bond counted once.
    - ``atom_energies`` / ``atom_energy`` return the energy seen by each
      atom, i.e. the sum of every term the atom takes part in. Summing
      these over all atoms counts each pair or bond term twice.

    The energy of one atom contains every term that depends on its
    position, so its gradient with respect to that position is minus the
    force on the atom.
    """

    def compute(self, state: MDState) -> NDArray[np.floating]:
        """
        Compute forces on all atoms.

        Args:
            state: Current MD state containing positions and box.

        Returns:
            Forces array of shape (N, 3).
        """
        forces, _ = self.compute_with_energy(state)
        return forces

    @abstractmethod
    def compute_with_energy(
        self, state: MDState
    ) -> tuple[NDArray[np.floating], float]:
        """
        Compute forces and potential energy.

        Args:
            state: Current MD state.

        Returns:
            Tuple of (forces array, potential energy).
        """
        ...

    @abstractmethod
    def atom_energies(self, state: MDState) -> NDArray[np.floating]:
        """
        Compute the potential energy seen by each atom.

        Args:
            state: Current MD state.

        Returns:
            Per-atom energies, shape (N,).
        """
        ...

    def atom_energy(self, state: MDState, index: int) -> float:
        """
        Compute the potential energy seen by one atom.

        Subclasses should override this with an O(N) evaluation.
        """
        return float(self.atom_energies(state)[index])
