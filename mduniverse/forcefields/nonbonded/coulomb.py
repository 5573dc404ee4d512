"""Coulomb electrostatic force implementation."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ...constants import COULOMB_CONSTANT
from .pair import PairForce


class CoulombForce(PairForce):
    """
    Direct Coulomb electrostatic interaction.

    V(r) = k_e * q_i * q_j / r

    where k_e = 1/(4*pi*epsilon_0). Summed over minimum images only;
    there is no Ewald correction.

    Attributes:
        charges: Atomic charges (C), shape (N,).
        coulomb_constant: k_e (N*m^2/C^2).
    """

    def __init__(
        self,
        charges: ArrayLike,
        coulomb_constant: float = COULOMB_CONSTANT,
    ) -> None:
        """
        Initialize Coulomb force.

        Args:
            charges: Atomic charges in coulombs, shape (N,).
            coulomb_constant: Coulomb constant in SI units.
        """
        self.charges = np.asarray(charges, dtype=np.float64)
        self.coulomb_constant = coulomb_constant

    @property
    def is_neutral(self) -> bool:
        """Return True when no atom carries a charge."""
        return not np.any(self.charges)

    def pair_terms(
        self,
        i_indices: NDArray[np.integer],
        j_indices: NDArray[np.integer],
        r: NDArray[np.floating],
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return Coulomb pair energies and force magnitudes."""
        qq = self.coulomb_constant * self.charges[i_indices] * self.charges[j_indices]

        energies = qq / r
        # F = -dV/dr = k_e * q_i * q_j / r^2, positive (repulsive) for like charges
        force_mag = qq / r**2

        return energies, force_mag
