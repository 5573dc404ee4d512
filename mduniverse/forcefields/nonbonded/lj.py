"""Lennard-Jones force implementation."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .pair import PairForce


class LennardJonesForce(PairForce):
    """
    Lennard-Jones 12-6 potential.

    V(r) = 4 * epsilon_ij * [(sigma_ij/r)^12 - (sigma_ij/r)^6]

    Pair parameters follow the Lorentz-Berthelot rules:
    epsilon_ij = sqrt(epsilon_i * epsilon_j), sigma_ij = (sigma_i + sigma_j) / 2.

    Attributes:
        epsilon: Well depth per atom (J), shape (N,).
        sigma: Size parameter per atom (m), shape (N,).
    """

    def __init__(self, epsilon: ArrayLike, sigma: ArrayLike) -> None:
        """
        Initialize Lennard-Jones force.

        Args:
            epsilon: Well depth per atom (J), shape (N,).
            sigma: Size parameter per atom (m), shape (N,).
        """
        self.epsilon = np.asarray(epsilon, dtype=np.float64)
        self.sigma = np.asarray(sigma, dtype=np.float64)

        if len(self.epsilon) != len(self.sigma):
            raise ValueError(
                f"epsilon length {len(self.epsilon)} != sigma length {len(self.sigma)}"
            )
        if np.any(self.epsilon < 0) or np.any(self.sigma < 0):
            raise ValueError("epsilon and sigma must be non-negative")

    def _get_pair_params(
        self, i_indices: NDArray[np.integer], j_indices: NDArray[np.integer]
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return (epsilon_ij, sigma_ij) with Lorentz-Berthelot combining rules."""
        epsilon_ij = np.sqrt(self.epsilon[i_indices] * self.epsilon[j_indices])
        sigma_ij = 0.5 * (self.sigma[i_indices] + self.sigma[j_indices])
        return epsilon_ij, sigma_ij

    def pair_terms(
        self,
        i_indices: NDArray[np.integer],
        j_indices: NDArray[np.integer],
        r: NDArray[np.floating],
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return LJ pair energies and force magnitudes."""
        epsilon_ij, sigma_ij = self._get_pair_params(i_indices, j_indices)

        sig_over_r = sigma_ij / r
        sig_over_r_6 = sig_over_r**6
        sig_over_r_12 = sig_over_r_6**2

        energies = 4.0 * epsilon_ij * (sig_over_r_12 - sig_over_r_6)
        # F = -dV/dr = 24 * epsilon * [2*(sigma/r)^12 - (sigma/r)^6] / r
        force_mag = 24.0 * epsilon_ij * (2.0 * sig_over_r_12 - sig_over_r_6) / r

        return energies, force_mag
