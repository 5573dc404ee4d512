"""Bond adjacency stored as one arena with per-atom ranges."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True)
class BondTable:
    """
    Symmetric bond adjacency (compressed sparse rows).

    The neighbors of atom i are ``partners[offsets[i]:offsets[i + 1]]``;
    ``strengths`` and ``lengths`` hold the harmonic constant and the
    equilibrium length of the same bonds. Every bond (a, b) appears in the
    ranges of both a and b.

    Attributes:
        offsets: Range starts, shape (N + 1,).
        partners: Bonded atom indices, shape (2 * N_bonds,).
        strengths: Harmonic constants (N/m), shape (2 * N_bonds,).
        lengths: Equilibrium lengths (m), shape (2 * N_bonds,).
    """

    offsets: NDArray[np.integer]
    partners: NDArray[np.integer]
    strengths: NDArray[np.floating]
    lengths: NDArray[np.floating]

    @classmethod
    def build(
        cls,
        n_atoms: int,
        pairs: ArrayLike,
        strengths: ArrayLike,
        lengths: ArrayLike | None = None,
    ) -> BondTable:
        """
        Build the table in two passes: count degrees, then fill ranges.

        Args:
            n_atoms: Number of atoms.
            pairs: Bonded pairs (0-based), shape (N_bonds, 2).
            strengths: Harmonic constant per bond, shape (N_bonds,).
            lengths: Equilibrium length per bond. Defaults to zeros.

        Returns:
            BondTable instance.
        """
        pairs = np.asarray(pairs, dtype=np.int64).reshape(-1, 2)
        strengths = np.asarray(strengths, dtype=np.float64)
        n_bonds = len(pairs)
        if lengths is None:
            lengths = np.zeros(n_bonds, dtype=np.float64)
        lengths = np.asarray(lengths, dtype=np.float64)
        if len(strengths) != n_bonds or len(lengths) != n_bonds:
            raise ValueError(
                f"{n_bonds} bonds but {len(strengths)} strengths "
                f"and {len(lengths)} lengths"
            )
        if n_bonds and (pairs.min() < 0 or pairs.max() >= n_atoms):
            raise IndexError(f"bond index out of range [0, {n_atoms})")

        # First pass: degree of every atom
        degree = np.bincount(pairs.ravel(), minlength=n_atoms)
        offsets = np.zeros(n_atoms + 1, dtype=np.int64)
        np.cumsum(degree, out=offsets[1:])

        # Second pass: fill each atom's range in bond order
        partners = np.empty(2 * n_bonds, dtype=np.int64)
        bond_strengths = np.empty(2 * n_bonds, dtype=np.float64)
        bond_lengths = np.empty(2 * n_bonds, dtype=np.float64)
        cursor = offsets[:-1].copy()
        for (a, b), k, r0 in zip(pairs, strengths, lengths):
            for atom, other in ((a, b), (b, a)):
                slot = cursor[atom]
                partners[slot] = other
                bond_strengths[slot] = k
                bond_lengths[slot] = r0
                cursor[atom] += 1

        return cls(offsets, partners, bond_strengths, bond_lengths)

    @property
    def n_atoms(self) -> int:
        """Return number of atoms covered by the table."""
        return len(self.offsets) - 1

    @property
    def n_bonds(self) -> int:
        """Return number of distinct bonds."""
        return len(self.partners) // 2

    def degree(self, index: int) -> int:
        """Return the number of bonds of an atom."""
        return int(self.offsets[index + 1] - self.offsets[index])

    def neighbors(
        self, index: int
    ) -> tuple[NDArray[np.integer], NDArray[np.floating], NDArray[np.floating]]:
        """Return (partners, strengths, lengths) of one atom."""
        start, stop = self.offsets[index], self.offsets[index + 1]
        return (
            self.partners[start:stop],
            self.strengths[start:stop],
            self.lengths[start:stop],
        )
