"""Topology representation for molecular systems."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from ..system import elements
from ..system.atom import Atom
from .bonds import BondTable


@dataclass
class Topology:
    """
    Identity and connectivity of a set of atoms.

    Index-based design: per-atom quantities are arrays, bonds are an
    (N_bonds, 2) index array plus a BondTable for per-atom lookups.
    Used both for the reference molecule read from disk and for the
    replicated working set.

    Attributes:
        name: System name.
        author: Author of the topology.
        comment: Free-text comment.
        elements: Element codes, shape (N,).
        charges: Charges (C), shape (N,).
        epsilon: Lennard-Jones well depths (J), shape (N,).
        sigma: Lennard-Jones radii (m), shape (N,).
        positions: Positions (m), shape (N, 3).
        bonds: Bonded pairs (0-based), shape (N_bonds, 2).
        bond_strengths: Harmonic constants (N/m), shape (N_bonds,).
        bond_lengths: Equilibrium lengths (m), shape (N_bonds,).
        bond_table: Per-atom adjacency built from the bond arrays.
    """

    name: str
    author: str
    comment: str
    elements: NDArray[np.integer]
    charges: NDArray[np.floating]
    epsilon: NDArray[np.floating]
    sigma: NDArray[np.floating]
    positions: NDArray[np.floating]
    bonds: NDArray[np.integer] = field(
        default_factory=lambda: np.empty((0, 2), dtype=np.int64)
    )
    bond_strengths: NDArray[np.floating] = field(
        default_factory=lambda: np.empty(0, dtype=np.float64)
    )
    bond_lengths: NDArray[np.floating] | None = None
    bond_table: BondTable = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate arrays and build the bond table."""
        self.elements = np.asarray(self.elements, dtype=np.int64)
        self.charges = np.asarray(self.charges, dtype=np.float64)
        self.epsilon = np.asarray(self.epsilon, dtype=np.float64)
        self.sigma = np.asarray(self.sigma, dtype=np.float64)
        self.positions = np.asarray(self.positions, dtype=np.float64).reshape(-1, 3)
        self.bonds = np.asarray(self.bonds, dtype=np.int64).reshape(-1, 2)
        self.bond_strengths = np.asarray(self.bond_strengths, dtype=np.float64)

        n_atoms = len(self.elements)
        for name in ("charges", "epsilon", "sigma", "positions"):
            if len(getattr(self, name)) != n_atoms:
                raise ValueError(
                    f"{name} length {len(getattr(self, name))} != n_atoms {n_atoms}"
                )
        if len(self.bond_strengths) != len(self.bonds):
            raise ValueError(
                f"bond_strengths length {len(self.bond_strengths)} != "
                f"number of bonds {len(self.bonds)}"
            )

        if self.bond_lengths is None:
            # Equilibrium lengths are those of the reference geometry
            dr = self.positions[self.bonds[:, 1]] - self.positions[self.bonds[:, 0]]
            self.bond_lengths = np.linalg.norm(dr, axis=1)
        self.bond_lengths = np.asarray(self.bond_lengths, dtype=np.float64)

        self.bond_table = BondTable.build(
            n_atoms, self.bonds, self.bond_strengths, self.bond_lengths
        )

    @classmethod
    def from_atoms(
        cls,
        name: str,
        author: str,
        comment: str,
        atoms: Sequence[Atom],
        bonds: Sequence[tuple[int, int, float]] = (),
    ) -> Topology:
        """
        Build a topology from atom records and (i, j, strength) bonds.

        Bond indices are 0-based. The bond lists of the given atoms are
        filled in from the resulting table.
        """
        pairs = np.array([(i, j) for i, j, _ in bonds], dtype=np.int64).reshape(-1, 2)
        strengths = np.array([k for _, _, k in bonds], dtype=np.float64)
        topology = cls(
            name=name,
            author=author,
            comment=comment,
            elements=[a.element for a in atoms],
            charges=[a.charge for a in atoms],
            epsilon=[a.epsilon for a in atoms],
            sigma=[a.sigma for a in atoms],
            positions=np.array([a.position for a in atoms]).reshape(-1, 3),
            bonds=pairs,
            bond_strengths=strengths,
        )
        for index, atom in enumerate(atoms):
            partners, bond_strengths, _ = topology.bond_table.neighbors(index)
            atom.bonds = partners.copy()
            atom.bond_strengths = bond_strengths.copy()
        return topology

    @property
    def n_atoms(self) -> int:
        """Return number of atoms."""
        return len(self.elements)

    @property
    def n_bonds(self) -> int:
        """Return number of bonds."""
        return len(self.bonds)

    @property
    def masses(self) -> NDArray[np.floating]:
        """Return atomic masses (kg)."""
        return elements.masses(self.elements)

    @property
    def symbols(self) -> list[str]:
        """Return chemical symbols."""
        return elements.symbols(self.elements)

    @property
    def total_mass(self) -> float:
        """Return the summed mass of all atoms (kg)."""
        return float(np.sum(self.masses))

    def atom(self, index: int) -> Atom:
        """Return a snapshot of one atom at its topology position."""
        self._validate_atom_index(index)
        partners, strengths, _ = self.bond_table.neighbors(index)
        return Atom(
            element=int(self.elements[index]),
            charge=float(self.charges[index]),
            epsilon=float(self.epsilon[index]),
            sigma=float(self.sigma[index]),
            position=self.positions[index].copy(),
            bonds=partners.copy(),
            bond_strengths=strengths.copy(),
        )

    def replicate(self, copies: int) -> Topology:
        """
        Tile the topology ``copies`` times.

        Atom ``c * n_atoms + i`` is copy c of atom i. Per-atom fields and
        bond parameters are copied verbatim; bond indices are shifted by
        ``c * n_atoms`` so no bond crosses replicas. Positions are copied
        untranslated; the caller applies per-replica offsets.

        Args:
            copies: Number of replicas (>= 1).

        Returns:
            New Topology with ``copies * n_atoms`` atoms.
        """
        if copies < 1:
            raise ValueError(f"copies must be >= 1, got {copies}")
        shifts = np.repeat(np.arange(copies, dtype=np.int64) * self.n_atoms, self.n_bonds)
        bonds = np.tile(self.bonds, (copies, 1)) + shifts[:, np.newaxis]

        return Topology(
            name=self.name,
            author=self.author,
            comment=self.comment,
            elements=np.tile(self.elements, copies),
            charges=np.tile(self.charges, copies),
            epsilon=np.tile(self.epsilon, copies),
            sigma=np.tile(self.sigma, copies),
            positions=np.tile(self.positions, (copies, 1)),
            bonds=bonds,
            bond_strengths=np.tile(self.bond_strengths, copies),
            bond_lengths=np.tile(self.bond_lengths, copies),
        )

    def _validate_atom_index(self, index: int) -> None:
        """Validate that atom index is in range."""
        if index < 0 or index >= self.n_atoms:
            raise IndexError(f"Atom index {index} out of range [0, {self.n_atoms})")
