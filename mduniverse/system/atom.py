"""Single-particle record."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from . import elements


def _zeros() -> NDArray[np.floating]:
    return np.zeros(3, dtype=np.float64)


@dataclass
class Atom:
    """
    One simulated particle.

    The engine keeps atoms as contiguous arrays (Topology and MDState);
    Atom objects are created by the topology parser and returned as
    snapshots by ``Topology.atom`` and ``Universe.atom``.

    Attributes:
        element: Element code (atomic number).
        charge: Static charge (C).
        epsilon: Lennard-Jones well depth (J).
        sigma: Lennard-Jones radius (m).
        position: Position (m).
        velocity: Velocity (m/s).
        acceleration: Acceleration (m/s^2).
        force: Force (N).
        bonds: Indices of bonded atoms.
        bond_strengths: Harmonic constant (N/m) of each bond, same order.
    """

    element: int
    charge: float = 0.0
    epsilon: float = 0.0
    sigma: float = 0.0
    position: NDArray[np.floating] = field(default_factory=_zeros)
    velocity: NDArray[np.floating] = field(default_factory=_zeros)
    acceleration: NDArray[np.floating] = field(default_factory=_zeros)
    force: NDArray[np.floating] = field(default_factory=_zeros)
    bonds: NDArray[np.integer] = field(
        default_factory=lambda: np.empty(0, dtype=np.int64)
    )
    bond_strengths: NDArray[np.floating] = field(
        default_factory=lambda: np.empty(0, dtype=np.float64)
    )

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        self.acceleration = np.asarray(self.acceleration, dtype=np.float64)
        self.force = np.asarray(self.force, dtype=np.float64)
        self.bonds = np.asarray(self.bonds, dtype=np.int64)
        self.bond_strengths = np.asarray(self.bond_strengths, dtype=np.float64)
        if len(self.bonds) != len(self.bond_strengths):
            raise ValueError(
                f"{len(self.bonds)} bonds but {len(self.bond_strengths)} strengths"
            )

    @property
    def symbol(self) -> str:
        """Return the chemical symbol."""
        return elements.symbol(self.element)

    @property
    def mass(self) -> float:
        """Return the mass (kg)."""
        return elements.mass(self.element)

    @property
    def n_bonds(self) -> int:
        """Return number of bonded neighbors."""
        return len(self.bonds)

    def clean(self) -> None:
        """Release bond storage and zero the kinematics."""
        self.bonds = np.empty(0, dtype=np.int64)
        self.bond_strengths = np.empty(0, dtype=np.float64)
        for name in ("position", "velocity", "acceleration", "force"):
            setattr(self, name, _zeros())
