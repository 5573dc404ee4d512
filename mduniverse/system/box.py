"""Periodic simulation cell."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Box:
    """
    Orthorhombic periodic cell with one corner at the origin.

    Positions live in [0, L) along each axis.

    Attributes:
        lengths: Edge lengths [Lx, Ly, Lz] in metres.
    """

    lengths: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Validate and convert lengths."""
        lengths = np.asarray(self.lengths, dtype=np.float64)
        if lengths.shape != (3,):
            raise ValueError(f"Box lengths must have shape (3,), got {lengths.shape}")
        if not np.all(np.isfinite(lengths)) or np.any(lengths <= 0):
            raise ValueError(f"Box lengths must be positive, got {lengths}")
        lengths.flags.writeable = False
        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "lengths", lengths)

    @classmethod
    def orthorhombic(cls, lx: float, ly: float, lz: float) -> Box:
        """Create an orthorhombic box with given side lengths."""
        return cls(np.array([lx, ly, lz]))

    @classmethod
    def cubic(cls, length: float) -> Box:
        """Create a cubic box with given side length."""
        return cls.orthorhombic(length, length, length)

    @property
    def volume(self) -> float:
        """Return box volume."""
        return float(np.prod(self.lengths))

    def wrap_positions(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """
        Wrap positions into the primary cell.

        Every coordinate ends up in [0, L). A tiny negative coordinate whose
        wrapped value rounds up to exactly L is mapped to 0. Coordinates
        already inside the cell are returned unchanged, so wrapping is
        idempotent.

        Args:
            positions: Positions array of shape (N, 3) or (3,).

        Returns:
            Wrapped positions array of the same shape.
        """
        positions = np.asarray(positions, dtype=np.float64)
        wrapped = np.mod(positions, self.lengths)
        return np.where(wrapped >= self.lengths, 0.0, wrapped)

    def minimum_image(
        self, r1: NDArray[np.floating], r2: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """
        Compute minimum image displacement vector r2 - r1.

        Args:
            r1: First position(s), shape (3,) or (N, 3).
            r2: Second position(s), shape (3,) or (N, 3).

        Returns:
            Displacement vector(s) under minimum image convention.
        """
        dr = np.asarray(r2) - np.asarray(r1)
        return dr - self.lengths * np.round(dr / self.lengths)

    def minimum_image_distance(
        self, r1: NDArray[np.floating], r2: NDArray[np.floating]
    ) -> float | NDArray[np.floating]:
        """Compute minimum image distance between positions."""
        dr = self.minimum_image(r1, r2)
        return np.linalg.norm(dr, axis=-1)
