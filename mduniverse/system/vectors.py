"""3-D vector helpers.

Vectors are float64 arrays of shape (3,); batches are (N, 3). Addition and
scalar multiplication are the numpy operators.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..errors import ConfigurationError

MAX_MARSAGLIA_ATTEMPTS = 10_000


def magnitude(v: ArrayLike) -> float | NDArray[np.floating]:
    """Return the Euclidean norm of a vector, or of each row of a batch."""
    norm = np.linalg.norm(np.asarray(v, dtype=np.float64), axis=-1)
    return float(norm) if np.ndim(norm) == 0 else norm


def random_unit_vector(
    rng: np.random.Generator, max_attempts: int = MAX_MARSAGLIA_ATTEMPTS
) -> NDArray[np.floating]:
    """
    Draw a unit vector uniformly distributed on the sphere (Marsaglia, 1972).

    Samples (u, v) uniformly in [-1, 1]^2 until u^2 + v^2 < 1, then returns
    (2u*s, 2v*s, 1 - 2(u^2 + v^2)) with s = sqrt(1 - u^2 - v^2).

    Args:
        rng: Source of randomness.
        max_attempts: Rejection budget before giving up.

    Returns:
        Unit vector of shape (3,).

    Raises:
        ConfigurationError: If no sample is accepted within max_attempts,
            which only happens with a broken generator.
    """
    for _ in range(max_attempts):
        u, v = rng.uniform(-1.0, 1.0, size=2)
        sq = u * u + v * v
        if sq < 1.0:
            s = np.sqrt(1.0 - sq)
            return np.array([2.0 * u * s, 2.0 * v * s, 1.0 - 2.0 * sq])
    raise ConfigurationError(
        f"random generator produced no point inside the unit disc "
        f"in {max_attempts} attempts"
    )


def random_unit_vectors(n: int, rng: np.random.Generator) -> NDArray[np.floating]:
    """Draw n independent Marsaglia unit vectors, shape (n, 3)."""
    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        out[i] = random_unit_vector(rng)
    return out
