"""Base interface for integrators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..system import MDState

ForceFunction = Callable[[NDArray[np.floating]], NDArray[np.floating]]


class Integrator(ABC):
    """
    Abstract base class for time integration algorithms.

    Integrators advance the system state forward in time, calling back
    into a force function for the forces at the new positions.
    """

    @abstractmethod
    def step(self, state: MDState, force_fn: ForceFunction) -> MDState:
        """
        Advance the system by one time step.

        Args:
            state: Current MD state with accelerations at its positions.
            force_fn: Maps positions, shape (N, 3), to forces, shape (N, 3).

        Returns:
            New MDState after integration step.
        """
        ...

    @property
    @abstractmethod
    def timestep(self) -> float:
        """Return the integration timestep."""
        ...
