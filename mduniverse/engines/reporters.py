"""Reporter implementations for simulation output."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from ..io import TrajectoryWriter
    from ..system import MDState

logger = logging.getLogger(__name__)


class Reporter(ABC):
    """
    Abstract base class for simulation reporters.

    Reporters are called before every integration step and fire when the
    step number is a multiple of their frequency.
    """

    @abstractmethod
    def report(self, state: MDState, **kwargs: Any) -> None:
        """
        Generate report for current state.

        Args:
            state: Current simulation state.
            **kwargs: Additional information (e.g. iteration).
        """
        ...

    @property
    @abstractmethod
    def frequency(self) -> int:
        """Return reporting frequency (every N steps)."""
        ...

    def should_report(self, step: int) -> bool:
        """Check if reporter should run at this step."""
        return step % self.frequency == 0

    def initialize(self, state: MDState) -> None:
        """Initialize reporter (called before simulation)."""
        pass

    def finalize(self, state: MDState) -> None:
        """Finalize reporter (called after simulation)."""
        pass


class ReporterGroup:
    """
    Collection of reporters with automatic frequency handling.
    """

    def __init__(self, reporters: list[Reporter] | None = None) -> None:
        self._reporters: list[Reporter] = reporters if reporters else []

    def __len__(self) -> int:
        return len(self._reporters)

    def add(self, reporter: Reporter) -> None:
        """Add a reporter to the group."""
        self._reporters.append(reporter)

    def remove(self, reporter: Reporter) -> None:
        """Remove a reporter from the group."""
        self._reporters.remove(reporter)

    def initialize(self, state: MDState) -> None:
        """Initialize all reporters."""
        for reporter in self._reporters:
            reporter.initialize(state)

    def report(self, state: MDState, **kwargs: Any) -> None:
        """Run all reporters that should fire at this step."""
        for reporter in self._reporters:
            if reporter.should_report(state.step):
                reporter.report(state, **kwargs)

    def finalize(self, state: MDState) -> None:
        """Finalize all reporters."""
        for reporter in self._reporters:
            reporter.finalize(state)


class TrajectoryReporter(Reporter):
    """
    Reporter that writes frames through a TrajectoryWriter.

    With ``frameskip`` = k a frame is written, then k steps are skipped.
    The countdown restarts at every ``initialize``, so each run starts
    with a frame.
    """

    def __init__(self, writer: TrajectoryWriter, frameskip: int = 0) -> None:
        """
        Initialize trajectory reporter.

        Args:
            writer: Open trajectory writer.
            frameskip: Steps skipped between two frames.
        """
        if frameskip < 0:
            raise ValueError(f"frameskip must be >= 0, got {frameskip}")
        self._writer = writer
        self._frameskip = frameskip
        self._countdown = 0

    @property
    def frequency(self) -> int:
        return self._frameskip + 1

    @property
    def n_frames(self) -> int:
        """Return number of frames written."""
        return self._writer.n_frames

    def initialize(self, state: MDState) -> None:
        """Restart the countdown so the next step writes a frame."""
        self._countdown = 0

    def should_report(self, step: int) -> bool:
        """Advance the countdown; True when a frame is due."""
        if self._countdown == 0:
            self._countdown = self._frameskip
            return True
        self._countdown -= 1
        return False

    def report(self, state: MDState, **kwargs: Any) -> None:
        """Write current frame."""
        iteration = kwargs.get("iteration", state.step)
        self._writer.write(state, iteration=iteration)
        logger.debug("wrote frame %d (iteration %d)", self._writer.n_frames, iteration)


class CallbackReporter(Reporter):
    """
    Reporter that calls a user-defined function.

    Allows arbitrary custom reporting logic.
    """

    def __init__(
        self,
        callback: Callable[[MDState, dict[str, Any]], None],
        frequency: int = 1,
    ) -> None:
        """
        Initialize callback reporter.

        Args:
            callback: Function to call with (state, kwargs).
            frequency: Reporting frequency.
        """
        self._callback = callback
        self._frequency = frequency

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, state: MDState, **kwargs: Any) -> None:
        """Call the callback function."""
        self._callback(state, kwargs)


class EnergyReporter(Reporter):
    """
    Reporter that tracks energy components over time.

    Kinetic energy comes from the state; potential energy from
    ``potential_fn``, which decides the counting convention.
    """

    def __init__(
        self,
        potential_fn: Callable[[MDState], float],
        frequency: int = 100,
    ) -> None:
        """
        Initialize energy reporter.

        Args:
            potential_fn: Maps a state to its potential energy (J).
            frequency: Reporting frequency.
        """
        self._potential_fn = potential_fn
        self._frequency = frequency
        self._steps: list[int] = []
        self._times: list[float] = []
        self._kinetic: list[float] = []
        self._potential: list[float] = []
        self._total: list[float] = []

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, state: MDState, **kwargs: Any) -> None:
        """Record energies."""
        pe = self._potential_fn(state)
        ke = state.kinetic_energy

        self._steps.append(state.step)
        self._times.append(state.time)
        self._kinetic.append(ke)
        self._potential.append(pe)
        self._total.append(ke + pe)

    @property
    def steps(self) -> np.ndarray:
        """Return step numbers of the records."""
        return np.array(self._steps)

    @property
    def kinetic_energy(self) -> np.ndarray:
        """Return kinetic energy time series."""
        return np.array(self._kinetic)

    @property
    def potential_energy(self) -> np.ndarray:
        """Return potential energy time series."""
        return np.array(self._potential)

    @property
    def total_energy(self) -> np.ndarray:
        """Return total energy time series."""
        return np.array(self._total)

    @property
    def times(self) -> np.ndarray:
        """Return times array."""
        return np.array(self._times)

    def clear(self) -> None:
        """Clear stored data."""
        self._steps.clear()
        self._times.clear()
        self._kinetic.clear()
        self._potential.clear()
        self._total.clear()
