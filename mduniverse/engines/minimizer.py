"""Monte Carlo energy minimizer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..system.vectors import random_unit_vector

if TYPE_CHECKING:
    from ..forcefields import ForceProvider
    from ..system import MDState

logger = logging.getLogger(__name__)


@dataclass
class MinimizationResult:
    """
    Outcome of one minimizer pass.

    Attributes:
        baselines: Energy of each atom before its displacement sequence (J).
        energies: Energy of each atom after its sequence (J).
        attempts: Displacements tried for each atom.
        exhausted: Atoms that ran out of attempts and kept their position.
    """

    baselines: NDArray[np.floating]
    energies: NDArray[np.floating]
    attempts: NDArray[np.integer]
    exhausted: list[int] = field(default_factory=list)

    @property
    def accepted(self) -> int:
        """Return number of atoms that were moved."""
        return len(self.baselines) - len(self.exhausted)

    @property
    def total_attempts(self) -> int:
        """Return total displacements tried."""
        return int(np.sum(self.attempts))


class MonteCarloMinimizer:
    """
    Greedy random-displacement minimizer.

    Atoms are visited once each, in index order. For each atom a random
    displacement of the current step length is tried; it is kept as soon
    as the atom's energy drops strictly below its energy before the
    sequence started, otherwise the old position is restored and another
    direction is tried. After ``refine_after`` consecutive rejections the
    step length is multiplied by ``refine_factor``. An atom that is not
    improved within ``max_attempts`` tries is left where it was.

    Only terms involving the displaced atom change, so comparing the
    atom's own energy orders configurations exactly as comparing the
    total energy does.

    Attributes:
        force_provider: Potential used for energies.
        initial_step: Displacement length of the first attempts (m).
        refine_after: Consecutive rejections before the step shrinks.
        refine_factor: Step shrink factor.
        max_attempts: Per-atom attempt budget.
    """

    def __init__(
        self,
        force_provider: ForceProvider,
        rng: np.random.Generator,
        initial_step: float = 1e-9,
        refine_after: int = 50,
        refine_factor: float = 0.1,
        max_attempts: int = 10_000,
    ) -> None:
        if initial_step <= 0:
            raise ValueError(f"initial_step must be positive, got {initial_step}")
        if refine_after < 1:
            raise ValueError(f"refine_after must be >= 1, got {refine_after}")
        if not 0 < refine_factor < 1:
            raise ValueError(f"refine_factor must be in (0, 1), got {refine_factor}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self.force_provider = force_provider
        self.rng = rng
        self.initial_step = initial_step
        self.refine_after = refine_after
        self.refine_factor = refine_factor
        self.max_attempts = max_attempts

    def minimize_atom(self, state: MDState, index: int) -> tuple[float, float, int]:
        """
        Run the displacement sequence for one atom, in place.

        Returns:
            Tuple of (baseline energy, final energy, attempts used). The
            final energy equals the baseline when the budget ran out.
        """
        baseline = self.force_provider.atom_energy(state, index)
        step = self.initial_step
        rejected = 0

        for attempt in range(1, self.max_attempts + 1):
            backup = state.positions[index].copy()
            trial = backup + step * random_unit_vector(self.rng)
            state.positions[index] = state.box.wrap_positions(trial)

            energy = self.force_provider.atom_energy(state, index)
            if energy < baseline:
                return baseline, energy, attempt

            state.positions[index] = backup
            rejected += 1
            if rejected == self.refine_after:
                step *= self.refine_factor
                rejected = 0

        return baseline, baseline, self.max_attempts

    def minimize(self, state: MDState) -> MinimizationResult:
        """
        Visit every atom once and lower its energy, in place.

        Args:
            state: State whose positions are modified.

        Returns:
            Per-atom baselines, final energies and attempt counts.
        """
        n_atoms = state.n_atoms
        baselines = np.zeros(n_atoms, dtype=np.float64)
        energies = np.zeros(n_atoms, dtype=np.float64)
        attempts = np.zeros(n_atoms, dtype=np.int64)
        exhausted = []

        for index in range(n_atoms):
            baseline, energy, used = self.minimize_atom(state, index)
            baselines[index] = baseline
            energies[index] = energy
            attempts[index] = used
            if not energy < baseline:
                exhausted.append(index)
                logger.warning(
                    "atom %d not improved after %d attempts, position kept",
                    index,
                    used,
                )

        result = MinimizationResult(baselines, energies, attempts, exhausted)
        logger.info(
            "minimizer moved %d/%d atoms in %d attempts",
            result.accepted,
            n_atoms,
            result.total_attempts,
        )
        return result
