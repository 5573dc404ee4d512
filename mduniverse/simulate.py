"""
Simple high-level simulation API.

This module provides a user-friendly interface for running a simulation
from a topology file with minimal configuration.

Example:
    >>> from mduniverse import SimulationConfig, simulate
    >>> config = SimulationConfig(copies=8, max_time=1e-13, frameskip=9)
    >>> result = simulate.run("water.top", "water.xyz", config)
    >>> print(result.energy_fluctuation)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .config import SimulationConfig
from .engines import EnergyReporter, Universe

if TYPE_CHECKING:
    from .engines import MinimizationResult


@dataclass
class SimulationResult:
    """Results from a simulation run."""

    # Energy time series (J)
    times: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    kinetic_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    potential_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))
    total_energy: NDArray[np.floating] = field(default_factory=lambda: np.array([]))

    # Summary statistics
    energy_drift: float = 0.0
    energy_fluctuation: float = 0.0

    # Minimizer outcome, if it ran
    minimization: MinimizationResult | None = None

    # Metadata
    name: str = ""
    n_atoms: int = 0
    iterations: int = 0
    time: float = 0.0
    timestep: float = 0.0
    cell_size: float = 0.0
    frames_written: int = 0


def run(
    topology_path: str | Path,
    output_path: str | Path | None,
    config: SimulationConfig | None = None,
    energy_frequency: int = 10,
    double_count: bool = True,
    rng: np.random.Generator | None = None,
    verbose: bool = False,
) -> SimulationResult:
    """
    Run a simulation of a replicated molecule.

    Reads the topology, builds the universe, optionally minimizes it with
    the Monte Carlo minimizer and integrates until ``config.max_time``,
    writing frames to ``output_path``.

    Args:
        topology_path: Topology file of the reference molecule.
        output_path: Trajectory file. No frames are written if None.
        config: Simulation parameters (default: SimulationConfig()).
        energy_frequency: Record energies every N steps (default: 10).
        double_count: Potential energy convention, see
            Universe.energy_potential (default: True).
        rng: Random generator (default: seeded from config.seed).
        verbose: Print progress (default: False).

    Returns:
        SimulationResult with energy series and run metadata.

    Example:
        >>> result = run("h2.top", "h2.xyz", SimulationConfig(max_time=1e-14))
        >>> print(f"{result.iterations} steps, {result.frames_written} frames")
    """
    config = config if config is not None else SimulationConfig()

    with Universe.from_files(topology_path, output_path, config, rng=rng) as universe:
        if verbose:
            print(
                f"{universe.name}: N={universe.n_atoms} "
                f"({config.copies} copies), L={universe.cell_size:.4e} m, "
                f"T={config.temperature} K"
            )

        minimization = None
        if config.minimize:
            if verbose:
                print("Minimizing...", end=" ", flush=True)
            minimization = universe.montecarlo()
            if verbose:
                print(f"done ({minimization.total_attempts} attempts)")

        energies = EnergyReporter(
            lambda state: universe.energy_potential(double_count, state=state),
            frequency=energy_frequency,
        )
        universe.add_reporter(energies)

        if verbose:
            print(f"Integrating to {config.max_time:.3e} s...", end=" ", flush=True)
        universe.simulate()
        if verbose:
            print("done")

        total = energies.total_energy
        result = SimulationResult(
            times=energies.times,
            kinetic_energy=energies.kinetic_energy,
            potential_energy=energies.potential_energy,
            total_energy=total,
            minimization=minimization,
            name=universe.name,
            n_atoms=universe.n_atoms,
            iterations=universe.iterations,
            time=universe.time,
            timestep=config.timestep,
            cell_size=universe.cell_size,
            frames_written=universe.frames_written,
        )

    if len(total) > 1:
        result.energy_drift = float((total[-1] - total[0]) / result.iterations)
        mean = np.abs(np.mean(total))
        if mean > 0:
            result.energy_fluctuation = float(np.std(total) / mean)

    if verbose:
        print("\nResults:")
        print(f"  Iterations: {result.iterations}")
        print(f"  Frames written: {result.frames_written}")
        print(f"  Energy fluctuation: {result.energy_fluctuation:.2e}")

    return result
