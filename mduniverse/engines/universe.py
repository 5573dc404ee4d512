"""The simulated universe: replicated topology, integration and output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import numpy as np
from numpy.typing import NDArray

from ..config import SimulationConfig
from ..constants import BOLTZMANN
from ..errors import ConfigurationError, NumericalError, ResourceError
from ..forcefields import ForceField, NumericalForce
from ..integrators import VelocityVerletIntegrator
from ..io import XYZWriter
from ..system import Atom, Box, MDState
from ..system.vectors import random_unit_vector, random_unit_vectors
from ..topology import read_topology
from .minimizer import MinimizationResult, MonteCarloMinimizer
from .reporters import Reporter, ReporterGroup, TrajectoryReporter

if TYPE_CHECKING:
    from ..forcefields import ForceProvider
    from ..topology import Topology

logger = logging.getLogger(__name__)


def ideal_gas_cell_edge(copies: int, temperature: float, pressure: float) -> float:
    """
    Edge of the cubic cell holding ``copies`` molecules of an ideal gas.

    L = cbrt(k_B * copies * T / P)
    """
    return float(np.cbrt(BOLTZMANN * copies * temperature / pressure))


class Universe:
    """
    Whole simulated system.

    Owns the reference topology, the replicated working topology, the
    kinematic state of every working atom and the trajectory stream.

    Initialization sizes the cubic cell from the ideal-gas law, tiles the
    reference molecule ``copies`` times (each replica shifted by its own
    random offset), wraps positions into the cell, gives every atom the
    thermal speed in a random direction and evaluates the initial forces.

    Example usage:
        config = SimulationConfig(temperature=300.0, copies=8, frameskip=9)
        with Universe.from_files("water.top", "water.xyz", config) as universe:
            universe.montecarlo()
            universe.simulate()

    The Universe closes its output stream on ``close()``, on leaving a
    ``with`` block and when initialization fails.
    """

    def __init__(
        self,
        reference: Topology,
        config: SimulationConfig | None = None,
        output: str | Path | TextIO | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """
        Initialize the universe.

        Args:
            reference: Reference topology (SI units).
            config: Simulation parameters. Defaults to SimulationConfig().
            output: Trajectory path or stream. No frames are written if None.
            rng: Random generator. Defaults to one seeded from config.seed.

        Raises:
            ConfigurationError: Empty topology.
            ResourceError: Output file cannot be opened.
            NumericalError: Degenerate initial geometry.
        """
        self._config = config if config is not None else SimulationConfig()
        self._rng = rng if rng is not None else np.random.default_rng(self._config.seed)
        self._reference = reference
        self._closed = False
        self._writer: XYZWriter | None = None
        self._reporters = ReporterGroup()

        try:
            self._initialize(output)
        except BaseException:
            self.close()
            raise

    @classmethod
    def from_files(
        cls,
        topology_path: str | Path,
        output_path: str | Path | None,
        config: SimulationConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> Universe:
        """Read a topology file and build a universe writing to output_path."""
        return cls(read_topology(topology_path), config, output=output_path, rng=rng)

    def _initialize(self, output: str | Path | TextIO | None) -> None:
        config = self._config
        reference = self._reference
        if reference.n_atoms == 0:
            raise ConfigurationError("reference topology has no atoms")

        self._cell_size = ideal_gas_cell_edge(
            config.copies, config.temperature, config.pressure
        )
        self._box = Box.cubic(self._cell_size)
        self._topology = reference.replicate(config.copies)
        self._reference_state = MDState.create(
            positions=reference.positions,
            masses=reference.masses,
            box=self._box,
        )

        if output is not None:
            self._writer = XYZWriter(output, self._topology.symbols)
            self._writer.open()
            self._reporters.add(TrajectoryReporter(self._writer, config.frameskip))

        self._state = self.populate()
        self.enforce_pbc()
        self.set_velocity()

        self._force_field = ForceField.from_topology(self._topology)
        self._force_provider: ForceProvider = (
            NumericalForce(self._force_field) if config.numerical else self._force_field
        )
        self._integrator = VelocityVerletIntegrator(config.timestep)
        self.update_forces()

        logger.info(
            "universe %r: %d atoms (%d x %d) in a %.4e m cell, %s forces",
            reference.name,
            self.n_atoms,
            config.copies,
            reference.n_atoms,
            self._cell_size,
            config.force_mode.value,
        )

    # ------------------------------------------------------------------
    # Initialization steps
    # ------------------------------------------------------------------

    def populate(self) -> MDState:
        """
        Build the working state by tiling the reference state.

        Each replica gets one offset: a random unit vector scaled by a
        uniform factor in [-1, 1] times the cell edge, applied to all of
        its atoms so the molecule keeps its shape. Velocities,
        accelerations and forces are copied from the reference state.
        """
        reference = self._reference_state
        copies = self._config.copies
        n_ref = reference.n_atoms

        positions = np.tile(reference.positions, (copies, 1))
        for copy in range(copies):
            offset = random_unit_vector(self._rng)
            offset *= self._rng.uniform(-1.0, 1.0) * self._cell_size
            positions[copy * n_ref : (copy + 1) * n_ref] += offset

        return MDState.create(
            positions=positions,
            masses=np.tile(reference.masses, copies),
            box=self._box,
            velocities=np.tile(reference.velocities, (copies, 1)),
            accelerations=np.tile(reference.accelerations, (copies, 1)),
            forces=np.tile(reference.forces, (copies, 1)),
        )

    def enforce_pbc(self, index: int | None = None) -> None:
        """Wrap one atom, or all atoms, into the cell."""
        state = self._state
        if index is None:
            state.positions = self._box.wrap_positions(state.positions)
        else:
            state.positions[index] = self._box.wrap_positions(state.positions[index])

    def set_velocity(self) -> None:
        """
        Give every atom the thermal speed in a random direction.

        The speed is sqrt(3 k_B T / M) with M the mass of the whole
        reference molecule, identical for all atoms. This is a simplified
        thermalization, not a Maxwell-Boltzmann distribution of speeds.
        """
        molecule_mass = self._reference.total_mass
        if molecule_mass <= 0:
            raise NumericalError(f"reference molecule mass is {molecule_mass}")
        speed = np.sqrt(3.0 * BOLTZMANN * self._config.temperature / molecule_mass)
        self._state.velocities = random_unit_vectors(self.n_atoms, self._rng) * speed

    # ------------------------------------------------------------------
    # Forces and integration
    # ------------------------------------------------------------------

    def _force_fn(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        forces = self._force_provider.compute(self._state.with_positions(positions))
        if not np.all(np.isfinite(forces)):
            raise NumericalError("non-finite force encountered")
        return forces

    def update_forces(self) -> None:
        """Recompute forces and accelerations at the current positions."""
        state = self._state
        state.forces = self._force_fn(state.positions)
        state.accelerations = state.forces / state.masses[:, np.newaxis]

    def iterate(self) -> MDState:
        """
        Advance the universe by one velocity Verlet step.

        Every position is updated and wrapped before forces are evaluated
        at the new configuration. Advances time by one timestep and the
        iteration counter by one.
        """
        self._require_open()
        self._state = self._integrator.step(self._state, self._force_fn)
        return self._state

    def simulate(self, max_time: float | None = None) -> MDState:
        """
        Iterate until the simulated time reaches ``max_time``.

        Before each step the due reporters run; the trajectory reporter
        writes a frame and then skips ``frameskip`` steps.

        Args:
            max_time: Stop time (s). Defaults to config.max_time.

        Returns:
            Final state.
        """
        self._require_open()
        if max_time is None:
            max_time = self._config.max_time

        logger.info(
            "simulation start: t=%.4e s, target %.4e s, dt=%.4e s",
            self.time,
            max_time,
            self._integrator.timestep,
        )
        self._reporters.initialize(self._state)
        try:
            while self._state.time < max_time:
                self._reporters.report(self._state, iteration=self.iterations)
                self.iterate()
        finally:
            self._reporters.finalize(self._state)
        logger.info(
            "simulation end: %d iterations, t=%.4e s", self.iterations, self.time
        )
        return self._state

    def print_state(self) -> None:
        """Write the current configuration as one trajectory frame."""
        self._require_open()
        if self._writer is None:
            raise ResourceError("universe has no output stream")
        self._writer.write(self._state, iteration=self.iterations)

    def add_reporter(self, reporter: Reporter) -> None:
        """Add a reporter run before each step of ``simulate``."""
        self._reporters.add(reporter)

    def remove_reporter(self, reporter: Reporter) -> None:
        """Remove a reporter."""
        self._reporters.remove(reporter)

    # ------------------------------------------------------------------
    # Energies
    # ------------------------------------------------------------------

    def energy_kinetic(self) -> float:
        """Return sum of 0.5 * m * |v|^2 over all atoms (J)."""
        return self._state.kinetic_energy

    def energy_potential(
        self, double_count: bool = True, state: MDState | None = None
    ) -> float:
        """
        Return the potential energy (J).

        Args:
            double_count: If True, sum the energy seen by each atom, which
                counts every pair and bond term twice. If False, count each
                term once.
            state: State to evaluate. Defaults to the current state.
        """
        state = state if state is not None else self._state
        if double_count:
            energy = float(np.sum(self._force_field.atom_energies(state)))
        else:
            _, energy = self._force_field.compute_with_energy(state)
        if not np.isfinite(energy):
            raise NumericalError("non-finite potential energy")
        return energy

    def energy_total(self, double_count: bool = True) -> float:
        """Return kinetic plus potential energy (J)."""
        return self.energy_kinetic() + self.energy_potential(double_count)

    # ------------------------------------------------------------------
    # Minimization
    # ------------------------------------------------------------------

    def montecarlo(self, max_attempts: int | None = None) -> MinimizationResult:
        """
        Lower the potential energy by random single-atom displacements.

        Forces and accelerations are refreshed afterwards so integration
        can continue from the new configuration.

        Args:
            max_attempts: Per-atom attempt budget. Defaults to
                config.minimizer_max_attempts.
        """
        self._require_open()
        if max_attempts is None:
            max_attempts = self._config.minimizer_max_attempts
        minimizer = MonteCarloMinimizer(
            self._force_field, self._rng, max_attempts=max_attempts
        )
        result = minimizer.minimize(self._state)
        self.update_forces()
        return result

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def atom(self, index: int) -> Atom:
        """Return a snapshot of one working atom."""
        self._require_open()
        atom = self._topology.atom(index)
        atom.position = self._state.positions[index].copy()
        atom.velocity = self._state.velocities[index].copy()
        atom.acceleration = self._state.accelerations[index].copy()
        atom.force = self._state.forces[index].copy()
        return atom

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._reference.name

    @property
    def author(self) -> str:
        return self._reference.author

    @property
    def comment(self) -> str:
        return self._reference.comment

    @property
    def reference(self) -> Topology:
        """Return the reference topology."""
        return self._reference

    @property
    def topology(self) -> Topology:
        """Return the replicated working topology."""
        self._require_open()
        return self._topology

    @property
    def state(self) -> MDState:
        """Return current simulation state."""
        self._require_open()
        return self._state

    @property
    def force_provider(self) -> ForceProvider:
        """Return the provider used for integration forces."""
        return self._force_provider

    @property
    def force_field(self) -> ForceField:
        """Return the analytic force field used for energies."""
        return self._force_field

    @property
    def box(self) -> Box:
        return self._box

    @property
    def cell_size(self) -> float:
        """Return the cubic cell edge (m)."""
        return self._cell_size

    @property
    def copies(self) -> int:
        return self._config.copies

    @property
    def n_atoms(self) -> int:
        """Return number of working atoms."""
        return self._topology.n_atoms

    @property
    def time(self) -> float:
        """Return elapsed simulated time (s)."""
        return self._state.time

    @property
    def iterations(self) -> int:
        """Return number of completed steps."""
        return self._state.step

    @property
    def frames_written(self) -> int:
        return self._writer.n_frames if self._writer is not None else 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def _require_open(self) -> None:
        if self._closed:
            raise RuntimeError("universe is closed")

    def close(self) -> None:
        """Close the output stream and release the working arrays."""
        if self._closed:
            return
        self._closed = True
        if self._writer is not None:
            self._writer.close()
        self._state = None
        self._topology = None

    def __enter__(self) -> Universe:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
