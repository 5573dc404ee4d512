"""
mduniverse - Classical molecular dynamics of replicated molecules.

A reference molecule is read from a topology file, replicated into a
periodic cubic cell sized by the ideal-gas law, and integrated with
velocity Verlet under Lennard-Jones, Coulomb and harmonic bond forces.
Frames are streamed to an XYZ-style trajectory.

Quick Start:
    >>> from mduniverse import SimulationConfig, simulate
    >>> config = SimulationConfig(temperature=300.0, copies=4, max_time=1e-13)
    >>> result = simulate.run("water.top", "water.xyz", config)
    >>> print(f"Final total energy: {result.total_energy[-1]:.3e} J")
"""

__version__ = "0.1.0"

# High-level APIs
from . import plotting, simulate
from .config import ForceMode, SimulationConfig
from .engines import Universe
from .errors import (
    ConfigurationError,
    MalformedTopologyError,
    MDError,
    NumericalError,
    ResourceError,
)
from .forcefields import ForceField
from .integrators import VelocityVerletIntegrator

# Core components for advanced users
from .system import Box, MDState
from .topology import Topology, read_topology

__all__ = [
    "simulate",
    "plotting",
    "Universe",
    "SimulationConfig",
    "ForceMode",
    "Topology",
    "read_topology",
    "Box",
    "MDState",
    "ForceField",
    "VelocityVerletIntegrator",
    "MDError",
    "ResourceError",
    "MalformedTopologyError",
    "NumericalError",
    "ConfigurationError",
]
