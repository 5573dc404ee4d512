"""Simulation engine implementations."""

from .minimizer import MinimizationResult, MonteCarloMinimizer
from .reporters import (
    CallbackReporter,
    EnergyReporter,
    Reporter,
    ReporterGroup,
    TrajectoryReporter,
)
from .universe import Universe, ideal_gas_cell_edge

__all__ = [
    "Universe",
    "ideal_gas_cell_edge",
    "MonteCarloMinimizer",
    "MinimizationResult",
    "Reporter",
    "ReporterGroup",
    "TrajectoryReporter",
    "CallbackReporter",
    "EnergyReporter",
]
