"""Integrator implementations."""

from .base import ForceFunction, Integrator
from .velocity_verlet import VelocityVerletIntegrator

__all__ = [
    "ForceFunction",
    "Integrator",
    "VelocityVerletIntegrator",
]
