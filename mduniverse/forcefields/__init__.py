"""Force field implementations."""

from .base import ForceProvider
from .composite import ForceField
from .numerical import NumericalForce

__all__ = ["ForceProvider", "ForceField", "NumericalForce"]
