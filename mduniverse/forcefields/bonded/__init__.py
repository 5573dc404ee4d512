"""Bonded interaction terms."""

from .bonds import HarmonicBondForce

__all__ = ["HarmonicBondForce"]
