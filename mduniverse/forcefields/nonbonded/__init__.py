"""Nonbonded interaction terms."""

from .coulomb import CoulombForce
from .lj import LennardJonesForce
from .pair import PairForce

__all__ = ["PairForce", "LennardJonesForce", "CoulombForce"]
