"""Molecular topology: atoms, bonds and the topology file reader."""

from .bonds import BondTable
from .parser import parse_topology, read_topology
from .topology import Topology

__all__ = ["BondTable", "Topology", "parse_topology", "read_topology"]
