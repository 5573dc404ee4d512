"""Trajectory I/O."""

from .base import TrajectoryReader, TrajectoryWriter
from .formats.xyz import XYZReader, XYZWriter

__all__ = [
    "TrajectoryReader",
    "TrajectoryWriter",
    "XYZReader",
    "XYZWriter",
]
