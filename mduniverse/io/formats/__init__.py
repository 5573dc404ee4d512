"""Trajectory file formats."""

from .xyz import XYZReader, XYZWriter

__all__ = ["XYZReader", "XYZWriter"]
