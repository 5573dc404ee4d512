"""System state and box management."""

from .atom import Atom
from .box import Box
from .elements import Element, get_element
from .state import MDState

__all__ = ["Atom", "Box", "Element", "MDState", "get_element"]
