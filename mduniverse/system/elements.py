"""Element table: element code -> symbol and atomic mass.

The element code used in topology files is the atomic number.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..constants import ATOMIC_MASS
from ..errors import MalformedTopologyError


@dataclass(frozen=True)
class Element:
    """
    Chemical element.

    Attributes:
        code: Atomic number.
        symbol: Chemical symbol written to trajectories.
        mass: Standard atomic mass (u).
    """

    code: int
    symbol: str
    mass: float

    @property
    def mass_kg(self) -> float:
        """Return the atomic mass in kilograms."""
        return self.mass * ATOMIC_MASS


_TABLE = [
    (1, "H", 1.008),
    (2, "He", 4.0026),
    (3, "Li", 6.94),
    (4, "Be", 9.0122),
    (5, "B", 10.81),
    (6, "C", 12.011),
    (7, "N", 14.007),
    (8, "O", 15.999),
    (9, "F", 18.998),
    (10, "Ne", 20.180),
    (11, "Na", 22.990),
    (12, "Mg", 24.305),
    (13, "Al", 26.982),
    (14, "Si", 28.085),
    (15, "P", 30.974),
    (16, "S", 32.06),
    (17, "Cl", 35.45),
    (18, "Ar", 39.948),
    (19, "K", 39.098),
    (20, "Ca", 40.078),
    (21, "Sc", 44.956),
    (22, "Ti", 47.867),
    (23, "V", 50.942),
    (24, "Cr", 51.996),
    (25, "Mn", 54.938),
    (26, "Fe", 55.845),
    (27, "Co", 58.933),
    (28, "Ni", 58.693),
    (29, "Cu", 63.546),
    (30, "Zn", 65.38),
    (31, "Ga", 69.723),
    (32, "Ge", 72.630),
    (33, "As", 74.922),
    (34, "Se", 78.971),
    (35, "Br", 79.904),
    (36, "Kr", 83.798),
]

ELEMENTS: dict[int, Element] = {
    code: Element(code, symbol, mass) for code, symbol, mass in _TABLE
}


def get_element(code: int) -> Element:
    """Return the element with the given code."""
    try:
        return ELEMENTS[int(code)]
    except KeyError:
        raise MalformedTopologyError(f"unknown element code {code}") from None


def mass(code: int) -> float:
    """Return the atomic mass of an element in kilograms."""
    return get_element(code).mass_kg


def symbol(code: int) -> str:
    """Return the chemical symbol of an element."""
    return get_element(code).symbol


def masses(codes: ArrayLike) -> NDArray[np.floating]:
    """Return the masses (kg) of an array of element codes."""
    codes = np.asarray(codes, dtype=np.int64)
    return np.array([mass(c) for c in codes], dtype=np.float64)


def symbols(codes: ArrayLike) -> list[str]:
    """Return the symbols of an array of element codes."""
    return [symbol(c) for c in np.asarray(codes, dtype=np.int64)]
