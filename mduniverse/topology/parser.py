"""Reader for the line-oriented topology format.

Layout::

    line 1: system name
    line 2: author name
    line 3: free-text comment
    line 4: <n_atoms> <n_bonds>
    n_atoms lines: <x> <y> <z> <element> <charge> <epsilon> <sigma>
    n_bonds lines: <atom_1> <atom_2> <strength>

Positions and sigma are in Angstrom, charges in elementary charges,
epsilon in joules, bond strengths in N/m. Bond indices are 1-based.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ..constants import ANGSTROM, ELEMENTARY_CHARGE
from ..errors import MalformedTopologyError, ResourceError
from ..system import elements
from ..system.atom import Atom
from .topology import Topology

HEADER_LINES = 4
ATOM_FIELDS = 7
BOND_FIELDS = 3


def _fields(line: str, count: int, what: str, lineno: int) -> list[str]:
    parts = line.split()
    if len(parts) != count:
        raise MalformedTopologyError(
            f"{what} record needs {count} fields, got {len(parts)}", lineno
        )
    return parts


def _int(token: str, what: str, lineno: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise MalformedTopologyError(f"invalid {what} {token!r}", lineno) from None


def _float(token: str, what: str, lineno: int) -> float:
    try:
        value = float(token)
    except ValueError:
        raise MalformedTopologyError(f"invalid {what} {token!r}", lineno) from None
    if not np.isfinite(value):
        raise MalformedTopologyError(f"non-finite {what} {token!r}", lineno)
    return value


def _parse_atom(line: str, lineno: int) -> Atom:
    x, y, z, code, charge, epsilon, sigma = _fields(line, ATOM_FIELDS, "atom", lineno)
    element = _int(code, "element code", lineno)
    if element not in elements.ELEMENTS:
        raise MalformedTopologyError(f"unknown element code {element}", lineno)
    position = np.array(
        [_float(x, "x", lineno), _float(y, "y", lineno), _float(z, "z", lineno)]
    )
    return Atom(
        element=element,
        charge=_float(charge, "charge", lineno) * ELEMENTARY_CHARGE,
        epsilon=_float(epsilon, "epsilon", lineno),
        sigma=_float(sigma, "sigma", lineno) * ANGSTROM,
        position=position * ANGSTROM,
    )


def _parse_bond(line: str, lineno: int, n_atoms: int) -> tuple[int, int, float]:
    first, second, strength = _fields(line, BOND_FIELDS, "bond", lineno)
    i = _int(first, "atom index", lineno)
    j = _int(second, "atom index", lineno)
    for index in (i, j):
        if index < 1 or index > n_atoms:
            raise MalformedTopologyError(
                f"atom index {index} out of range [1, {n_atoms}]", lineno
            )
    if i == j:
        raise MalformedTopologyError(f"atom {i} bonded to itself", lineno)
    return i - 1, j - 1, _float(strength, "bond strength", lineno)


def parse_topology(text: str) -> Topology:
    """
    Parse a topology from text.

    Args:
        text: Whole file contents.

    Returns:
        Reference Topology in SI units.

    Raises:
        MalformedTopologyError: On a missing line or an unparsable record.
    """
    lines = text.splitlines()
    if len(lines) < HEADER_LINES:
        raise MalformedTopologyError(
            f"expected {HEADER_LINES} header lines, got {len(lines)}", len(lines) + 1
        )
    name, author, comment = (line.strip() for line in lines[:3])

    n_atoms_token, n_bonds_token = _fields(lines[3], 2, "count", 4)
    n_atoms = _int(n_atoms_token, "atom count", 4)
    n_bonds = _int(n_bonds_token, "bond count", 4)
    if n_atoms < 0 or n_bonds < 0:
        raise MalformedTopologyError("counts must be non-negative", 4)

    expected = HEADER_LINES + n_atoms + n_bonds
    if len(lines) < expected:
        raise MalformedTopologyError(
            f"expected {n_atoms} atoms and {n_bonds} bonds, file ends early",
            len(lines) + 1,
        )

    atoms = []
    for offset in range(n_atoms):
        lineno = HEADER_LINES + offset + 1
        atoms.append(_parse_atom(lines[lineno - 1], lineno))

    bonds = []
    for offset in range(n_bonds):
        lineno = HEADER_LINES + n_atoms + offset + 1
        bonds.append(_parse_bond(lines[lineno - 1], lineno, n_atoms))

    return Topology.from_atoms(name, author, comment, atoms, bonds)


def read_topology(path: str | Path) -> Topology:
    """Read and parse a topology file."""
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as exc:
        raise ResourceError(f"cannot read topology {path}: {exc}") from exc
    return parse_topology(text)
