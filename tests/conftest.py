"""Shared fixtures."""

import pytest

from mduniverse.topology import parse_topology

DIATOMIC_TOPOLOGY = """\
Hydrogen
Test Suite
Single H2 molecule
2 1
0.0 0.0 0.0 1 0.0 1.0e-22 0.6
0.74 0.0 0.0 1 0.0 1.0e-22 0.6
1 2 575.0
"""

WATER_TOPOLOGY = """\
Water
Test Suite
Three-site water
3 2
0.0 0.0 0.0 8 -0.834 1.05e-21 3.15
0.9572 0.0 0.0 1 0.417 0.0 0.0
-0.2400 0.9266 0.0 1 0.417 0.0 0.0
1 2 450.0
1 3 450.0
"""


@pytest.fixture
def diatomic_text():
    return DIATOMIC_TOPOLOGY


@pytest.fixture
def water_text():
    return WATER_TOPOLOGY


@pytest.fixture
def diatomic(diatomic_text):
    """Reference H2 topology."""
    return parse_topology(diatomic_text)


@pytest.fixture
def water(water_text):
    """Reference water topology."""
    return parse_topology(water_text)


@pytest.fixture
def diatomic_file(tmp_path, diatomic_text):
    path = tmp_path / "h2.top"
    path.write_text(diatomic_text)
    return path
