"""Physical constants and unit conversions (SI)."""

from __future__ import annotations

import math

from scipy import constants

# Boltzmann constant (J/K)
BOLTZMANN = constants.k

# Elementary charge (C)
ELEMENTARY_CHARGE = constants.e

# Coulomb constant 1/(4*pi*epsilon_0) (N*m^2/C^2)
COULOMB_CONSTANT = 1.0 / (4.0 * math.pi * constants.epsilon_0)

# Unified atomic mass unit (kg)
ATOMIC_MASS = constants.atomic_mass

# Topology and trajectory files use Angstrom
ANGSTROM = 1e-10
METRES_TO_ANGSTROM = 1e10

# Standard atmosphere (Pa)
ATMOSPHERE = constants.atm
