#!/usr/bin/env python
"""
Quick start example - the simplest way to run a simulation.

Replicates an H2 molecule, integrates it for a few hundred femtoseconds
and writes the trajectory next to this script.

Usage:
    python examples/quickstart.py
"""

import logging
from pathlib import Path

from mduniverse import SimulationConfig, Universe, simulate

HERE = Path(__file__).parent


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("mduniverse Quick Start")
    print("=" * 60)

    # 1. Simplest possible run
    print("\n1. Eight H2 molecules at 300 K and 1 atm:")
    print("-" * 40)
    config = SimulationConfig(
        copies=8, timestep=1e-16, max_time=2e-13, frameskip=99, seed=42
    )
    result = simulate.run(HERE / "h2.top", HERE / "h2.xyz", config, verbose=True)
    print(f"   Energy conserved: {result.energy_fluctuation < 0.01}")

    # 2. Minimize first, then integrate with finite-difference forces
    print("\n2. Minimized start, numerical forces:")
    print("-" * 40)
    config = config.replace(copies=2, max_time=2e-14, minimize=True, force_mode="numerical")
    result = simulate.run(HERE / "h2.top", None, config, verbose=True)

    # 3. Driving the Universe directly
    print("\n3. Universe API:")
    print("-" * 40)
    with Universe.from_files(HERE / "h2.top", None, config.replace(copies=1)) as universe:
        print(f"   Cell edge: {universe.cell_size:.4e} m")
        for _ in range(10):
            universe.iterate()
        print(f"   After {universe.iterations} steps: E = {universe.energy_total():.4e} J")

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
