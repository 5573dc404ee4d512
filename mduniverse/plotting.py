"""
Built-in plotting utilities for simulation results.

Example:
    >>> from mduniverse import simulate, plotting
    >>> result = simulate.run("h2.top", "h2.xyz")
    >>> plotting.energy(result)
    >>> plotting.save("h2_energy.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .simulate import SimulationResult

# matplotlib is an optional extra
try:
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    plt = None


def _check_matplotlib():
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install it with: pip install mduniverse[plot]"
        )


def energy(
    result: SimulationResult,
    show: bool = True,
    figsize: tuple[float, float] = (10, 6),
) -> None:
    """
    Plot energy time series.

    Shows kinetic, potential, and total energy vs time, and the relative
    deviation of the total energy from its first value.

    Args:
        result: SimulationResult from simulate.run.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.
    """
    _check_matplotlib()

    fig, axes = plt.subplots(1, 2, figsize=figsize)
    times = result.times * 1e15

    # Energy vs time
    ax = axes[0]
    ax.plot(times, result.kinetic_energy, "b-", label="Kinetic", alpha=0.7, lw=0.8)
    ax.plot(times, result.potential_energy, "r-", label="Potential", alpha=0.7, lw=0.8)
    ax.plot(times, result.total_energy, "k-", label="Total", lw=1.5)
    ax.set_xlabel("Time (fs)")
    ax.set_ylabel("Energy (J)")
    ax.set_title(f"{result.name or 'Universe'}: energy vs time")
    ax.legend()
    ax.grid(True, alpha=0.3)

    # Energy conservation
    ax = axes[1]
    if len(result.total_energy) > 0:
        e0 = result.total_energy[0]
        rel_error = (
            (result.total_energy - e0) / abs(e0) * 100
            if e0 != 0
            else np.zeros_like(result.total_energy)
        )
        ax.plot(times, rel_error, "k-", lw=1)
        ax.axhline(y=0, color="r", linestyle="--", alpha=0.5)
    ax.set_xlabel("Time (fs)")
    ax.set_ylabel("Relative Energy Error (%)")
    ax.set_title(f"Energy Conservation (fluct: {result.energy_fluctuation:.2e})")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()


def save(filename: str | Path, dpi: int = 150) -> None:
    """
    Save current figure to file.

    Args:
        filename: Output filename (supports png, pdf, svg, etc.).
        dpi: Resolution in dots per inch.
    """
    _check_matplotlib()
    plt.savefig(filename, dpi=dpi, bbox_inches="tight")


def show() -> None:
    """Display all open figures."""
    _check_matplotlib()
    plt.show()
