"""Simulation configuration."""

from __future__ import annotations

import json
import math
import numbers
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

from .constants import ATMOSPHERE
from .errors import ConfigurationError, ResourceError


class ForceMode(str, Enum):
    """How forces are obtained from the potential."""

    ANALYTIC = "analytic"
    NUMERICAL = "numerical"


@dataclass(frozen=True)
class SimulationConfig:
    """
    Parameters of a simulation run.

    Attributes:
        temperature: Target temperature (K). Sizes the cell and sets the
            initial speed.
        pressure: Target pressure (Pa). Sizes the cell.
        timestep: Integration timestep (s).
        max_time: Simulated time at which the run stops (s).
        copies: Number of replicas of the reference topology.
        frameskip: Steps skipped between two trajectory frames.
        force_mode: Analytic or finite-difference forces.
        seed: Seed for the random generator, None for OS entropy.
        minimize: Run the Monte Carlo minimizer before integrating.
        minimizer_max_attempts: Per-atom attempt budget of the minimizer.
    """

    temperature: float = 300.0
    pressure: float = ATMOSPHERE
    timestep: float = 1e-15
    max_time: float = 1e-12
    copies: int = 1
    frameskip: int = 0
    force_mode: ForceMode = ForceMode.ANALYTIC
    seed: int | None = None
    minimize: bool = False
    minimizer_max_attempts: int = 10_000

    def __post_init__(self) -> None:
        """Validate types and values, normalising numbers and the force mode."""
        try:
            object.__setattr__(self, "force_mode", ForceMode(self.force_mode))
        except ValueError:
            raise ConfigurationError(
                f"unknown force mode {self.force_mode!r}"
            ) from None

        for name in ("temperature", "pressure", "timestep", "max_time"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(
                    f"{name} must be a number, got {type(value).__name__}"
                )
            object.__setattr__(self, name, float(value))
        for name in ("copies", "frameskip", "minimizer_max_attempts", "seed"):
            value = getattr(self, name)
            if name == "seed" and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(
                    f"{name} must be an integer, got {type(value).__name__}"
                )
            object.__setattr__(self, name, int(value))
        if not isinstance(self.minimize, bool):
            raise ConfigurationError(
                f"minimize must be a boolean, got {type(self.minimize).__name__}"
            )

        for name in ("temperature", "pressure", "timestep"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if not math.isfinite(self.max_time) or self.max_time < 0:
            raise ConfigurationError(
                f"max_time must be non-negative, got {self.max_time}"
            )
        if self.copies < 1:
            raise ConfigurationError(f"copies must be >= 1, got {self.copies}")
        if self.frameskip < 0:
            raise ConfigurationError(
                f"frameskip must be >= 0, got {self.frameskip}"
            )
        if self.minimizer_max_attempts < 1:
            raise ConfigurationError(
                "minimizer_max_attempts must be >= 1, "
                f"got {self.minimizer_max_attempts}"
            )

    @property
    def numerical(self) -> bool:
        """Return True when forces are finite-differenced."""
        return self.force_mode is ForceMode.NUMERICAL

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SimulationConfig:
        """
        Build a configuration from a mapping.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"unknown configuration keys: {', '.join(sorted(unknown))}"
            )
        return cls(**data)

    @classmethod
    def from_json(cls, path: str | Path) -> SimulationConfig:
        """Load a configuration from a JSON file."""
        path = Path(path)
        try:
            data = json.loads(path.read_text())
        except OSError as exc:
            raise ResourceError(f"cannot read configuration {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable dictionary."""
        data = asdict(self)
        data["force_mode"] = self.force_mode.value
        return data

    def replace(self, **changes: Any) -> SimulationConfig:
        """Return a copy with some fields changed."""
        data = asdict(self)
        data.update(changes)
        return SimulationConfig(**data)
