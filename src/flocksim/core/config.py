"""
Configuration classes and defaults for the prey/predator simulation.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Optional, Union


class InvalidConfiguration(ValueError):
    """Raised when a configuration cannot produce a valid simulation."""


# Engine constants
STRIKE_DISTANCE = 0.05
SENSOR_NOISE_STD = 0.05
MIN_NEIGHBOR_DISTANCE = 1e-12
ZERO_LENGTH = 1e-6

BOUNDARY_NAMES = ("periodic", "hard", "soft")


@dataclass(frozen=True)
class SpeciesParams:
    """Scalar parameters shared by both species."""

    vision_radius: float = 1.0
    max_acceleration: float = 1.0
    max_velocity: float = 1.0
    boundary_weight: float = 1.0  # coupling of the soft boundary bias

    def to_dict(self) -> dict:
        """Convert params to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SpeciesParams":
        """Create params from dictionary, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in names})


@dataclass(frozen=True)
class PreyParams(SpeciesParams):
    """Prey steering coefficients."""

    # Same species
    prey_alignment: float = 1.0
    prey_attraction: float = 0.3
    prey_repulsion: float = 0.1
    # Predators
    predator_alignment: float = 5.0  # weight of the evasion heading
    predator_repulsion: float = 5.0


@dataclass(frozen=True)
class PredatorParams(SpeciesParams):
    """Predator steering coefficients."""

    vision_radius: float = 2.0
    max_velocity: float = 0.75
    # Prey
    prey_attraction: float = 5.0
    # Same species
    predator_alignment: float = 1.0
    predator_repulsion: float = 2.0
    # Advisory only, never gates predation
    kill_cooldown: float = 0.5


@dataclass
class SimulationConfig:
    """Configuration for one simulation run."""

    prey: PreyParams = field(default_factory=PreyParams)
    predator: PredatorParams = field(default_factory=PredatorParams)

    # Agent counts
    prey_count: int = 200
    predator_count: int = 5

    # Domain
    domain_length: float = 10.0
    boundary: str = "soft"
    soft_range: float = 2.0

    # Time
    dt: float = 1.0 / 60.0
    end_time: float = 50.0

    seed: Optional[int] = 42
    history_limit: Optional[int] = None  # None keeps the full trajectory

    def validate(self) -> None:
        """
        Check that the configuration describes a runnable simulation.

        Raises:
            InvalidConfiguration: If any parameter is out of range
        """
        if self.domain_length <= 0:
            raise InvalidConfiguration(f"domain_length must be positive, got {self.domain_length}")
        for label, params in (("prey", self.prey), ("predator", self.predator)):
            radius = params.vision_radius
            if radius <= 0 or radius > self.domain_length:
                raise InvalidConfiguration(
                    f"{label} vision_radius must be in (0, {self.domain_length}], got {radius}"
                )
        if self.dt <= 0:
            raise InvalidConfiguration(f"dt must be positive, got {self.dt}")
        if self.end_time < 0:
            raise InvalidConfiguration(f"end_time must not be negative, got {self.end_time}")
        if self.prey_count < 0 or self.predator_count < 0:
            raise InvalidConfiguration("agent counts must not be negative")
        if self.boundary not in BOUNDARY_NAMES:
            raise InvalidConfiguration(
                f"boundary must be one of {', '.join(BOUNDARY_NAMES)}, got {self.boundary!r}"
            )
        if self.soft_range <= 0:
            raise InvalidConfiguration(f"soft_range must be positive, got {self.soft_range}")
        if self.history_limit is not None and self.history_limit < 1:
            raise InvalidConfiguration(f"history_limit must be at least 1, got {self.history_limit}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "prey": self.prey.to_dict(),
            "predator": self.predator.to_dict(),
            "prey_count": self.prey_count,
            "predator_count": self.predator_count,
            "domain_length": self.domain_length,
            "boundary": self.boundary,
            "soft_range": self.soft_range,
            "dt": self.dt,
            "end_time": self.end_time,
            "seed": self.seed,
            "history_limit": self.history_limit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        """Create config from dictionary."""
        names = {f.name for f in fields(cls)} - {"prey", "predator"}
        values = {k: v for k, v in data.items() if k in names}
        if "prey" in data:
            values["prey"] = PreyParams.from_dict(data["prey"])
        if "predator" in data:
            values["predator"] = PredatorParams.from_dict(data["predator"])
        return cls(**values)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "SimulationConfig":
        """Load config from a JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def to_json(self, path: Union[str, Path]) -> str:
        """
        Save config to a JSON file.

        Args:
            path: Output filename

        Returns:
            Path of the saved file
        """
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        return str(path)


# Default configuration for single runs
DEFAULT_CONFIG = SimulationConfig()
