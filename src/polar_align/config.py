"""
Configuration management for polar alignment.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import logging

import yaml

from .angle import Angle
from .coords import GroundCoord
from .solver.base import PlateSolverOptions


logger = logging.getLogger(__name__)


@dataclass
class ObserverConfig:
    """Observer location."""

    latitude_deg: float = 0.0
    longitude_deg: float = 0.0  # East positive, West negative

    def ground_coord(self) -> GroundCoord:
        return GroundCoord.from_lat_long(
            Angle.from_degrees(self.latitude_deg),
            Angle.from_degrees(self.longitude_deg),
        )


@dataclass
class SolverConfig:
    """ASTAP solver configuration."""

    astap_dir: Optional[Path] = None  # None = platform default
    max_iterations: int = 3
    poll_interval_s: float = 0.1
    fov_guess_deg: Optional[float] = None

    def options(self) -> Optional[PlateSolverOptions]:
        if self.fov_guess_deg is None:
            return None
        return PlateSolverOptions(fov_guess=Angle.from_degrees(self.fov_guess_deg))


@dataclass
class Config:
    """Main configuration container."""

    observer: ObserverConfig = field(default_factory=ObserverConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        logger.debug(f"Loaded config from {path}")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create Config from dictionary."""
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
        unknown = set(data) - {"observer", "solver"}
        if unknown:
            raise ValueError(f"Unknown config sections: {', '.join(sorted(unknown))}")

        config = cls()

        if "observer" in data:
            config.observer = ObserverConfig(**(data["observer"] or {}))
        if "solver" in data:
            solver_data = dict(data["solver"] or {})
            if solver_data.get("astap_dir") is not None:
                solver_data["astap_dir"] = Path(solver_data["astap_dir"])
            config.solver = SolverConfig(**solver_data)

        return config

    def to_yaml(self, path: Path) -> None:
        """Save configuration to YAML file."""

        def convert(obj):
            if dataclasses.is_dataclass(obj):
                return convert(dataclasses.asdict(obj))
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, Path):
                return str(obj)
            return obj

        data = convert(self)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
