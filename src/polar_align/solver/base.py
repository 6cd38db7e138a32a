"""
Primitives for plate solving.

Provides the PlateSolver base class as well as the PlateSolveResult type
so that solver wrappers share one interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..angle import Angle
from ..coords import SkyCoord, WorldTransform


class PlateSolveError(Exception):
    """Base class for errors raised by plate solver wrappers."""


@dataclass(frozen=True)
class PlateSolverOptions:
    """Common options to give to plate solvers."""
    # Guess at the field of view to seed solving.
    # If this is too inaccurate solving may fail.
    fov_guess: Optional[Angle] = None


@dataclass(frozen=True)
class PlateSolveResult:
    """Result of plate solving an image."""
    coord: SkyCoord              # Reference sky position
    transform: WorldTransform    # Pixel -> (RA, Dec) in degrees


class PlateSolver(ABC):
    """
    Plate solver interface.

    Implementations take an image path and return a PlateSolveResult,
    raising a PlateSolveError subclass on failure.
    """

    @abstractmethod
    def solve(self, image_path: Union[str, Path],
              options: Optional[PlateSolverOptions] = None) -> PlateSolveResult:
        """
        Solve an image.

        Args:
            image_path: Path to the image file
            options: Optional hints for the solver

        Returns:
            PlateSolveResult for the image
        """
