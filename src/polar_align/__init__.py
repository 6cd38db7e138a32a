"""
Polar Align
===========

Coordinate and time support for polar alignment of a telescope mount
from plate-solved camera frames.

Main components:
- angle: Angle value type with explicit units
- julian: Julian dates and intervals
- sidereal: Earth Rotation Angle and Greenwich Mean Sidereal Time
- coords: Sky/ground coordinates, alt/az conversion, pixel <-> sky transform
- solver: Plate solver interface and ASTAP wrapper
- config: YAML configuration
- cli: Command-line interface
"""

__version__ = "0.1.0"

from .angle import Angle, HALF_TURN, FULL_TURN
from .julian import JulianDate, JulianInterval, J2000, JULIAN_CENTURY
from .sidereal import earth_rotation_angle, greenwich_mean_sidereal_time, local_sidereal_time
from .coords import SkyCoord, GroundCoord, WorldTransform
from .solver import PlateSolver, PlateSolverOptions, PlateSolveResult, PlateSolveError

__all__ = [
    "Angle",
    "HALF_TURN",
    "FULL_TURN",
    "JulianDate",
    "JulianInterval",
    "J2000",
    "JULIAN_CENTURY",
    "earth_rotation_angle",
    "greenwich_mean_sidereal_time",
    "local_sidereal_time",
    "SkyCoord",
    "GroundCoord",
    "WorldTransform",
    "PlateSolver",
    "PlateSolverOptions",
    "PlateSolveResult",
    "PlateSolveError",
    "__version__",
]
