# Plate Solving for polar alignment
#
# Provides the PlateSolver interface and an ASTAP command-line wrapper.
#
# Basic usage:
#     from polar_align.solver import AstapSolver, PlateSolverOptions
#
#     solver = AstapSolver()
#     result = solver.solve("frame.jpg", PlateSolverOptions(fov_guess=Angle.from_degrees(10)))
#     x, y = result.transform.world_to_pixel(result.coord)

from .base import (
    PlateSolver,
    PlateSolverOptions,
    PlateSolveResult,
    PlateSolveError,
)

from .wcs import (
    read_wcs,
    wcs_path_for,
    WcsReadError,
)

from .astap import (
    AstapSolver,
    AstapInitError,
    AstapSolverError,
    UnsupportedOsError,
    SolverNotFoundError,
    DatabaseNotFoundError,
    IterationsExceededError,
    default_install,
)

__all__ = [
    # Contract
    'PlateSolver',
    'PlateSolverOptions',
    'PlateSolveResult',
    'PlateSolveError',
    # WCS sidecar
    'read_wcs',
    'wcs_path_for',
    'WcsReadError',
    # ASTAP
    'AstapSolver',
    'AstapInitError',
    'AstapSolverError',
    'UnsupportedOsError',
    'SolverNotFoundError',
    'DatabaseNotFoundError',
    'IterationsExceededError',
    'default_install',
]
