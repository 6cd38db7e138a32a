"""
Solver wrapper for ASTAP, the Astrometric STAcking Program

ASTAP's command line interface provides a ready-to-go plate solver and
star database. This is a thin wrapper around the ``astap_cli`` program.

Setup:
    1. Download the ``astap_cli`` application for your OS from
       https://www.hnsky.org/astap.htm
    2. Download a matching star database (H18, H17, G17, ...)
    3. Place both the executable and the database files directly in:

        Linux:   /opt/astap/
        macOS:   /usr/local/opt/astap/
        Windows: C:/Program Files/astap/
"""

from pathlib import Path
from typing import Optional, Tuple, Union
import logging
import platform
import subprocess
import threading

from .base import PlateSolveError, PlateSolveResult, PlateSolver, PlateSolverOptions
from .wcs import read_wcs, wcs_path_for


logger = logging.getLogger(__name__)

# Install location and executable suffix per platform.system()
ASTAP_DIRS = {
    'Linux': (Path('/opt/astap/'), ''),
    'Darwin': (Path('/usr/local/opt/astap/'), ''),
    'Windows': (Path('C:/Program Files/astap/'), '.exe'),
}

DATABASE_SUFFIXES = ('.290', '.1476', '.001')
ITERATION_BANNER = 'ASTAP solver version'


class AstapInitError(PlateSolveError):
    """Wrapper could not be created. Check the setup instructions."""


class UnsupportedOsError(AstapInitError):
    def __init__(self, os_name: str):
        super().__init__(f"Unsupported OS: {os_name}")
        self.os_name = os_name


class SolverNotFoundError(AstapInitError):
    def __init__(self, path: Path):
        super().__init__(f"Solver not found: {path}")
        self.path = path


class DatabaseNotFoundError(AstapInitError):
    def __init__(self, directory: Path):
        super().__init__(f"Star database not found in {directory}")
        self.directory = directory


class AstapSolverError(PlateSolveError):
    """Solver runtime failure."""


class IterationsExceededError(AstapSolverError):
    def __init__(self):
        super().__init__("Solver iterations exceeded. Try increasing guess fov.")


def default_install(system: Optional[str] = None) -> Tuple[Path, str]:
    """
    ASTAP install directory and executable suffix for a host OS.

    Args:
        system: OS name as reported by platform.system() (default: this host)
    """
    system = system or platform.system()
    try:
        return ASTAP_DIRS[system]
    except KeyError:
        raise UnsupportedOsError(system) from None


class AstapSolver(PlateSolver):
    """
    ASTAP plate solver wrapper.

    Creating an instance does not start anything, but checks that the CLI
    executable and star database files can be found.

    Usage:
        solver = AstapSolver()
        result = solver.solve("image.jpg", PlateSolverOptions(fov_guess=Angle.from_degrees(10)))
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None,
                 max_iterations: int = 3,
                 poll_interval: float = 0.1):
        """
        Args:
            base_dir: Directory holding astap_cli and the database
                      (None = platform default)
            max_iterations: Solver restarts allowed before the process is killed
            poll_interval: Process polling period in seconds
        """
        if base_dir is None:
            base_dir, suffix = default_install()
        else:
            suffix = '.exe' if platform.system() == 'Windows' else ''
        self.base_dir = Path(base_dir)
        self.max_iterations = max_iterations
        self.poll_interval = poll_interval

        self.cli_path = self.base_dir / f"astap_cli{suffix}"
        self._check_install()

        logger.info(f"ASTAP solver found at {self.cli_path}")

    @classmethod
    def from_config(cls, config) -> "AstapSolver":
        """Create a solver from a SolverConfig."""
        return cls(
            base_dir=config.astap_dir,
            max_iterations=config.max_iterations,
            poll_interval=config.poll_interval_s,
        )

    def _check_install(self) -> None:
        try:
            if not self.cli_path.exists():
                raise SolverNotFoundError(self.cli_path)
            has_database = any(
                p.suffix in DATABASE_SUFFIXES for p in self.base_dir.iterdir()
            )
        except OSError as e:
            raise AstapInitError(f"Could not inspect {self.base_dir}: {e}") from e

        if not has_database:
            raise DatabaseNotFoundError(self.base_dir)

    def command(self, image_path: Union[str, Path],
                options: Optional[PlateSolverOptions] = None) -> list:
        """Command line used to solve an image."""
        cmd = [str(self.cli_path), "-f", str(image_path)]
        if options is not None and options.fov_guess is not None:
            cmd.extend(["-fov", str(options.fov_guess.degrees())])
        return cmd

    def solve(self, image_path: Union[str, Path],
              options: Optional[PlateSolverOptions] = None) -> PlateSolveResult:
        """
        Solve an image with astap_cli.

        ASTAP restarts its search with a new banner line when a pass fails;
        once ``max_iterations`` banners are seen before the process exits,
        it is killed.

        Raises:
            AstapSolverError: Process could not be started or ran too long
            WcsReadError: Output file missing or malformed
        """
        cmd = self.command(image_path, options)
        logger.info(f"Solving {image_path}")
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise AstapSolverError(f"Could not start {self.cli_path}: {e}") from e

        exceeded = threading.Event()
        reader = threading.Thread(
            target=self._watch_output, args=(proc.stdout, exceeded), daemon=True
        )
        reader.start()

        try:
            while proc.poll() is None:
                if exceeded.wait(self.poll_interval):
                    proc.kill()
                    proc.wait()
                    logger.warning(f"ASTAP exceeded {self.max_iterations} iterations on {image_path}")
                    raise IterationsExceededError()
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            reader.join(timeout=1.0)
            proc.stdout.close()

        logger.debug(f"astap_cli exited with code {proc.returncode}")

        result = read_wcs(wcs_path_for(image_path))
        logger.info(f"Solved: RA={result.coord.ra.degrees():.4f}°, "
                    f"Dec={result.coord.dec.degrees():.4f}°")
        return result

    def _watch_output(self, stdout, exceeded: threading.Event) -> None:
        """Count solver banners on stdout (runs on the reader thread)."""
        count = 0
        try:
            for line in stdout:
                logger.debug(f"astap: {line.rstrip()}")
                if line.startswith(ITERATION_BANNER):
                    count += 1
                    if count >= self.max_iterations:
                        exceeded.set()
        except (OSError, ValueError) as e:
            logger.error(f"Lost astap_cli output after {count} iterations: {e}")
