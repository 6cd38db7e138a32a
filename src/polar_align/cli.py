"""
Command-line interface for polar alignment.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import logging

import click
import yaml

from .angle import Angle
from .config import Config
from .coords import GroundCoord, SkyCoord
from .julian import JulianDate
from .sidereal import earth_rotation_angle, greenwich_mean_sidereal_time, local_sidereal_time
from .solver import AstapSolver, PlateSolveError, PlateSolverOptions, read_wcs


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def julian_date_from_datetime(dt: datetime) -> JulianDate:
    """
    Julian Date of a datetime (Meeus, Astronomical Algorithms, ch. 7).

    Naive datetimes are taken as UTC. UTC is used in place of UT1.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    year = dt.year
    month = dt.month
    day = (dt.day + dt.hour / 24.0 + dt.minute / 1440.0
           + (dt.second + dt.microsecond / 1e6) / 86400.0)

    if month <= 2:
        year -= 1
        month += 12

    A = int(year / 100)
    B = 2 - A + int(A / 4)

    jd = int(365.25 * (year + 4716)) + int(30.6001 * (month + 1)) + day + B - 1524.5

    return JulianDate(jd)


def _resolve_date(jd: Optional[float], utc: Optional[datetime]) -> JulianDate:
    if jd is not None and utc is not None:
        raise click.UsageError("Give either --jd or --utc, not both")
    if jd is not None:
        return JulianDate(jd)
    if utc is not None:
        return julian_date_from_datetime(utc)
    return julian_date_from_datetime(datetime.now(timezone.utc))


def _load_config(config: Optional[Path]) -> Config:
    if not config:
        return Config()
    try:
        return Config.from_yaml(config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        click.echo(click.style(f"✗ Error: invalid config {config}: {e}", fg="red"))
        sys.exit(1)


def _observer(cfg: Config, lat: Optional[float], long: Optional[float]) -> GroundCoord:
    if lat is not None:
        cfg.observer.latitude_deg = lat
    if long is not None:
        cfg.observer.longitude_deg = long
    return cfg.observer.ground_coord()


time_options = [
    click.option("--jd", type=float, help="UT1 Julian Date"),
    click.option(
        "--utc",
        type=click.DateTime(formats=["%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M"]),
        help="UTC date and time (default: now)"
    ),
]

observer_options = [
    click.option("--lat", type=float, help="Observer latitude in degrees (North positive)"),
    click.option("--long", "long_", type=float,
                 help="Observer longitude in degrees (West negative)"),
    click.option(
        "-c", "--config",
        type=click.Path(exists=True, path_type=Path),
        help="Configuration YAML file"
    ),
]


def _apply(options):
    def decorator(f):
        for option in reversed(options):
            f = option(f)
        return f
    return decorator


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def main(verbose: bool):
    """Polar Align - sidereal time, alt/az and plate solving for mount alignment."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@_apply(time_options)
def sidereal(jd: Optional[float], utc: Optional[datetime]):
    """
    Show Earth Rotation Angle and Greenwich Mean Sidereal Time.
    """
    date = _resolve_date(jd, utc)
    era = earth_rotation_angle(date)
    gmst = greenwich_mean_sidereal_time(date).normalize()

    click.echo(f"JD:   {date.julian():.6f}")
    click.echo(f"ERA:  {era.degrees():.6f}° ({era.hms()})")
    click.echo(f"GMST: {gmst.degrees():.6f}° ({gmst.hms()})")


@main.command()
@click.option("--ra", type=float, required=True, help="Right ascension in degrees")
@click.option("--dec", type=float, required=True, help="Declination in degrees")
@_apply(time_options)
@_apply(observer_options)
def altaz(ra: float, dec: float, jd: Optional[float], utc: Optional[datetime],
          lat: Optional[float], long_: Optional[float], config: Optional[Path]):
    """
    Convert RA/Dec to altitude and azimuth for an observer.
    """
    cfg = _load_config(config)
    ground = _observer(cfg, lat, long_)
    date = _resolve_date(jd, utc)

    coord = SkyCoord.from_ra_dec_date(Angle.from_degrees(ra), Angle.from_degrees(dec), date)
    alt, az = coord.alt_az(ground)
    lst = local_sidereal_time(date, ground.long)

    click.echo(f"LST:       {lst.degrees():.6f}° ({lst.hms()})")
    click.echo(f"Altitude:  {alt.degrees():.6f}°")
    click.echo(f"Azimuth:   {az.degrees():.6f}°")


@main.command()
@click.argument("image_path", type=click.Path(exists=True, path_type=Path))
@click.option("--fov", type=float, help="Field of view guess in degrees")
@click.option("--astap-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory holding astap_cli and its star database")
@_apply(time_options)
@_apply(observer_options)
def solve(image_path: Path, fov: Optional[float], astap_dir: Optional[Path],
          jd: Optional[float], utc: Optional[datetime],
          lat: Optional[float], long_: Optional[float], config: Optional[Path]):
    """
    Plate solve an image with ASTAP.

    IMAGE_PATH: Path to the image to solve
    """
    cfg = _load_config(config)
    if fov is not None:
        cfg.solver.fov_guess_deg = fov
    if astap_dir is not None:
        cfg.solver.astap_dir = astap_dir

    try:
        solver = AstapSolver.from_config(cfg.solver)
        result = solver.solve(image_path, cfg.solver.options())
    except PlateSolveError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"))
        sys.exit(1)

    _echo_solution(result)

    if lat is not None or long_ is not None or config:
        ground = _observer(cfg, lat, long_)
        date = _resolve_date(jd, utc)
        alt, az = result.coord.with_date(date).alt_az(ground)
        click.echo(f"  Altitude: {alt.degrees():.4f}°")
        click.echo(f"  Azimuth:  {az.degrees():.4f}°")


@main.command()
@click.argument("wcs_path", type=click.Path(exists=True, path_type=Path))
@click.option("-p", "--pixel", "pixels", type=(float, float), multiple=True,
              help="Pixel (x y) to map to RA/Dec; may be repeated")
def wcs(wcs_path: Path, pixels):
    """
    Show the solution stored in a .wcs file.

    WCS_PATH: Path to the .wcs file written by the solver
    """
    try:
        result = read_wcs(wcs_path)
    except PlateSolveError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"))
        sys.exit(1)

    _echo_solution(result)

    for x, y in pixels:
        sky = result.transform.pixel_to_world((x, y))
        click.echo(f"  ({x:g}, {y:g}) -> RA={sky.ra.degrees():.6f}°, Dec={sky.dec.degrees():.6f}°")


def _echo_solution(result) -> None:
    ra, dec = result.coord.ra_dec()
    transform = result.transform

    click.echo(click.style("✓ Solved", fg="green"))
    click.echo(f"  RA:  {ra.degrees():.6f}° ({ra.hms()})")
    click.echo(f"  Dec: {dec.degrees():.6f}° ({dec.dms()})")
    click.echo(f"  Pixel scale: {transform.pixel_scale().arcseconds():.2f} arcsec/pixel")
    click.echo(f"  Orientation: {transform.orientation().degrees():.2f}° E of N")


@main.command()
@click.argument("output_path", type=click.Path(path_type=Path))
def init_config(output_path: Path):
    """
    Create a default configuration file.
    """
    cfg = Config()
    cfg.to_yaml(output_path)
    click.echo(f"Created configuration file: {output_path}")


if __name__ == "__main__":
    main()
