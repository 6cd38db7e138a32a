"""
Reader for the WCS sidecar file written by plate solvers.

The solver writes a plain-text FITS header next to the image, with the
same base name and a ``.wcs`` extension. Only the reference value and the
CD matrix are used; the reference value doubles as the translation of
the affine pixel-to-world transform.
"""

from pathlib import Path
from typing import Union
import logging

from astropy.io import fits
from astropy.io.fits.verify import VerifyError

from ..angle import Angle
from ..coords import SkyCoord, WorldTransform
from .base import PlateSolveError, PlateSolveResult


logger = logging.getLogger(__name__)

WCS_KEYS = ('CRVAL1', 'CRVAL2', 'CD1_1', 'CD1_2', 'CD2_1', 'CD2_2')


class WcsReadError(PlateSolveError):
    """The WCS file could not be read or holds a non-numeric value."""


def wcs_path_for(image_path: Union[str, Path]) -> Path:
    """Sibling ``.wcs`` path for an image."""
    return Path(image_path).with_suffix('.wcs')


def read_wcs(wcs_path: Union[str, Path]) -> PlateSolveResult:
    """
    Parse a ``.wcs`` header file into a PlateSolveResult.

    Missing keywords are taken as 0.0.

    Args:
        wcs_path: Path to the header file

    Returns:
        PlateSolveResult with the reference coordinate and the CD transform

    Raises:
        WcsReadError: On I/O failure or a non-numeric or unparsable keyword value
    """
    try:
        header = fits.Header.fromtextfile(str(wcs_path), endcard=False)
    except OSError as e:
        raise WcsReadError(f"Could not read WCS file {wcs_path}: {e}") from e

    values = {}
    for key in WCS_KEYS:
        try:
            raw = header.get(key, 0.0)
        except VerifyError as e:
            raise WcsReadError(f"{key} in {wcs_path} is unparsable: {e}") from e
        if isinstance(raw, bool):
            raise WcsReadError(f"{key} in {wcs_path} is not a number: {raw!r}")
        try:
            values[key] = float(raw)
        except (TypeError, ValueError) as e:
            raise WcsReadError(f"{key} in {wcs_path} is not a number: {raw!r}") from e

    missing = [key for key in WCS_KEYS if key not in header]
    if missing:
        logger.warning(f"{wcs_path}: missing {', '.join(missing)}, using 0.0")

    ra, dec = values['CRVAL1'], values['CRVAL2']
    cd = [values['CD1_1'], values['CD1_2'], values['CD2_1'], values['CD2_2']]

    logger.debug(f"WCS {wcs_path}: CRVAL=({ra}, {dec}), CD={cd}")

    return PlateSolveResult(
        coord=SkyCoord.from_ra_dec(Angle.from_degrees(ra), Angle.from_degrees(dec)),
        transform=WorldTransform.from_mat2_translation(cd, [ra, dec]),
    )
