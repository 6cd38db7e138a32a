"""
Celestial and terrestrial coordinates.

Handles conversion between:
- Equatorial coordinates (RA/Dec) at a given date
- Horizontal coordinates (Alt/Az) for an observer on the ground
- Image pixel coordinates and sky coordinates (affine plate solution)
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

from .angle import Angle, FULL_TURN, HALF_TURN
from .julian import JulianDate, J2000
from .sidereal import local_sidereal_time


@dataclass(frozen=True)
class GroundCoord:
    """Observer's location on Earth."""
    lat: Angle = field(default_factory=Angle)   # North positive
    long: Angle = field(default_factory=Angle)  # East positive / West negative

    @classmethod
    def from_lat_long(cls, lat: Angle, long: Angle) -> "GroundCoord":
        return cls(lat=lat, long=long)

    def lat_long(self) -> Tuple[Angle, Angle]:
        return self.lat, self.long


@dataclass(frozen=True)
class SkyCoord:
    """
    Equatorial position tagged with the date it is valid at.

    The date is the instant used for the sidereal time when converting to
    horizontal coordinates, so alt/az conversion only needs an observer.
    """
    ra: Angle = field(default_factory=Angle)    # Right ascension
    dec: Angle = field(default_factory=Angle)   # Declination (-90° to +90°)
    date: JulianDate = J2000

    @classmethod
    def from_ra_dec(cls, ra: Angle, dec: Angle) -> "SkyCoord":
        return cls(ra=ra, dec=dec, date=J2000)

    @classmethod
    def from_ra_dec_date(cls, ra: Angle, dec: Angle, date: JulianDate) -> "SkyCoord":
        return cls(ra=ra, dec=dec, date=date)

    def ra_dec(self) -> Tuple[Angle, Angle]:
        return self.ra, self.dec

    def with_date(self, date: JulianDate) -> "SkyCoord":
        """Same RA/Dec interpreted at another date."""
        return SkyCoord(ra=self.ra, dec=self.dec, date=date)

    def alt_az(self, ground_pos: GroundCoord) -> Tuple[Angle, Angle]:
        """
        Convert to horizontal coordinates for an observer.

        Meeus, Astronomical Algorithms, eq. 13.5 and 13.6, modified so that
        west longitudes are negative and azimuth 0 is North.

        Args:
            ground_pos: Observer location

        Returns:
            (altitude, azimuth) with azimuth in [0°, 360°) measured from
            North through East
        """
        lat, long = ground_pos.lat_long()
        lst = local_sidereal_time(self.date, long)

        # Hour angle folded into (-180°, 180°]
        h = lst - self.ra
        if h.degrees() < 0.0:
            h = h + FULL_TURN
        if h > HALF_TURN:
            h = h - FULL_TURN

        az = Angle.atan2(h.sin(), h.cos() * lat.sin() - self.dec.tan() * lat.cos()) - HALF_TURN
        if az.degrees() < 0.0:
            az = az + FULL_TURN
        # x + 360 can round up to exactly 360
        az = az.normalize()

        alt = Angle.asin(lat.sin() * self.dec.sin() + lat.cos() * self.dec.cos() * h.cos())

        return alt, az


class WorldTransform:
    """
    Affine transformation from pixel (x, y) to world (ra, dec) in degrees.

    The linear part is given column-major, as the plate solver's CD
    keywords ``[CD1_1, CD1_2, CD2_1, CD2_2]``::

        ra  = CD1_1 * x + CD2_1 * y + t[0]
        dec = CD1_2 * x + CD2_2 * y + t[1]

    Internally stored as a 3x3 homogeneous matrix. The inverse uses the
    closed-form 2x2 inverse; a singular linear part gives non-finite
    world-to-pixel results rather than an exception.
    """

    def __init__(self, mat2: Sequence[float] = (1.0, 0.0, 0.0, 1.0),
                 translation: Sequence[float] = (0.0, 0.0)):
        """
        Args:
            mat2: Linear part, four numbers in column-major order
            translation: World coordinate of pixel (0, 0) in degrees
        """
        a00, a10, a01, a11 = (float(v) for v in mat2)
        tx, ty = (float(v) for v in translation)

        self._forward = np.array([
            [a00, a01, tx],
            [a10, a11, ty],
            [0.0, 0.0, 1.0],
        ])
        self._inverse_linear = self._invert(self._forward[:2, :2])

    @classmethod
    def from_mat2_translation(cls, mat2: Sequence[float],
                              translation: Sequence[float]) -> "WorldTransform":
        return cls(mat2, translation)

    @staticmethod
    def _invert(linear: np.ndarray) -> np.ndarray:
        (a, b), (c, d) = linear
        with np.errstate(divide='ignore', invalid='ignore'):
            inv_det = np.float64(1.0) / (a * d - b * c)
            return np.array([[d, -b], [-c, a]]) * inv_det

    def matrix(self) -> np.ndarray:
        """2x2 linear part (row-major numpy array)."""
        return self._forward[:2, :2].copy()

    def translation(self) -> np.ndarray:
        return self._forward[:2, 2].copy()

    def determinant(self) -> float:
        m = self._forward
        return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def pixel_scale(self) -> Angle:
        """Mean pixel scale (angle per pixel)."""
        return Angle.from_degrees(float(np.sqrt(abs(self.determinant()))))

    def orientation(self) -> Angle:
        """Direction of the pixel +y axis, east of north, in [0°, 360°)."""
        m = self._forward
        return Angle.atan2(float(m[0, 1]), float(m[1, 1])).normalize()

    def pixel_to_world(self, pixel_coord: Tuple[float, float],
                       date: Optional[JulianDate] = None) -> SkyCoord:
        """
        Map a pixel to sky coordinates.

        Args:
            pixel_coord: (x, y) pixel coordinates
            date: Date attached to the result (default J2000)
        """
        px = np.array([pixel_coord[0], pixel_coord[1], 1.0])
        ra, dec, _ = self._forward @ px
        return SkyCoord(
            ra=Angle.from_degrees(float(ra)),
            dec=Angle.from_degrees(float(dec)),
            date=J2000 if date is None else date,
        )

    def world_to_pixel(self, world_coord: SkyCoord) -> Tuple[float, float]:
        """Map sky coordinates back to (x, y) pixel coordinates."""
        ra, dec = world_coord.ra_dec()
        offset = np.array([ra.degrees(), dec.degrees()]) - self._forward[:2, 2]
        with np.errstate(invalid='ignore', over='ignore'):
            x, y = self._inverse_linear @ offset
        return float(x), float(y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, WorldTransform):
            return NotImplemented
        return bool(np.array_equal(self._forward, other._forward))

    def __hash__(self) -> int:
        return hash(tuple(self._forward.ravel().tolist()))

    def __repr__(self) -> str:
        m = self._forward
        return (f"WorldTransform(mat2=[{m[0, 0]!r}, {m[1, 0]!r}, {m[0, 1]!r}, {m[1, 1]!r}], "
                f"translation=[{m[0, 2]!r}, {m[1, 2]!r}])")
