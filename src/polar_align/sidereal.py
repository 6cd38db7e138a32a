"""
Sidereal time.

Earth Rotation Angle and Greenwich Mean Sidereal Time following
"The IAU Resolutions on Astronomical Reference Systems, Time Scales, and
Earth Rotation Models" (G. H. Kaplan, USNO Circular 179),
https://arxiv.org/pdf/astro-ph/0602086.pdf

All functions are pure; inputs are UT1 Julian Dates.
"""

from .angle import Angle, FULL_TURN
from .julian import JulianDate, J2000, JULIAN_CENTURY


# ERA = 2π (ERA_AT_J2000 + ERA_RATE * Tu + frac(JD)), eq. 2.11
ERA_AT_J2000 = 0.7790572732640
ERA_RATE = 0.00273781191135448

# GMST polynomial in arcseconds, eq. 2.12
GMST_POLY = (
    0.014506,
    4612.156534,
    1.3915817,
    -0.00000044,
    -0.000029956,
    -0.0000000368,
)


def earth_rotation_angle(julian_date: JulianDate) -> Angle:
    """
    Earth Rotation Angle for a UT1 Julian Date.

    Returns:
        ERA normalized to [0°, 360°)
    """
    t = julian_date - J2000
    era = ERA_AT_J2000 + ERA_RATE * t.julian() + julian_date.frac().julian()
    return Angle.from_rotations(era).normalize()


def greenwich_mean_sidereal_time(julian_date: JulianDate) -> Angle:
    """
    Greenwich Mean Sidereal Time for a UT1 Julian Date.

    The arcsecond polynomial in Julian centuries since J2000 is added to
    the Earth Rotation Angle. The result is not normalized.
    """
    t = ((julian_date - J2000) / JULIAN_CENTURY).julian()
    era = earth_rotation_angle(julian_date)

    c0, c1, c2, c3, c4, c5 = GMST_POLY
    poly = c0 + c1 * t + c2 * t ** 2 + c3 * t ** 3 + c4 * t ** 4 + c5 * t ** 5

    return era + Angle.from_arcseconds(poly)


def local_sidereal_time(julian_date: JulianDate, longitude: Angle) -> Angle:
    """
    Local sidereal time in [0°, 360°).

    Args:
        julian_date: UT1 Julian Date
        longitude: Observer longitude (east positive, west negative)
    """
    return (greenwich_mean_sidereal_time(julian_date) + longitude) % FULL_TURN
