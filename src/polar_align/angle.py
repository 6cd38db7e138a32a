"""
Angle value type.

An Angle stores a single real number in degrees, but callers should treat
the unit as an implementation detail and go through the explicit
constructors and accessors (degrees, radians, full rotations).

All operations return new values; an Angle is never mutated in place.
"""

import math
from dataclasses import dataclass
from typing import Union


ARCSEC_PER_DEGREE = 3600.0


@dataclass(frozen=True, order=True)
class Angle:
    """
    Scalar angular quantity.

    Arithmetic between two Angles acts on their degree values. Note that
    ``Angle * Angle`` and ``Angle / Angle`` are plain operations on the
    degree-valued scalars, not solid angles. Multiplying or dividing by a
    plain number scales the angle.
    """
    value: float = 0.0  # degrees

    # Constructors

    @classmethod
    def from_degrees(cls, deg: float) -> "Angle":
        return cls(float(deg))

    @classmethod
    def from_radians(cls, rad: float) -> "Angle":
        return cls(math.degrees(rad))

    @classmethod
    def from_rotations(cls, rot: float) -> "Angle":
        return cls(rot * 360.0)

    @classmethod
    def from_arcseconds(cls, arcsec: float) -> "Angle":
        return cls(arcsec / ARCSEC_PER_DEGREE)

    # Accessors

    def degrees(self) -> float:
        return self.value

    def radians(self) -> float:
        return math.radians(self.value)

    def rotations(self) -> float:
        return self.value / 360.0

    def arcseconds(self) -> float:
        return self.value * ARCSEC_PER_DEGREE

    def normalize(self) -> "Angle":
        """Return the equivalent angle in [0°, 360°)."""
        return Angle(((self.value % 360.0) + 360.0) % 360.0)

    # Arithmetic

    def __add__(self, other: "Angle") -> "Angle":
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.value + other.value)

    def __sub__(self, other: "Angle") -> "Angle":
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.value - other.value)

    def __mul__(self, other: Union["Angle", float]) -> "Angle":
        if isinstance(other, Angle):
            return Angle(self.value * other.value)
        if isinstance(other, (int, float)):
            return Angle(self.value * other)
        return NotImplemented

    def __rmul__(self, other: float) -> "Angle":
        if isinstance(other, (int, float)):
            return Angle(other * self.value)
        return NotImplemented

    def __truediv__(self, other: Union["Angle", float]) -> "Angle":
        if isinstance(other, Angle):
            return Angle(self.value / other.value)
        if isinstance(other, (int, float)):
            return Angle(self.value / other)
        return NotImplemented

    def __mod__(self, other: "Angle") -> "Angle":
        # Floored modulo: the result takes the sign of the divisor
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.value % other.value)

    def __neg__(self) -> "Angle":
        return Angle(-self.value)

    def __abs__(self) -> "Angle":
        return Angle(abs(self.value))

    # Trigonometry (raw floats out)

    def sin(self) -> float:
        return math.sin(self.radians())

    def cos(self) -> float:
        return math.cos(self.radians())

    def tan(self) -> float:
        return math.tan(self.radians())

    def sinh(self) -> float:
        return math.sinh(self.radians())

    def cosh(self) -> float:
        return math.cosh(self.radians())

    def tanh(self) -> float:
        return math.tanh(self.radians())

    # Inverse trigonometry (raw floats in)

    @classmethod
    def asin(cls, x: float) -> "Angle":
        return cls.from_radians(math.asin(x))

    @classmethod
    def acos(cls, x: float) -> "Angle":
        return cls.from_radians(math.acos(x))

    @classmethod
    def atan(cls, x: float) -> "Angle":
        return cls.from_radians(math.atan(x))

    @classmethod
    def atan2(cls, y: float, x: float) -> "Angle":
        return cls.from_radians(math.atan2(y, x))

    # Display

    def hms(self) -> str:
        """Format as hours:minutes:seconds (for right ascension)."""
        # Hundredths of a second, wrapped so 23h 59m 59.999s shows as 00h
        cs = round(self.normalize().value / 15.0 * 360000) % (24 * 360000)
        h, rem = divmod(cs, 360000)
        m, rem = divmod(rem, 6000)
        s = rem / 100.0
        return f"{h:02d}h {m:02d}m {s:05.2f}s"

    def dms(self) -> str:
        """Format as signed degrees:arcmin:arcsec (for declination)."""
        sign = '+' if self.value >= 0 else '-'
        # Tenths of an arcsecond
        ds = round(abs(self.value) * 36000)
        deg, rem = divmod(ds, 36000)
        m, rem = divmod(rem, 600)
        s = rem / 10.0
        return f"{sign}{deg:02d}° {m:02d}' {s:04.1f}\""

    def __str__(self) -> str:
        return f"{self.value}°"


HALF_TURN = Angle(180.0)
FULL_TURN = Angle(360.0)

Angle.HALF_TURN = HALF_TURN
Angle.FULL_TURN = FULL_TURN
