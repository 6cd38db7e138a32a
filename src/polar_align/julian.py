"""
Julian dates and intervals.

A JulianDate is an instant expressed as a real count of days since the
Julian epoch; the difference of two dates is a JulianInterval in days.
Calendar conversion is deliberately not handled here - callers supply
Julian Dates directly (treated as UT1).
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class JulianInterval:
    """Signed duration measured in days."""
    value: float = 0.0  # days

    def julian(self) -> float:
        return self.value

    def days(self) -> float:
        return self.value

    def __add__(self, other: "JulianInterval") -> "JulianInterval":
        if not isinstance(other, JulianInterval):
            return NotImplemented
        return JulianInterval(self.value + other.value)

    def __sub__(self, other: "JulianInterval") -> "JulianInterval":
        if not isinstance(other, JulianInterval):
            return NotImplemented
        return JulianInterval(self.value - other.value)

    def __mul__(self, other: "JulianInterval") -> "JulianInterval":
        if not isinstance(other, JulianInterval):
            return NotImplemented
        return JulianInterval(self.value * other.value)

    def __truediv__(self, other: "JulianInterval") -> "JulianInterval":
        if not isinstance(other, JulianInterval):
            return NotImplemented
        return JulianInterval(self.value / other.value)

    def __neg__(self) -> "JulianInterval":
        return JulianInterval(-self.value)

    def __float__(self) -> float:
        return self.value


@dataclass(frozen=True, order=True)
class JulianDate:
    """Instant as a Julian Date (days since the Julian epoch)."""
    value: float = 0.0  # days

    def julian(self) -> float:
        return self.value

    def frac(self) -> JulianInterval:
        """Sub-day remainder of the date."""
        return JulianInterval(self.value % 1.0)

    def __sub__(self, other):
        if isinstance(other, JulianDate):
            return JulianInterval(self.value - other.value)
        if isinstance(other, JulianInterval):
            return JulianDate(self.value - other.value)
        return NotImplemented

    def __add__(self, other: JulianInterval) -> "JulianDate":
        if not isinstance(other, JulianInterval):
            return NotImplemented
        return JulianDate(self.value + other.value)

    def __float__(self) -> float:
        return self.value


J2000 = JulianDate(2451545.0)
JULIAN_CENTURY = JulianInterval(36525.0)

JulianDate.J2000 = J2000
JulianInterval.JULIAN_CENTURY = JULIAN_CENTURY
