from __future__ import annotations

import math

import pytest

from polar_align.angle import Angle, FULL_TURN, HALF_TURN

DEGREE_SAMPLES = [0.0, 1.5, -45.0, 90.0, 359.999, 360.0, 720.25, -1e6, 1e-12, -1e-20]


@pytest.mark.parametrize("deg", DEGREE_SAMPLES)
def test_degrees_round_trip_is_exact(deg: float) -> None:
    assert Angle.from_degrees(deg).degrees() == deg


@pytest.mark.parametrize("deg", DEGREE_SAMPLES)
def test_radians_round_trip(deg: float) -> None:
    angle = Angle.from_degrees(deg)
    back = Angle.from_radians(angle.radians())
    assert back.degrees() == pytest.approx(deg, rel=1e-12, abs=1e-15)


def test_unit_readouts() -> None:
    assert Angle.from_degrees(180.0).radians() == pytest.approx(math.pi)
    assert Angle.from_degrees(90.0).rotations() == 0.25
    assert Angle.from_rotations(0.25).degrees() == 90.0
    assert Angle.from_radians(math.pi / 2).degrees() == pytest.approx(90.0)
    assert Angle.from_arcseconds(3600.0).degrees() == 1.0
    assert Angle.from_degrees(0.5).arcseconds() == 1800.0


def test_constants() -> None:
    assert HALF_TURN.degrees() == 180.0
    assert HALF_TURN.radians() == pytest.approx(math.pi)
    assert FULL_TURN.degrees() == 360.0
    assert FULL_TURN.radians() == pytest.approx(2 * math.pi)
    assert Angle.HALF_TURN == HALF_TURN
    assert Angle.FULL_TURN == FULL_TURN


def test_default_is_zero() -> None:
    assert Angle() == Angle.from_degrees(0.0)
    assert Angle().degrees() == 0.0


@pytest.mark.parametrize("deg", DEGREE_SAMPLES + [-30.0, -360.0, 1e9 + 0.5])
def test_normalize_range_and_idempotence(deg: float) -> None:
    once = Angle.from_degrees(deg).normalize()
    assert 0.0 <= once.degrees() < 360.0
    assert once.normalize() == once


@pytest.mark.parametrize(
    ("deg", "expected"),
    [(-30.0, 330.0), (720.0, 0.0), (360.0, 0.0), (370.5, 10.5), (-720.0, 0.0), (-1e-20, 0.0)],
)
def test_normalize_values(deg: float, expected: float) -> None:
    assert Angle.from_degrees(deg).normalize().degrees() == pytest.approx(expected)


def test_arithmetic_acts_on_degrees() -> None:
    a = Angle.from_degrees(30.0)
    b = Angle.from_degrees(12.0)

    assert (a + b).degrees() == 42.0
    assert (a - b).degrees() == 18.0
    assert (a * b).degrees() == 360.0
    assert (a / b).degrees() == 2.5
    assert (-a).degrees() == -30.0
    assert abs(Angle.from_degrees(-5.0)).degrees() == 5.0


def test_scalar_scaling() -> None:
    a = Angle.from_degrees(10.0)
    assert (a * 2).degrees() == 20.0
    assert (2.5 * a).degrees() == 25.0
    assert (a / 4).degrees() == 2.5


def test_remainder_is_floored() -> None:
    assert (Angle.from_degrees(370.0) % FULL_TURN).degrees() == pytest.approx(10.0)
    assert (Angle.from_degrees(-10.0) % FULL_TURN).degrees() == pytest.approx(350.0)
    assert (Angle.from_degrees(100.0) % HALF_TURN).degrees() == 100.0


def test_values_are_immutable() -> None:
    a = Angle.from_degrees(1.0)
    with pytest.raises(AttributeError):
        a.value = 2.0  # type: ignore[misc]
    a + Angle.from_degrees(1.0)
    assert a.degrees() == 1.0


def test_total_ordering() -> None:
    angles = [Angle.from_degrees(d) for d in (90.0, -10.0, 45.0, 0.0)]
    assert [a.degrees() for a in sorted(angles)] == [-10.0, 0.0, 45.0, 90.0]
    assert Angle.from_degrees(1.0) < Angle.from_degrees(2.0)
    assert Angle.from_degrees(2.0) >= Angle.from_degrees(2.0)
    assert len({Angle.from_degrees(5.0), Angle.from_degrees(5.0)}) == 1


def test_trigonometry_uses_radians() -> None:
    assert Angle.from_degrees(30.0).sin() == pytest.approx(0.5)
    assert Angle.from_degrees(60.0).cos() == pytest.approx(0.5)
    assert Angle.from_degrees(45.0).tan() == pytest.approx(1.0)

    one_rad = Angle.from_radians(1.0)
    assert one_rad.sinh() == pytest.approx(math.sinh(1.0))
    assert one_rad.cosh() == pytest.approx(math.cosh(1.0))
    assert one_rad.tanh() == pytest.approx(math.tanh(1.0))


def test_inverse_trigonometry_constructors() -> None:
    assert Angle.asin(0.5).degrees() == pytest.approx(30.0)
    assert Angle.acos(0.0).degrees() == pytest.approx(90.0)
    assert Angle.atan(1.0).degrees() == pytest.approx(45.0)
    assert Angle.atan2(1.0, -1.0).degrees() == pytest.approx(135.0)
    assert Angle.atan2(-1.0, 0.0).degrees() == pytest.approx(-90.0)


def test_nan_propagates() -> None:
    nan = Angle.from_degrees(float("nan"))
    assert math.isnan(nan.normalize().degrees())
    assert math.isnan((nan + Angle.from_degrees(1.0)).degrees())
    assert math.isnan(nan.sin())


def test_sexagesimal_formatting() -> None:
    assert Angle.from_degrees(180.0).hms() == "12h 00m 00.00s"
    assert Angle.from_degrees(-15.0).hms() == "23h 00m 00.00s"
    assert Angle.from_degrees(-30.25).dms() == "-30° 15' 00.0\""
    assert Angle.from_degrees(45.5).dms() == "+45° 30' 00.0\""


def test_sexagesimal_formatting_carries_rounded_seconds() -> None:
    assert Angle.from_degrees(359.99999999).hms() == "00h 00m 00.00s"
    assert Angle.from_degrees(14.9999999999).hms() == "01h 00m 00.00s"
    assert Angle.from_degrees(29.99999999).dms() == "+30° 00' 00.0\""
    assert Angle.from_degrees(-0.99999999).dms() == "-01° 00' 00.0\""
    assert Angle.from_degrees(15.0 * (1 + 2 / 60 + 3.456 / 3600)).hms() == "01h 02m 03.46s"
