from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

import pytest

from core.astro import InvalidCoordinateError, get_moon_fraction, get_moon_position
from core.coordinates import RAD, altitude, sidereal_time
from core.moon import moon_coords, moon_fraction, refracted_altitude
from core.timeconv import to_days

from conftest import KYIV_LAT, KYIV_LNG


def test_moon_position(kyiv_date: datetime) -> None:
    position = get_moon_position(kyiv_date, KYIV_LAT, KYIV_LNG)
    assert position.azimuth == pytest.approx(-0.9783999522438226, abs=1e-9)
    assert position.distance == pytest.approx(364121.37256256194, rel=1e-9)


def test_moon_altitude_is_refracted(kyiv_date: datetime) -> None:
    d = to_days(kyiv_date)
    coords = moon_coords(d)
    H = sidereal_time(d, RAD * -KYIV_LNG) - coords.right_ascension
    geometric = altitude(H, RAD * KYIV_LAT, coords.declination)

    position = get_moon_position(kyiv_date, KYIV_LAT, KYIV_LNG)
    assert position.altitude == refracted_altitude(geometric)
    assert position.altitude != geometric
    assert position.declination == coords.declination
    assert position.right_ascension == coords.right_ascension


def test_refraction_formula() -> None:
    h = 0.1
    expected = h + 0.017 * RAD / math.tan(h + 10.26 * RAD / (h + 5.10 * RAD))
    assert refracted_altitude(h) == pytest.approx(expected, rel=1e-12)
    assert math.isnan(refracted_altitude(math.nan))


def test_refraction_singularity_does_not_raise() -> None:
    refracted_altitude(-5.10 * RAD)


def test_moon_distance_stays_within_orbit_bounds() -> None:
    start = to_days(datetime(2013, 1, 1, tzinfo=UTC))
    for step in range(0, 120):
        distance = moon_coords(start + step * 0.25).distance
        assert 385001 - 20905 <= distance <= 385001 + 20905


def test_moon_fraction(kyiv_date: datetime) -> None:
    assert get_moon_fraction(kyiv_date) == pytest.approx(0.4848068202456373, abs=1e-9)


def test_moon_fraction_full_and_new_moon() -> None:
    # Full moon 2013-03-27 09:27 UTC, new moon 2013-03-11 19:51 UTC.
    assert get_moon_fraction(datetime(2013, 3, 27, 9, 27, tzinfo=UTC)) > 0.99
    assert get_moon_fraction(datetime(2013, 3, 11, 19, 51, tzinfo=UTC)) < 0.01


def test_moon_fraction_is_within_unit_interval() -> None:
    start = datetime(2013, 1, 1, tzinfo=UTC)
    for hours in range(0, 24 * 60, 6):
        fraction = get_moon_fraction(start + timedelta(hours=hours))
        assert 0.0 <= fraction <= 1.0


def test_moon_fraction_by_day_offset_matches_api(kyiv_date: datetime) -> None:
    assert moon_fraction(to_days(kyiv_date)) == get_moon_fraction(kyiv_date)


def test_moon_position_strict_mode(kyiv_date: datetime) -> None:
    with pytest.raises(InvalidCoordinateError):
        get_moon_position(kyiv_date, -91.0, 0.0, strict=True)
    assert math.isnan(get_moon_position(kyiv_date, math.nan, 0.0).azimuth)
