"""Sun position, sunlight phases, moon position and moon illumination.

Coordinate conventions used throughout:

* latitude and longitude are degrees, longitude positive east;
* azimuth is radians measured from south, increasing towards the west
  (add ``pi`` for a north-based compass bearing);
* altitude is radians above the horizon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional

from .coordinates import RAD, altitude, azimuth, sidereal_time
from .events import solve_phases
from .moon import moon_coords, moon_fraction, refracted_altitude
from .phases import DEFAULT_PHASES, DayPhase
from .sun import sun_coords
from .timeconv import from_julian, to_days

__all__ = [
    "SunPosition",
    "MoonPosition",
    "InvalidCoordinateError",
    "get_position",
    "get_times",
    "add_day_phase",
    "get_moon_position",
    "get_moon_fraction",
]


class InvalidCoordinateError(ValueError):
    """Raised in strict mode for latitudes or longitudes out of range."""


@dataclass(frozen=True)
class SunPosition:
    azimuth: float
    altitude: float


@dataclass(frozen=True)
class MoonPosition:
    """Topocentric Moon direction plus its geocentric coordinates.

    ``altitude`` includes the near-horizon refraction correction; ``distance``
    is in kilometres.
    """

    azimuth: float
    altitude: float
    distance: float
    declination: float
    right_ascension: float


def _check_coordinates(lat: float, lng: float) -> None:
    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise InvalidCoordinateError(f"latitude out of range: {lat}")
    if not (math.isfinite(lng) and -180.0 <= lng <= 180.0):
        raise InvalidCoordinateError(f"longitude out of range: {lng}")


def get_position(dt: datetime, lat: float, lng: float, *, strict: bool = False) -> SunPosition:
    """Compute the Sun's azimuth and altitude.

    Parameters
    ----------
    dt:
        Timezone-aware instant.
    lat, lng:
        Observer coordinates in degrees (east-positive longitude).
    strict:
        Reject out-of-range coordinates instead of letting them propagate
        into ``nan`` results.
    """

    if strict:
        _check_coordinates(lat, lng)

    lw = RAD * -lng
    phi = RAD * lat
    d = to_days(dt)

    c = sun_coords(d)
    H = sidereal_time(d, lw) - c.right_ascension

    return SunPosition(
        azimuth=azimuth(H, phi, c.declination),
        altitude=altitude(H, phi, c.declination),
    )


def get_times(
    dt: datetime,
    lat: float,
    lng: float,
    phases: Optional[Iterable[DayPhase]] = None,
    *,
    strict: bool = False,
) -> Dict[str, Optional[datetime]]:
    """Compute sunlight phase times for the solar day nearest to *dt*.

    Parameters
    ----------
    dt:
        Timezone-aware instant selecting the day.
    lat, lng:
        Observer coordinates in degrees (east-positive longitude).
    phases:
        Phase definitions to solve, in order. Defaults to the process-wide
        table extended by :func:`add_day_phase`.
    strict:
        Reject out-of-range coordinates.

    Returns
    -------
    dict
        ``solarNoon``, ``nadir`` and the morning/evening name of every phase
        mapped to UTC datetimes. Crossings that do not happen on that day
        (polar day or night) map to ``None``. When two phases share a name
        the later one wins.
    """

    if strict:
        _check_coordinates(lat, lng)

    solution = solve_phases(
        to_days(dt), lat, lng, DEFAULT_PHASES if phases is None else phases
    )
    transit = solution.transit

    result: Dict[str, Optional[datetime]] = {
        "solarNoon": from_julian(transit.noon),
        "nadir": from_julian(transit.nadir),
    }
    for phase, crossing in solution.phases:
        result[phase.morning_name] = from_julian(crossing.rise)
        result[phase.evening_name] = from_julian(crossing.set)
    return result


def add_day_phase(angle: float, morning_name: str, evening_name: str) -> DayPhase:
    """Register a custom phase in the process-wide table used by :func:`get_times`."""

    return DEFAULT_PHASES.add(angle, morning_name, evening_name)


def get_moon_position(
    dt: datetime, lat: float, lng: float, *, strict: bool = False
) -> MoonPosition:
    """Compute the Moon's position as seen from (*lat*, *lng*)."""

    if strict:
        _check_coordinates(lat, lng)

    lw = RAD * -lng
    phi = RAD * lat
    d = to_days(dt)

    c = moon_coords(d)
    H = sidereal_time(d, lw) - c.right_ascension
    h = altitude(H, phi, c.declination)

    return MoonPosition(
        azimuth=azimuth(H, phi, c.declination),
        altitude=refracted_altitude(h),
        distance=c.distance,
        declination=c.declination,
        right_ascension=c.right_ascension,
    )


def get_moon_fraction(dt: datetime) -> float:
    """Illuminated fraction of the Moon's disk, from 0 (new) to 1 (full)."""

    return moon_fraction(to_days(dt))
