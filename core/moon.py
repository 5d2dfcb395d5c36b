"""Low-precision lunar ephemeris and illuminated fraction.

Position formulas follow http://aa.quae.nl/en/reken/hemelpositie.html, the
illuminated fraction follows the IDL astrolib ``mphase`` routine.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .coordinates import RAD, declination, right_ascension, safe_acos
from .sun import sun_coords

__all__ = [
    "LunarCoordinates",
    "SUN_DISTANCE_KM",
    "moon_coords",
    "refracted_altitude",
    "moon_fraction",
]

SUN_DISTANCE_KM = 1.49598e8  # mean Earth-Sun distance


@dataclass(frozen=True)
class LunarCoordinates:
    """Geocentric position of the Moon; angles in radians, distance in km."""

    right_ascension: float
    declination: float
    distance: float


def moon_coords(d: float) -> LunarCoordinates:
    """Equatorial coordinates and distance of the Moon *d* days after J2000.0."""

    L = RAD * (218.316 + 13.176396 * d)  # ecliptic longitude
    M = RAD * (134.963 + 13.064993 * d)  # mean anomaly
    # Argument of latitude. Often published as the "mean distance", which it
    # is not; only the numeric term matters here.
    F = RAD * (93.272 + 13.229350 * d)

    with np.errstate(invalid="ignore"):
        lon = L + RAD * 6.289 * float(np.sin(M))
        lat = RAD * 5.128 * float(np.sin(F))
        distance = 385001 - 20905 * float(np.cos(M))

    return LunarCoordinates(
        right_ascension=right_ascension(lon, lat),
        declination=declination(lon, lat),
        distance=distance,
    )


def refracted_altitude(h: float) -> float:
    """Apply the empirical near-horizon refraction correction to altitude *h*.

    Only meaningful close to the horizon; far below it the correction blows
    up or becomes ``nan``.
    """

    h = np.float64(h)
    with np.errstate(invalid="ignore", divide="ignore"):
        return float(h + 0.017 * RAD / np.tan(h + 10.26 * RAD / (h + 5.10 * RAD)))


def moon_fraction(d: float) -> float:
    """Illuminated fraction of the Moon's disk *d* days after J2000.0."""

    s = sun_coords(d)
    m = moon_coords(d)

    with np.errstate(invalid="ignore"):
        phi = safe_acos(
            np.sin(s.declination) * np.sin(m.declination)
            + np.cos(s.declination)
            * np.cos(m.declination)
            * np.cos(s.right_ascension - m.right_ascension)
        )
        inc = np.arctan2(
            SUN_DISTANCE_KM * np.sin(phi), m.distance - SUN_DISTANCE_KM * np.cos(phi)
        )
        return float((1 + np.cos(inc)) / 2)
