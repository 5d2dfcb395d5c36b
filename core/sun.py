"""Low-precision solar ephemeris.

Formulas follow http://aa.quae.nl/en/reken/zonpositie.html and are good to a
few hundredths of a degree over the current centuries.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .coordinates import RAD, declination, right_ascension

__all__ = [
    "EquatorialCoordinates",
    "PERIHELION",
    "solar_mean_anomaly",
    "equation_of_center",
    "ecliptic_longitude",
    "sun_coords",
]

PERIHELION = RAD * 102.9372  # perihelion of the Earth


@dataclass(frozen=True)
class EquatorialCoordinates:
    """Right ascension and declination in radians."""

    right_ascension: float
    declination: float


def solar_mean_anomaly(d: float) -> float:
    return RAD * (357.5291 + 0.98560028 * d)


def equation_of_center(M: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(
            RAD * (1.9148 * np.sin(M) + 0.0200 * np.sin(2 * M) + 0.0003 * np.sin(3 * M))
        )


def ecliptic_longitude(M: float, C: float) -> float:
    return M + C + PERIHELION + math.pi


def sun_coords(d: float) -> EquatorialCoordinates:
    """Equatorial coordinates of the Sun *d* days after J2000.0.

    The Sun's ecliptic latitude is taken as zero.
    """

    M = solar_mean_anomaly(d)
    L = ecliptic_longitude(M, equation_of_center(M))
    return EquatorialCoordinates(
        right_ascension=right_ascension(L, 0.0),
        declination=declination(L, 0.0),
    )
