"""Rise/set style events of the Sun around local solar transit.

For a target elevation the evening crossing is solved from the hour angle
and the morning crossing is mirrored around solar noon, so the pair is
exactly symmetric. When the elevation is never reached (polar day or
night) both crossings are ``nan``.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .coordinates import RAD, declination, safe_acos
from .phases import DayPhase
from .sun import ecliptic_longitude, equation_of_center, solar_mean_anomaly
from .timeconv import J2000

__all__ = [
    "J0",
    "julian_cycle",
    "approx_transit",
    "solar_transit_j",
    "hour_angle",
    "PhaseCrossing",
    "SolarTransit",
    "DaySolution",
    "solar_transit",
    "solve_phases",
]

LOGGER = logging.getLogger(__name__)

J0 = 0.0009


def _js_round(value: float) -> float:
    # Half-up rounding; Python's round() rounds half to even.
    return math.floor(value + 0.5) if math.isfinite(value) else value


def julian_cycle(d: float, lw: float) -> float:
    return _js_round(d - J0 - lw / (2 * math.pi))


def approx_transit(Ht: float, lw: float, n: float) -> float:
    return J0 + (Ht + lw) / (2 * math.pi) + n


def solar_transit_j(ds: float, M: float, L: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(J2000 + ds + 0.0053 * np.sin(M) - 0.0069 * np.sin(2 * L))


def hour_angle(h: float, phi: float, dec: float) -> float:
    """Hour angle at which the Sun reaches elevation *h*; ``nan`` if never."""

    with np.errstate(invalid="ignore", divide="ignore"):
        return safe_acos(
            (np.sin(h) - np.sin(phi) * np.sin(dec))
            / (np.cos(phi) * np.cos(dec))
        )


@dataclass(frozen=True)
class PhaseCrossing:
    """Julian days of the morning (*rise*) and evening (*set*) crossings."""

    rise: float
    set: float

    @property
    def indeterminate(self) -> bool:
        return not (math.isfinite(self.rise) and math.isfinite(self.set))


@dataclass(frozen=True)
class SolarTransit:
    """Solar transit nearest to a day offset, for one observer."""

    n: float
    ds: float
    M: float
    L: float
    dec: float
    phi: float
    lw: float
    noon: float

    @property
    def nadir(self) -> float:
        return self.noon - 0.5

    def crossings(self, angle: float) -> PhaseCrossing:
        """Solve the crossings of the Sun through elevation *angle* (degrees)."""

        w = hour_angle(angle * RAD, self.phi, self.dec)
        set_j = solar_transit_j(approx_transit(w, self.lw, self.n), self.M, self.L)
        rise_j = self.noon - (set_j - self.noon)
        return PhaseCrossing(rise=rise_j, set=set_j)


@dataclass(frozen=True)
class DaySolution:
    transit: SolarTransit
    phases: Tuple[Tuple[DayPhase, PhaseCrossing], ...]


def solar_transit(d: float, lat: float, lng: float) -> SolarTransit:
    """Locate the solar transit for day offset *d* at (*lat*, *lng*) degrees.

    Parameters
    ----------
    d:
        Days since J2000.0.
    lat, lng:
        Observer coordinates in degrees, east-positive longitude.
    """

    lw = RAD * -lng
    phi = RAD * lat
    n = julian_cycle(d, lw)
    ds = approx_transit(0, lw, n)

    M = solar_mean_anomaly(ds)
    L = ecliptic_longitude(M, equation_of_center(M))

    return SolarTransit(
        n=n,
        ds=ds,
        M=M,
        L=L,
        dec=declination(L, 0.0),
        phi=phi,
        lw=lw,
        noon=solar_transit_j(ds, M, L),
    )


def solve_phases(
    d: float, lat: float, lng: float, phases: Iterable[DayPhase]
) -> DaySolution:
    """Solve every phase in *phases*, in order, around the nearest transit."""

    transit = solar_transit(d, lat, lng)
    solved = []
    for phase in phases:
        crossing = transit.crossings(phase.angle)
        if crossing.indeterminate:
            LOGGER.debug(
                json.dumps(
                    {
                        "event": "day_phase_indeterminate",
                        "angle": phase.angle,
                        "lat": lat,
                        "lng": lng,
                    }
                )
            )
        solved.append((phase, crossing))
    return DaySolution(transit=transit, phases=tuple(solved))
