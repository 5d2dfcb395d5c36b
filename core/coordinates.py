"""Spherical-trigonometry transforms shared by the solar and lunar models.

All angles are radians. The functions never raise on domain errors: an
``asin`` argument outside ``[-1, 1]`` or a non-finite input simply yields
``nan``, which callers treat as "undefined" rather than as a failure.
"""

from __future__ import annotations

import math

import numpy as np

__all__ = [
    "RAD",
    "OBLIQUITY",
    "right_ascension",
    "declination",
    "azimuth",
    "altitude",
    "sidereal_time",
    "safe_asin",
    "safe_acos",
]

RAD = math.pi / 180.0

OBLIQUITY = RAD * 23.4397  # obliquity of the Earth
_TH0 = RAD * 280.16
_TH1 = RAD * 360.9856235


def safe_asin(value: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(np.arcsin(value))


def safe_acos(value: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(np.arccos(value))


def right_ascension(l: float, b: float) -> float:
    """Right ascension for ecliptic longitude *l* and latitude *b*."""

    with np.errstate(invalid="ignore"):
        return float(
            np.arctan2(
                np.sin(l) * np.cos(OBLIQUITY) - np.tan(b) * np.sin(OBLIQUITY),
                np.cos(l),
            )
        )


def declination(l: float, b: float) -> float:
    """Declination for ecliptic longitude *l* and latitude *b*."""

    with np.errstate(invalid="ignore"):
        return safe_asin(
            np.sin(b) * np.cos(OBLIQUITY)
            + np.cos(b) * np.sin(OBLIQUITY) * np.sin(l)
        )


def azimuth(H: float, phi: float, dec: float) -> float:
    """Azimuth measured from south, increasing towards the west.

    Parameters
    ----------
    H:
        Local hour angle of the body.
    phi:
        Observer latitude.
    dec:
        Declination of the body.
    """

    with np.errstate(invalid="ignore"):
        return float(
            np.arctan2(np.sin(H), np.cos(H) * np.sin(phi) - np.tan(dec) * np.cos(phi))
        )


def altitude(H: float, phi: float, dec: float) -> float:
    """Geometric altitude above the horizon (no refraction)."""

    with np.errstate(invalid="ignore"):
        return safe_asin(
            np.sin(phi) * np.sin(dec) + np.cos(phi) * np.cos(dec) * np.cos(H)
        )


def sidereal_time(d: float, lw: float) -> float:
    """Local sidereal time for day offset *d* and west longitude *lw*."""

    return _TH0 + _TH1 * d - lw
