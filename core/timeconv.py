"""Conversions between UTC datetimes and Julian day numbers."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta
from typing import Optional

import erfa

__all__ = ["J1970", "J2000", "DAY_MS", "to_julian", "from_julian", "to_days"]

J1970 = 2440588
J2000 = erfa.DJ00  # 2451545.0
DAY_MS = erfa.DAYSEC * 1000.0

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class InvalidInstantError(ValueError):
    """Raised when a datetime cannot be interpreted as an absolute instant."""


def _epoch_milliseconds(dt: datetime) -> float:
    if dt.tzinfo is None:
        raise InvalidInstantError("datetime must be timezone-aware (UTC)")
    # timedelta arithmetic keeps microsecond precision; timestamp() would not
    # for instants far from the epoch.
    return (dt - _EPOCH) / timedelta(milliseconds=1)


def to_julian(dt: datetime) -> float:
    """Return the Julian day number of *dt*."""

    return _epoch_milliseconds(dt) / DAY_MS - 0.5 + J1970


def from_julian(j: float) -> Optional[datetime]:
    """Return the UTC datetime for Julian day *j*.

    A non-finite *j* (an event that never happens, e.g. sunset during polar
    day) yields ``None`` rather than raising.
    """

    if not math.isfinite(j):
        return None
    milliseconds = round((j + 0.5 - J1970) * DAY_MS)
    return _EPOCH + timedelta(milliseconds=milliseconds)


def to_days(dt: datetime) -> float:
    """Days elapsed since the J2000.0 epoch."""

    return to_julian(dt) - J2000
