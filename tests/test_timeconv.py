from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta, timezone

import pytest

from core.timeconv import J2000, InvalidInstantError, from_julian, to_days, to_julian


@pytest.mark.parametrize(
    "dt",
    [
        datetime(2013, 3, 5, tzinfo=UTC),
        datetime(2000, 1, 1, 12, tzinfo=UTC),
        datetime(1969, 7, 20, 20, 17, 40, tzinfo=UTC),
        datetime(2025, 10, 21, 4, 33, 17, 123456, tzinfo=UTC),
        datetime(2099, 12, 31, 23, 59, 59, 999000, tzinfo=UTC),
    ],
)
def test_julian_round_trip_within_a_millisecond(dt: datetime) -> None:
    restored = from_julian(to_julian(dt))
    assert restored is not None
    assert abs((restored - dt).total_seconds()) <= 0.001


def test_known_julian_days() -> None:
    assert to_julian(datetime(1970, 1, 1, tzinfo=UTC)) == pytest.approx(2440587.5)
    assert to_julian(datetime(2000, 1, 1, 12, tzinfo=UTC)) == pytest.approx(J2000)
    assert to_days(datetime(2000, 1, 2, 12, tzinfo=UTC)) == pytest.approx(1.0)


def test_aware_datetimes_in_other_zones_are_the_same_instant() -> None:
    local = datetime(2013, 3, 5, 2, tzinfo=timezone(timedelta(hours=2)))
    assert to_julian(local) == pytest.approx(to_julian(datetime(2013, 3, 5, tzinfo=UTC)))


def test_from_julian_returns_utc() -> None:
    dt = from_julian(J2000)
    assert dt == datetime(2000, 1, 1, 12, tzinfo=UTC)
    assert dt.utcoffset() == timedelta(0)


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_julian_day_is_indeterminate(value: float) -> None:
    assert from_julian(value) is None


def test_naive_datetime_is_rejected() -> None:
    with pytest.raises(InvalidInstantError):
        to_julian(datetime(2013, 3, 5))
    with pytest.raises(ValueError):
        to_days(datetime(2013, 3, 5))
