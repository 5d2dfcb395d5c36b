"""Core astronomical utilities for the SunCalc API."""

from .astro import (
    InvalidCoordinateError,
    MoonPosition,
    SunPosition,
    add_day_phase,
    get_moon_fraction,
    get_moon_position,
    get_position,
    get_times,
)
from .phases import DEFAULT_PHASES, DayPhase, DayPhaseTable
from .timeconv import InvalidInstantError, from_julian, to_days, to_julian

__all__ = [
    "get_position",
    "get_times",
    "add_day_phase",
    "get_moon_position",
    "get_moon_fraction",
    "SunPosition",
    "MoonPosition",
    "DayPhase",
    "DayPhaseTable",
    "DEFAULT_PHASES",
    "InvalidCoordinateError",
    "InvalidInstantError",
    "to_julian",
    "from_julian",
    "to_days",
]
