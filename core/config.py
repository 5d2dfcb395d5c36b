"""Environment-driven configuration for the service and CLI."""

from __future__ import annotations

import json
import logging
import os
from typing import List, Optional

from .phases import DayPhaseTable

LOGGER = logging.getLogger(__name__)

EXTRA_PHASES_ENV = "SUNCALC_EXTRA_PHASES"
CORS_ORIGINS_ENV = "SUNCALC_CORS_ORIGINS"
LOG_LEVEL_ENV = "SUNCALC_LOG_LEVEL"


class ConfigurationError(RuntimeError):
    """Raised when environment configuration cannot be parsed."""


def parse_extra_phases(raw: str) -> List[tuple]:
    """Parse a JSON list of ``[angle, morningName, eveningName]`` triples."""

    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{EXTRA_PHASES_ENV} is not valid JSON: {exc}") from exc
    if not isinstance(entries, list):
        raise ConfigurationError(f"{EXTRA_PHASES_ENV} must be a JSON list")

    parsed: List[tuple] = []
    for entry in entries:
        if (
            not isinstance(entry, list)
            or len(entry) != 3
            or isinstance(entry[0], bool)
            or not isinstance(entry[0], (int, float))
            or not all(isinstance(name, str) and name for name in entry[1:])
        ):
            raise ConfigurationError(
                f"Invalid phase entry in {EXTRA_PHASES_ENV}: {entry!r}; "
                "expected [angle, morningName, eveningName]"
            )
        parsed.append((float(entry[0]), entry[1], entry[2]))
    return parsed


def resolve_phase_table(environ: Optional[dict] = None) -> DayPhaseTable:
    """Return a fresh default table extended with phases from the environment."""

    env = os.environ if environ is None else environ
    table = DayPhaseTable.default()
    raw = env.get(EXTRA_PHASES_ENV)
    if raw:
        for angle, morning, evening in parse_extra_phases(raw):
            table.add(angle, morning, evening)
        LOGGER.info(
            json.dumps({"event": "phases_configured", "phases": len(table)})
        )
    return table


def resolve_cors_origins(environ: Optional[dict] = None) -> List[str]:
    env = os.environ if environ is None else environ
    raw = env.get(CORS_ORIGINS_ENV, "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def resolve_log_level(environ: Optional[dict] = None) -> int:
    env = os.environ if environ is None else environ
    name = env.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level in {LOG_LEVEL_ENV}: {name}")
    return level
