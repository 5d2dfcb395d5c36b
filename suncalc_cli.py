"""Command-line access to the sun and moon computations.

Usage:
    python suncalc_cli.py --lat 50.5 --lon 30.5 [--time 2013-03-05T00:00:00Z]
        [--moon] [--phase -4 blueHourEnd blueHour ...]
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from datetime import UTC, datetime
from typing import Dict, List, Optional

from core.astro import get_moon_fraction, get_moon_position, get_position, get_times
from core.config import ConfigurationError, resolve_log_level, resolve_phase_table

LOGGER = logging.getLogger("suncalc-cli")


def _parse_time(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def _format_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _json_float(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sun and moon positions and phases")
    parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    parser.add_argument(
        "--lon", type=float, required=True, help="Longitude in degrees (east positive)"
    )
    parser.add_argument(
        "--time", type=_parse_time, default=None, help="ISO-8601 instant (default: now, UTC)"
    )
    parser.add_argument("--moon", action="store_true", help="Include moon position and fraction")
    parser.add_argument(
        "--phase",
        nargs=3,
        action="append",
        default=[],
        metavar=("ANGLE", "MORNING", "EVENING"),
        help="Additional day phase (sun elevation in degrees and two names)",
    )
    parser.add_argument(
        "--strict", action="store_true", help="Reject out-of-range coordinates"
    )
    return parser


def run(argv: Optional[List[str]] = None) -> Dict[str, object]:
    """Parse *argv* and return the JSON-serializable result document."""

    args = build_parser().parse_args(argv)
    instant = args.time if args.time is not None else datetime.now(UTC)

    phases = resolve_phase_table()
    for angle, morning, evening in args.phase:
        phases.add(float(angle), morning, evening)

    position = get_position(instant, args.lat, args.lon, strict=args.strict)
    times = get_times(instant, args.lat, args.lon, phases, strict=args.strict)
    document: Dict[str, object] = {
        "time_utc": _format_utc(instant),
        "latitude": args.lat,
        "longitude": args.lon,
        "sun": {
            "azimuth": _json_float(position.azimuth),
            "altitude": _json_float(position.altitude),
        },
        "times": {name: _format_utc(value) for name, value in times.items()},
    }
    if args.moon:
        moon = get_moon_position(instant, args.lat, args.lon, strict=args.strict)
        document["moon"] = {
            "azimuth": _json_float(moon.azimuth),
            "altitude": _json_float(moon.altitude),
            "distance_km": _json_float(moon.distance),
            "declination": _json_float(moon.declination),
            "right_ascension": _json_float(moon.right_ascension),
            "fraction": _json_float(get_moon_fraction(instant)),
        }
    return document


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=resolve_log_level(), format="%(message)s")
    try:
        document = run(argv)
    except (ConfigurationError, ValueError) as exc:
        LOGGER.error(json.dumps({"event": "error", "message": str(exc)}))
        return 2
    json.dump(document, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
