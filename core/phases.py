"""Configurable solar-day phases (sunrise/sunset, twilights, golden hour)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Iterable, Iterator, List, Tuple

__all__ = ["DayPhase", "DayPhaseTable", "BUILTIN_PHASES", "DEFAULT_PHASES"]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayPhase:
    """Sun elevation *angle* (degrees) and the names of its two crossings."""

    angle: float
    morning_name: str
    evening_name: str


BUILTIN_PHASES: Tuple[DayPhase, ...] = (
    DayPhase(-0.83, "sunrise", "sunset"),
    DayPhase(-0.3, "sunriseEnd", "sunsetStart"),
    DayPhase(-6.0, "dawn", "dusk"),
    DayPhase(-12.0, "nauticalDawn", "nauticalDusk"),
    DayPhase(-18.0, "nightEnd", "night"),
    DayPhase(6.0, "goldenHourEnd", "goldenHour"),
)


class DayPhaseTable:
    """Ordered, append-only collection of :class:`DayPhase` entries.

    Appends and reads are serialized by a lock and iteration works on a
    snapshot, so one thread may register phases while others compute times.
    """

    def __init__(self, phases: Iterable[DayPhase] = ()) -> None:
        self._phases: List[DayPhase] = list(phases)
        self._lock = Lock()

    @classmethod
    def default(cls) -> "DayPhaseTable":
        """Return a new table holding the six built-in phases."""

        return cls(BUILTIN_PHASES)

    def add(self, angle: float, morning_name: str, evening_name: str) -> DayPhase:
        phase = DayPhase(float(angle), morning_name, evening_name)
        with self._lock:
            self._phases.append(phase)
        LOGGER.debug(
            json.dumps(
                {
                    "event": "day_phase_added",
                    "angle": phase.angle,
                    "morning": morning_name,
                    "evening": evening_name,
                }
            )
        )
        return phase

    def snapshot(self) -> Tuple[DayPhase, ...]:
        with self._lock:
            return tuple(self._phases)

    def names(self) -> List[str]:
        names: List[str] = []
        for phase in self.snapshot():
            names.extend((phase.morning_name, phase.evening_name))
        return names

    def __iter__(self) -> Iterator[DayPhase]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._phases)


# Process-wide table used when callers do not supply their own.
DEFAULT_PHASES = DayPhaseTable.default()
