from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core import astro  # noqa: E402
from core.phases import DayPhaseTable  # noqa: E402

KYIV_LAT = 50.5
KYIV_LNG = 30.5


@pytest.fixture
def kyiv_date() -> datetime:
    return datetime(2013, 3, 5, tzinfo=UTC)


@pytest.fixture
def fresh_default_phases(monkeypatch: pytest.MonkeyPatch) -> DayPhaseTable:
    """Swap the process-wide phase table for a pristine one."""

    table = DayPhaseTable.default()
    monkeypatch.setattr(astro, "DEFAULT_PHASES", table)
    return table
