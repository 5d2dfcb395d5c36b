from __future__ import annotations

import json
import logging

import pytest

import suncalc_cli
from core.config import (
    CORS_ORIGINS_ENV,
    EXTRA_PHASES_ENV,
    LOG_LEVEL_ENV,
    ConfigurationError,
    parse_extra_phases,
    resolve_cors_origins,
    resolve_log_level,
    resolve_phase_table,
)
from core.phases import BUILTIN_PHASES, DayPhase


def test_phase_table_defaults_without_environment() -> None:
    table = resolve_phase_table({})
    assert tuple(table) == BUILTIN_PHASES


def test_phase_table_appends_configured_phases() -> None:
    raw = json.dumps([[-4, "blueHourEnd", "blueHour"], [10.5, "morningLight", "eveningLight"]])
    table = resolve_phase_table({EXTRA_PHASES_ENV: raw})
    assert tuple(table)[-2:] == (
        DayPhase(-4.0, "blueHourEnd", "blueHour"),
        DayPhase(10.5, "morningLight", "eveningLight"),
    )


def test_configured_tables_are_independent() -> None:
    raw = json.dumps([[-4, "blueHourEnd", "blueHour"]])
    first = resolve_phase_table({EXTRA_PHASES_ENV: raw})
    second = resolve_phase_table({})
    assert len(first) == len(second) + 1


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps({"angle": -4}),
        json.dumps([[-4, "blueHourEnd"]]),
        json.dumps([["-4", "blueHourEnd", "blueHour"]]),
        json.dumps([[True, "blueHourEnd", "blueHour"]]),
        json.dumps([[-4, "", "blueHour"]]),
    ],
)
def test_malformed_extra_phases(raw: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_extra_phases(raw)


def test_cors_origins() -> None:
    assert resolve_cors_origins({}) == []
    assert resolve_cors_origins({CORS_ORIGINS_ENV: "https://a.example, https://b.example,"}) == [
        "https://a.example",
        "https://b.example",
    ]


def test_log_level() -> None:
    assert resolve_log_level({}) == logging.INFO
    assert resolve_log_level({LOG_LEVEL_ENV: "debug"}) == logging.DEBUG
    with pytest.raises(ConfigurationError):
        resolve_log_level({LOG_LEVEL_ENV: "chatty"})


def test_cli_document(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(EXTRA_PHASES_ENV, raising=False)
    document = suncalc_cli.run(
        [
            "--lat", "50.5",
            "--lon", "30.5",
            "--time", "2013-03-05T00:00:00Z",
            "--moon",
            "--phase", "-4", "blueHourEnd", "blueHour",
        ]
    )
    assert document["time_utc"] == "2013-03-05T00:00:00Z"
    assert document["times"]["sunrise"].startswith("2013-03-05T04:34")
    assert "blueHour" in document["times"]
    assert document["moon"]["fraction"] == pytest.approx(0.4848068202456373, abs=1e-9)


def test_cli_main_prints_json(capsys: pytest.CaptureFixture[str]) -> None:
    code = suncalc_cli.main(["--lat", "78", "--lon", "15.6", "--time", "2013-12-21"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["times"]["sunrise"] is None
    assert "moon" not in payload


def test_cli_strict_mode_reports_error() -> None:
    code = suncalc_cli.main(["--lat", "95", "--lon", "0", "--strict"])
    assert code == 2
