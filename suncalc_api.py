"""FastAPI application exposing sun and moon computations."""

from __future__ import annotations

import json
import logging
import math
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.astro import get_moon_fraction, get_moon_position, get_position, get_times
from core.config import (
    ConfigurationError,
    resolve_cors_origins,
    resolve_log_level,
    resolve_phase_table,
)
from core.phases import DayPhaseTable
from models import (
    ErrorResponse,
    HealthResponse,
    MoonFractionResponse,
    MoonPositionResponse,
    ObserverQueryParams,
    SunPositionResponse,
    SunTimesResponse,
    TimeQueryParams,
)

logging.basicConfig(level=resolve_log_level(), format="%(message)s")
LOGGER = logging.getLogger("suncalc-api")

APP_DESCRIPTION = (
    "Sun position, sunlight phases, moon position and moon illumination"
)

PHASES: DayPhaseTable = DayPhaseTable.default()


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - exercised in integration tests
    global PHASES
    try:
        PHASES = resolve_phase_table()
    except ConfigurationError as exc:
        LOGGER.error(json.dumps({"event": "config_failed", "error": str(exc)}))
        raise
    LOGGER.info(json.dumps({"event": "startup", "phases": PHASES.names()}))
    yield


app = FastAPI(
    title="SunCalc API",
    description=APP_DESCRIPTION,
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=resolve_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _finite(value: float, name: str) -> float:
    # JSON has no representation for nan.
    if not math.isfinite(value):
        raise HTTPException(status_code=400, detail=f"{name} is undefined for this input")
    return value


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


def _log_request(event: str, start_time: float, **fields: object) -> None:
    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(
        json.dumps({"event": event, **fields, "duration_ms": round(duration_ms, 3)})
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, phases=PHASES.names())


@app.get(
    "/sun/position",
    response_model=SunPositionResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def sun_position_endpoint(
    params: Annotated[ObserverQueryParams, Query()],
) -> SunPositionResponse:
    start_time = time.perf_counter()
    instant = params.instant()
    try:
        position = get_position(instant, params.lat, params.lon, strict=True)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    response = SunPositionResponse(
        time_utc=_format_utc(instant),
        latitude=params.lat,
        longitude=params.lon,
        azimuth=_finite(position.azimuth, "azimuth"),
        altitude=_finite(position.altitude, "altitude"),
        azimuth_deg=math.degrees(position.azimuth),
        altitude_deg=math.degrees(position.altitude),
    )
    _log_request("sun_position", start_time, lat=params.lat, lon=params.lon)
    return response


@app.get(
    "/sun/times",
    response_model=SunTimesResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def sun_times_endpoint(
    params: Annotated[ObserverQueryParams, Query()],
) -> SunTimesResponse:
    start_time = time.perf_counter()
    instant = params.instant()
    try:
        times = get_times(instant, params.lat, params.lon, PHASES, strict=True)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    status = "ok" if all(value is not None for value in times.values()) else "partial"
    response = SunTimesResponse(
        status=status,
        time_utc=_format_utc(instant),
        latitude=params.lat,
        longitude=params.lon,
        times={name: _format_utc(value) for name, value in times.items()},
    )
    _log_request(
        "sun_times", start_time, lat=params.lat, lon=params.lon, status=status
    )
    return response


@app.get(
    "/moon/position",
    response_model=MoonPositionResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def moon_position_endpoint(
    params: Annotated[ObserverQueryParams, Query()],
) -> MoonPositionResponse:
    start_time = time.perf_counter()
    instant = params.instant()
    try:
        position = get_moon_position(instant, params.lat, params.lon, strict=True)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    response = MoonPositionResponse(
        time_utc=_format_utc(instant),
        latitude=params.lat,
        longitude=params.lon,
        azimuth=_finite(position.azimuth, "azimuth"),
        altitude=_finite(position.altitude, "altitude"),
        distance_km=position.distance,
        declination=position.declination,
        right_ascension=position.right_ascension,
    )
    _log_request("moon_position", start_time, lat=params.lat, lon=params.lon)
    return response


@app.get(
    "/moon/fraction",
    response_model=MoonFractionResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def moon_fraction_endpoint(
    params: Annotated[TimeQueryParams, Query()],
) -> MoonFractionResponse:
    start_time = time.perf_counter()
    instant = params.instant()
    fraction = _finite(get_moon_fraction(instant), "fraction")
    response = MoonFractionResponse(time_utc=_format_utc(instant), fraction=fraction)
    _log_request("moon_fraction", start_time, fraction=round(fraction, 4))
    return response
