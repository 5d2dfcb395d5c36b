"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ObserverQueryParams(BaseModel):
    """Validated query parameters for observer-based endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(
        ..., ge=-180.0, le=180.0, description="Longitude in degrees (east positive)"
    )
    time: Optional[datetime] = Field(
        None, description="Instant (ISO-8601); defaults to now, naive values are UTC"
    )

    @field_validator("time")
    def validate_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def instant(self) -> datetime:
        return self.time if self.time is not None else datetime.now(UTC)


class TimeQueryParams(BaseModel):
    """Validated query parameters for the ``/moon/fraction`` endpoint."""

    time: Optional[datetime] = Field(
        None, description="Instant (ISO-8601); defaults to now, naive values are UTC"
    )

    @field_validator("time")
    def validate_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def instant(self) -> datetime:
        return self.time if self.time is not None else datetime.now(UTC)


class SunPositionResponse(BaseModel):
    """Sun position payload; azimuth is measured from south towards west."""

    ok: bool = True
    time_utc: str = Field(..., description="Instant of the computation (ISO-8601)")
    latitude: float
    longitude: float
    azimuth: float = Field(..., description="Azimuth in radians, from south")
    altitude: float = Field(..., description="Altitude in radians")
    azimuth_deg: float = Field(..., description="Azimuth in degrees, from south")
    altitude_deg: float = Field(..., description="Altitude in degrees")


class SunTimesResponse(BaseModel):
    """Sunlight phases of the solar day nearest to the requested instant."""

    ok: bool = True
    status: Literal["ok", "partial"] = Field(
        ..., description="'partial' when some phases do not occur that day"
    )
    time_utc: str
    latitude: float
    longitude: float
    times: Dict[str, Optional[str]] = Field(
        ..., description="Phase name to UTC time (ISO-8601), null when indeterminate"
    )


class MoonPositionResponse(BaseModel):
    ok: bool = True
    time_utc: str
    latitude: float
    longitude: float
    azimuth: float = Field(..., description="Azimuth in radians, from south")
    altitude: float = Field(..., description="Refraction-corrected altitude in radians")
    distance_km: float
    declination: float
    right_ascension: float


class MoonFractionResponse(BaseModel):
    ok: bool = True
    time_utc: str
    fraction: float = Field(..., description="Illuminated fraction of the disk")


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    phases: List[str]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
