from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from core.config import (
    LOCATION_HIGH_ACCURACY,
    LOCATION_MAX_CACHE_AGE_MS,
    LOCATION_TIMEOUT_MS,
    OFFICE_LAT,
    OFFICE_LNG,
    OFFICE_RADIUS_METERS,
)
from utils.datetime_helpers import format_utc_datetime, utc_now

# Value types shared by the geofence, location and validation layers.
# Everything here is frozen; a sample or verdict is never edited after creation.


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


# Circular geofence around a single site
class GeofenceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    center: GeoPoint
    radius_meters: float = Field(..., gt=0, description="Allowed check-in radius in meters")


# Default office geofence, fixed for the lifetime of the process
OFFICE_GEOFENCE = GeofenceConfig(
    center=GeoPoint(latitude=OFFICE_LAT, longitude=OFFICE_LNG),
    radius_meters=OFFICE_RADIUS_METERS,
)


# One resolved fix from the location sensor
class LocationSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    point: GeoPoint
    accuracy_meters: float
    captured_at: datetime = Field(default_factory=utc_now)

    @property
    def latitude(self) -> float:
        return self.point.latitude

    @property
    def longitude(self) -> float:
        return self.point.longitude

    @field_serializer("captured_at")
    def serialize_captured_at(self, dt: datetime) -> str:
        """Ensure timestamp is formatted as UTC with Z suffix"""
        result = format_utc_datetime(dt)
        return result if result is not None else dt.isoformat()


class GeofenceVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    within_range: bool
    distance_meters: Optional[int]
    message: str


# Terminal output of a single validation attempt
class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    location: Optional[LocationSample] = None
    distance_meters: Optional[int] = None
    is_within_office: bool = False
    message: str
    error: Optional[str] = None


# Options passed through to the sensor for a single request
class AcquireOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    high_accuracy: bool = LOCATION_HIGH_ACCURACY
    timeout_ms: int = Field(default=LOCATION_TIMEOUT_MS, gt=0)
    max_cache_age_ms: int = Field(default=LOCATION_MAX_CACHE_AGE_MS, ge=0)


class WorkLocation(str, Enum):
    OFFICE = "office"
    REMOTE = "remote"


class PermissionState(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"


# Codes reported by the platform location sensor
class PositionErrorCode(int, Enum):
    UNKNOWN = 0
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3
