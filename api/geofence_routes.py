from fastapi import APIRouter
from pydantic import BaseModel

from models.geo import OFFICE_GEOFENCE, AcquireOptions

router = APIRouter()

# --- Pydantic Models for Response ---

class OfficeGeofenceResponse(BaseModel):
    center_lat: float
    center_lng: float
    radius_meters: float


class AcquireOptionsResponse(BaseModel):
    high_accuracy: bool
    timeout_ms: int
    max_cache_age_ms: int

# --- API Endpoints ---

@router.get("/office", response_model=OfficeGeofenceResponse)
def get_office_geofence():
    """
    Office geofence that check-in screens validate against.
    Read-only; the backend never judges reported coordinates.
    """
    return OfficeGeofenceResponse(
        center_lat=OFFICE_GEOFENCE.center.latitude,
        center_lng=OFFICE_GEOFENCE.center.longitude,
        radius_meters=OFFICE_GEOFENCE.radius_meters,
    )


@router.get("/acquire-options", response_model=AcquireOptionsResponse)
def get_acquire_options():
    """Default sensor request options (accuracy, timeout, cache age)."""
    options = AcquireOptions()
    return AcquireOptionsResponse(
        high_accuracy=options.high_accuracy,
        timeout_ms=options.timeout_ms,
        max_cache_age_ms=options.max_cache_age_ms,
    )
