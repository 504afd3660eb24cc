from .attendance import ApiResult, CheckInOutcome, CheckInRequest, CheckOutRequest
from .geo import (
    OFFICE_GEOFENCE,
    AcquireOptions,
    GeofenceConfig,
    GeofenceVerdict,
    GeoPoint,
    LocationSample,
    PermissionState,
    PositionErrorCode,
    ValidationResult,
    WorkLocation,
)
