import logging
from typing import Optional

from models.geo import (
    OFFICE_GEOFENCE,
    AcquireOptions,
    GeofenceConfig,
    ValidationResult,
    WorkLocation,
)
from services.location_service import LocationError, LocationSensor, acquire
from utils.geofence import evaluate

logger = logging.getLogger(__name__)

REMOTE_CAPTURED_MESSAGE = "Location captured for remote work"


class LocationValidationService:

    @staticmethod
    async def validate(
        work_location: WorkLocation | str,
        config: GeofenceConfig = OFFICE_GEOFENCE,
        sensor: Optional[LocationSensor] = None,
        options: Optional[AcquireOptions] = None,
    ) -> ValidationResult:
        # Unknown work locations are a caller bug, not a validation outcome
        work_location = WorkLocation(work_location)

        # 1) Get a fresh fix; acquisition failures end here
        try:
            sample = await acquire(sensor, options)
        except LocationError as e:
            logger.warning(f"[GEOFENCE] ❌ Validation failed before evaluation: {e.message}")
            return ValidationResult(success=False, error=e.message, message=e.message)

        # 2) Remote work only needs the fix itself
        if work_location == WorkLocation.REMOTE:
            return ValidationResult(
                success=True,
                location=sample,
                is_within_office=False,
                message=REMOTE_CAPTURED_MESSAGE,
            )

        # 3) Office work must fall inside the geofence
        verdict = evaluate(sample.point, config)
        if verdict.within_range:
            logger.info(f"[GEOFENCE] ✅ Inside office geofence ({verdict.distance_meters}m)")
        else:
            logger.info(f"[GEOFENCE] 🚫 Outside office geofence ({verdict.distance_meters}m)")

        return ValidationResult(
            success=verdict.within_range,
            location=sample,
            distance_meters=verdict.distance_meters,
            is_within_office=verdict.within_range,
            message=verdict.message,
        )


async def validate_location(
    work_location: WorkLocation | str,
    config: GeofenceConfig = OFFICE_GEOFENCE,
    sensor: Optional[LocationSensor] = None,
    options: Optional[AcquireOptions] = None,
) -> ValidationResult:
    """Module-level entry point for check-in screens."""
    return await LocationValidationService.validate(work_location, config, sensor, options)
