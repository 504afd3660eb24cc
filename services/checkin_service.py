import logging
from typing import Optional

from models.attendance import CheckInOutcome, CheckInRequest, CheckOutRequest
from models.geo import (
    OFFICE_GEOFENCE,
    AcquireOptions,
    GeofenceConfig,
    PermissionState,
    WorkLocation,
)
from services.attendance_client import AttendanceApiClient
from services.location_service import LocationSensor
from services.location_validation import LocationValidationService
from services.permission_service import PermissionQuery, query_permission

logger = logging.getLogger(__name__)

DEFAULT_DAILY_SUMMARY = "Work completed for the day"


def _api_message(data, fallback: str) -> str:
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return fallback


class CheckInService:
    """Gates attendance check-in on a successful location validation."""

    def __init__(
        self,
        client: AttendanceApiClient,
        sensor: Optional[LocationSensor],
        config: GeofenceConfig = OFFICE_GEOFENCE,
        options: Optional[AcquireOptions] = None,
        permissions: Optional[PermissionQuery] = None,
    ):
        self.client = client
        self.sensor = sensor
        self.config = config
        self.options = options
        self.permissions = permissions

    async def preflight(self) -> PermissionState:
        return await query_permission(self.permissions)

    async def check_in(self, access_token: str, work_location: WorkLocation | str) -> CheckInOutcome:
        work_location = WorkLocation(work_location)

        validation = await LocationValidationService.validate(
            work_location, self.config, self.sensor, self.options
        )

        # Outside the geofence or no fix: never reach the backend
        if not validation.success:
            return CheckInOutcome(success=False, message=validation.message, validation=validation)

        payload = CheckInRequest(working_location=work_location)
        if work_location == WorkLocation.OFFICE:
            payload = CheckInRequest(
                working_location=work_location,
                latitude=validation.location.latitude,
                longitude=validation.location.longitude,
            )

        result = await self.client.check_in(access_token, payload)
        if not result.success:
            return CheckInOutcome(
                success=False,
                message=result.error or "Failed to check in",
                validation=validation,
                api_result=result,
            )

        logger.info(f"[ATTENDANCE] ✅ Checked in ({work_location.value})")
        return CheckInOutcome(
            success=True,
            message=_api_message(result.data, "Checked in successfully"),
            validation=validation,
            api_result=result,
        )

    async def check_out(self, access_token: str, daily_summary: str = "") -> CheckInOutcome:
        payload = CheckOutRequest(daily_summary=daily_summary.strip() or DEFAULT_DAILY_SUMMARY)

        result = await self.client.check_out(access_token, payload)
        if not result.success:
            return CheckInOutcome(
                success=False, message=result.error or "Failed to check out", api_result=result
            )

        logger.info("[ATTENDANCE] ✅ Checked out")
        return CheckInOutcome(
            success=True,
            message=_api_message(result.data, "Checked out successfully"),
            api_result=result,
        )
