from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.geo import ValidationResult, WorkLocation


# Body of POST /attendance/checkin. Coordinates are only sent for office check-ins.
class CheckInRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    working_location: WorkLocation = Field(..., alias="workingLocation")
    latitude: Optional[float] = None
    longitude: Optional[float] = None


# Body of PATCH /attendance/checkout
class CheckOutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    daily_summary: str = Field(..., alias="dailySummary")


# Uniform result of every attendance backend call
class ApiResult(BaseModel):
    success: bool
    data: Any = None
    error: Optional[str] = None


class CheckInOutcome(BaseModel):
    success: bool
    message: str
    validation: Optional[ValidationResult] = None
    api_result: Optional[ApiResult] = None
