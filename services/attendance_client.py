import logging
from typing import Any, Optional

import httpx

from core.config import API_TIMEOUT_SECONDS, ATTENDANCE_API_BASE_URL
from models.attendance import ApiResult, CheckInRequest, CheckOutRequest

logger = logging.getLogger(__name__)


def _auth_headers(access_token: str) -> dict:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {access_token}",
    }


def _error_message(error: Exception) -> str:
    # Prefer the backend's own message when the response carries one
    if isinstance(error, httpx.HTTPStatusError):
        try:
            body = error.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return str(error)


class AttendanceApiClient:
    """
    Thin wrapper over the attendance backend.

    Every call is authenticated with the caller's access token and returns an
    ApiResult; transport and HTTP errors are reported, never raised.
    """

    def __init__(
        self,
        base_url: str = ATTENDANCE_API_BASE_URL,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = f"{base_url.rstrip('/')}/attendance"
        self.timeout = timeout
        self.transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        access_token: str,
        label: str,
        json: Any = None,
        params: Optional[dict] = None,
    ) -> ApiResult:
        logger.debug(f"[ATTENDANCE] 📤 {label}: {method} {self.base_url}{path}")
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.request(
                    method, path, headers=_auth_headers(access_token), json=json, params=params
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[ATTENDANCE] ❌ {label}: HTTP {e.response.status_code}: {e.response.text}")
            return ApiResult(success=False, error=_error_message(e))
        except httpx.TimeoutException as e:
            logger.error(f"[ATTENDANCE] ❌ {label}: request timed out")
            return ApiResult(success=False, error=str(e) or "Request timed out")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[ATTENDANCE] ❌ {label}: {e}")
            return ApiResult(success=False, error=str(e))

        logger.debug(f"[ATTENDANCE] 📥 {label}: {data}")
        return ApiResult(success=True, data=data)

    async def check_in(self, access_token: str, payload: CheckInRequest) -> ApiResult:
        body = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
        return await self._request("POST", "/checkin", access_token, "Check-in", json=body)

    async def check_out(self, access_token: str, payload: CheckOutRequest) -> ApiResult:
        body = payload.model_dump(mode="json", by_alias=True)
        return await self._request("PATCH", "/checkout", access_token, "Check-out", json=body)

    async def get_status(self, access_token: str) -> ApiResult:
        return await self._request("GET", "/status", access_token, "Status")

    async def get_history(
        self,
        access_token: str,
        user_id: str,
        period: str = "monthly",
        limit: int = 30,
    ) -> ApiResult:
        params = {}
        if period:
            params["period"] = period
        if limit:
            params["limit"] = limit
        return await self._request(
            "GET", f"/history/{user_id}", access_token, "History", params=params
        )

    async def get_stats(self, access_token: str, user_id: str) -> ApiResult:
        return await self._request("GET", f"/stats/{user_id}", access_token, "Stats")
