import inspect
import logging
from typing import Any, Optional, Protocol

from models.geo import PermissionState

logger = logging.getLogger(__name__)

GEOLOCATION_PERMISSION = "geolocation"


class PermissionQuery(Protocol):
    # May return the state directly or an awaitable resolving to it
    def query(self, name: str) -> Any: ...


class StaticPermissions:
    """Permission source with a fixed answer (CLI runs, tests, trusted kiosks)."""

    def __init__(self, state: PermissionState | str):
        self.state = PermissionState(state)

    def query(self, name: str) -> PermissionState:
        return self.state


async def query_permission(permissions: Optional[PermissionQuery] = None) -> PermissionState:
    """
    Report whether location access is granted, denied, or not yet asked.

    Advisory only: the acquirer handles a denied sensor on its own. Platforms
    without a permission API, and any failed query, report PROMPT.
    """
    if permissions is None:
        return PermissionState.PROMPT

    try:
        result = permissions.query(GEOLOCATION_PERMISSION)
        if inspect.isawaitable(result):
            result = await result
        state = getattr(result, "state", result)
        return PermissionState(state)
    except Exception as e:
        logger.error(f"[LOCATION] ⚠️ Permission check failed: {e}")
        return PermissionState.PROMPT
