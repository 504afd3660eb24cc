import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

from models.geo import AcquireOptions, GeoPoint, LocationSample, PositionErrorCode
from utils.datetime_helpers import utc_now

logger = logging.getLogger(__name__)


# --- Errors ---

class LocationError(Exception):
    """Base class for every failure to obtain a location fix."""

    code: PositionErrorCode = PositionErrorCode.UNKNOWN
    default_message = "Unable to get your location."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class LocationPermissionDeniedError(LocationError):
    code = PositionErrorCode.PERMISSION_DENIED
    default_message = "Location access denied. Please enable location permissions."


class LocationUnavailableError(LocationError):
    code = PositionErrorCode.POSITION_UNAVAILABLE
    default_message = "Location unavailable. Please ensure GPS is enabled."


class LocationTimeoutError(LocationError):
    code = PositionErrorCode.TIMEOUT
    default_message = "Location request timed out. Please try again."


class LocationUnsupportedError(LocationError):
    default_message = "Geolocation not supported"


class LocationUnknownError(LocationError):
    default_message = "Unknown location error occurred."


_ERRORS_BY_CODE = {
    PositionErrorCode.PERMISSION_DENIED: LocationPermissionDeniedError,
    PositionErrorCode.POSITION_UNAVAILABLE: LocationUnavailableError,
    PositionErrorCode.TIMEOUT: LocationTimeoutError,
}


def error_from_code(code: Any) -> LocationError:
    """Map a sensor error (code or object carrying ``.code``) to a LocationError."""
    raw = getattr(code, "code", code)
    try:
        error_code = PositionErrorCode(raw)
    except (ValueError, TypeError):
        return LocationUnknownError()
    return _ERRORS_BY_CODE.get(error_code, LocationUnknownError)()


# --- Sensor contract ---

class LocationSensor(Protocol):
    """Callback-style platform sensor.

    Exactly one of ``on_success(position)`` / ``on_error(error)`` is expected
    per request. ``position`` exposes latitude, longitude and accuracy either
    as attributes, as dict keys, or under a ``coords`` member.
    """

    def get_current_position(
        self,
        on_success: Callable[[Any], None],
        on_error: Callable[[Any], None],
        options: AcquireOptions,
    ) -> None: ...


def _field(source: Any, name: str) -> Any:
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def _to_sample(position: Any) -> LocationSample:
    coords = _field(position, "coords") or position
    latitude = _field(coords, "latitude")
    longitude = _field(coords, "longitude")
    accuracy = _field(coords, "accuracy")

    if latitude is None or longitude is None:
        raise LocationUnavailableError()

    try:
        point = GeoPoint(latitude=float(latitude), longitude=float(longitude))
        accuracy_meters = float(accuracy) if accuracy is not None else 0.0
    except (TypeError, ValueError) as e:
        logger.error(f"[LOCATION] ❌ Sensor returned unreadable coordinates: {e}")
        raise LocationUnknownError() from e

    return LocationSample(point=point, accuracy_meters=accuracy_meters, captured_at=utc_now())


# --- Acquisition ---

async def acquire(
    sensor: Optional[LocationSensor],
    options: Optional[AcquireOptions] = None,
) -> LocationSample:
    """
    Request a single fresh fix from the sensor.

    Suspends until the sensor answers or ``options.timeout_ms`` elapses. The
    sensor callbacks may fire from any thread; the first one wins. No retries
    are attempted here.

    Raises:
        LocationError: one of the subclasses above, depending on the failure.
    """
    opts = options or AcquireOptions()

    if sensor is None:
        logger.warning("[LOCATION] ❌ No location sensor available")
        raise LocationUnsupportedError()

    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def _settle(outcome: Any, failed: bool) -> None:
        if future.done():
            return
        if failed:
            future.set_exception(error_from_code(outcome))
        else:
            future.set_result(outcome)

    def _deliver(outcome: Any, failed: bool) -> None:
        # Late platform callbacks may arrive after the caller's loop is gone
        if loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(_settle, outcome, failed)
        except RuntimeError:
            logger.debug("[LOCATION] Dropped sensor callback for a closed event loop")

    def on_success(position: Any) -> None:
        _deliver(position, False)

    def on_error(error: Any) -> None:
        _deliver(error, True)

    logger.debug(
        f"[LOCATION] 🛰️ Requesting fix (high_accuracy={opts.high_accuracy}, "
        f"timeout_ms={opts.timeout_ms}, max_cache_age_ms={opts.max_cache_age_ms})"
    )

    try:
        sensor.get_current_position(on_success, on_error, opts)
    except Exception as e:
        logger.error(f"[LOCATION] ❌ Sensor request failed: {e}")
        raise LocationUnknownError() from e

    try:
        position = await asyncio.wait_for(future, timeout=opts.timeout_ms / 1000)
    except asyncio.TimeoutError:
        logger.warning(f"[LOCATION] ⏱️ No fix within {opts.timeout_ms}ms")
        raise LocationTimeoutError() from None
    except LocationError as e:
        logger.warning(f"[LOCATION] ❌ Sensor reported error: {e.message}")
        raise

    sample = _to_sample(position)
    logger.debug(
        f"[LOCATION] ✅ Fix at ({sample.latitude}, {sample.longitude}) "
        f"±{sample.accuracy_meters}m"
    )
    return sample
