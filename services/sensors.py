import asyncio
from typing import Any, Callable, Optional

from models.geo import AcquireOptions, PositionErrorCode


class ReportedLocationSensor:
    """Sensor backed by coordinates the client already reported.

    Used by the CLI and by callers that receive a fix from a mobile device.
    ``delay_seconds`` simulates the time the device takes to resolve a fix;
    ``error_code`` makes the sensor answer with that failure instead.
    """

    def __init__(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        accuracy: float = 0.0,
        delay_seconds: float = 0.0,
        error_code: Optional[PositionErrorCode] = None,
    ):
        self.latitude = latitude
        self.longitude = longitude
        self.accuracy = accuracy
        self.delay_seconds = delay_seconds
        self.error_code = error_code

    def get_current_position(
        self,
        on_success: Callable[[Any], None],
        on_error: Callable[[Any], None],
        options: AcquireOptions,
    ) -> None:
        loop = asyncio.get_running_loop()
        timeout_s = options.timeout_ms / 1000

        # The device gives up on its own once the timeout passes
        if self.delay_seconds > timeout_s:
            loop.call_later(timeout_s, on_error, PositionErrorCode.TIMEOUT)
            return

        if self.error_code is not None:
            loop.call_later(self.delay_seconds, on_error, self.error_code)
            return

        if self.latitude is None or self.longitude is None:
            loop.call_later(self.delay_seconds, on_error, PositionErrorCode.POSITION_UNAVAILABLE)
            return

        position = {
            "coords": {
                "latitude": self.latitude,
                "longitude": self.longitude,
                "accuracy": self.accuracy,
            }
        }
        loop.call_later(self.delay_seconds, on_success, position)
