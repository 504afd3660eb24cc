#!/usr/bin/env python3
"""
Location acquirer and permission inspector behaviour with fake sensors.
"""

import asyncio
import threading

import pytest

from models.geo import AcquireOptions, PermissionState, PositionErrorCode
from services.location_service import (
    LocationError,
    LocationPermissionDeniedError,
    LocationTimeoutError,
    LocationUnavailableError,
    LocationUnknownError,
    LocationUnsupportedError,
    acquire,
    error_from_code,
)
from services.permission_service import StaticPermissions, query_permission
from services.sensors import ReportedLocationSensor


class SilentSensor:
    """Never calls back; only the acquirer's own timeout can end the wait."""

    def __init__(self):
        self.requests = []

    def get_current_position(self, on_success, on_error, options):
        self.requests.append(options)


class ThreadedSensor:
    """Answers from a worker thread, like a platform callback would."""

    def get_current_position(self, on_success, on_error, options):
        payload = {"latitude": 5.0, "longitude": -0.2, "accuracy": 12.5}
        threading.Timer(0.01, on_success, args=(payload,)).start()


class BrokenSensor:
    def get_current_position(self, on_success, on_error, options):
        raise RuntimeError("sensor driver crashed")


class ErrorObject:
    def __init__(self, code):
        self.code = code


def test_default_options():
    options = AcquireOptions()
    assert options.high_accuracy is True
    assert options.timeout_ms == 15000
    assert options.max_cache_age_ms == 0


def test_acquire_success():
    sensor = ReportedLocationSensor(latitude=5.767477, longitude=-0.180019, accuracy=8.0)
    sample = asyncio.run(acquire(sensor))
    assert sample.latitude == 5.767477
    assert sample.longitude == -0.180019
    assert sample.accuracy_meters == 8.0
    assert sample.captured_at.tzinfo is not None


def test_acquire_passes_options_to_sensor():
    sensor = SilentSensor()
    options = AcquireOptions(high_accuracy=False, timeout_ms=20, max_cache_age_ms=5000)
    with pytest.raises(LocationTimeoutError):
        asyncio.run(acquire(sensor, options))
    assert sensor.requests == [options]


def test_acquire_from_worker_thread():
    sample = asyncio.run(acquire(ThreadedSensor()))
    assert sample.point.latitude == 5.0
    assert sample.accuracy_meters == 12.5


def test_each_acquisition_is_a_new_sample():
    sensor = ReportedLocationSensor(latitude=1.0, longitude=2.0)

    async def twice():
        return await acquire(sensor), await acquire(sensor)

    first, second = asyncio.run(twice())
    assert first is not second
    assert second.captured_at >= first.captured_at


@pytest.mark.parametrize(
    "code, error_cls, message",
    [
        (PositionErrorCode.PERMISSION_DENIED, LocationPermissionDeniedError,
         "Location access denied. Please enable location permissions."),
        (PositionErrorCode.POSITION_UNAVAILABLE, LocationUnavailableError,
         "Location unavailable. Please ensure GPS is enabled."),
        (PositionErrorCode.TIMEOUT, LocationTimeoutError,
         "Location request timed out. Please try again."),
        (PositionErrorCode.UNKNOWN, LocationUnknownError,
         "Unknown location error occurred."),
    ],
)
def test_sensor_error_codes(code, error_cls, message):
    sensor = ReportedLocationSensor(latitude=1.0, longitude=1.0, error_code=code)
    with pytest.raises(error_cls) as exc_info:
        asyncio.run(acquire(sensor))
    assert exc_info.value.message == message
    assert str(exc_info.value) == message


def test_error_from_code_accepts_raw_and_objects():
    assert isinstance(error_from_code(1), LocationPermissionDeniedError)
    assert isinstance(error_from_code(ErrorObject(2)), LocationUnavailableError)
    assert isinstance(error_from_code(ErrorObject(3)), LocationTimeoutError)
    assert isinstance(error_from_code(99), LocationUnknownError)
    assert isinstance(error_from_code("weird"), LocationUnknownError)


def test_missing_sensor_is_unsupported():
    with pytest.raises(LocationUnsupportedError) as exc_info:
        asyncio.run(acquire(None))
    assert exc_info.value.message == "Geolocation not supported"


def test_silent_sensor_times_out():
    with pytest.raises(LocationTimeoutError):
        asyncio.run(acquire(SilentSensor(), AcquireOptions(timeout_ms=30)))


def test_slow_reported_sensor_times_out():
    sensor = ReportedLocationSensor(latitude=1.0, longitude=1.0, delay_seconds=1.0)
    with pytest.raises(LocationTimeoutError):
        asyncio.run(acquire(sensor, AcquireOptions(timeout_ms=50)))


def test_missing_coordinates_are_unavailable():
    with pytest.raises(LocationUnavailableError):
        asyncio.run(acquire(ReportedLocationSensor()))


def test_sensor_exception_is_unknown():
    with pytest.raises(LocationUnknownError) as exc_info:
        asyncio.run(acquire(BrokenSensor()))
    assert isinstance(exc_info.value, LocationError)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


# --- Permission inspector ---

class AsyncPermissions:
    def __init__(self, state):
        self.state = state
        self.names = []

    async def query(self, name):
        self.names.append(name)
        return ErrorObjectState(self.state)


class ErrorObjectState:
    def __init__(self, state):
        self.state = state


class FailingPermissions:
    def query(self, name):
        raise RuntimeError("permissions API blew up")


def test_permission_without_platform_api_is_prompt():
    assert asyncio.run(query_permission(None)) == PermissionState.PROMPT


@pytest.mark.parametrize("state", ["granted", "denied", "prompt"])
def test_permission_static_states(state):
    assert asyncio.run(query_permission(StaticPermissions(state))) == PermissionState(state)


def test_permission_async_query_with_state_attribute():
    permissions = AsyncPermissions("granted")
    assert asyncio.run(query_permission(permissions)) == PermissionState.GRANTED
    assert permissions.names == ["geolocation"]


def test_permission_query_failure_is_prompt():
    assert asyncio.run(query_permission(FailingPermissions())) == PermissionState.PROMPT


def test_permission_unknown_state_is_prompt():
    assert asyncio.run(query_permission(AsyncPermissions("restricted"))) == PermissionState.PROMPT


# --- Malformed and late sensor answers ---

class GarbledSensor:
    def __init__(self, position):
        self.position = position

    def get_current_position(self, on_success, on_error, options):
        on_success(self.position)


class HoldingSensor:
    """Keeps the callbacks so they can be fired after the request is over."""

    def __init__(self):
        self.callbacks = None

    def get_current_position(self, on_success, on_error, options):
        self.callbacks = (on_success, on_error)


@pytest.mark.parametrize(
    "position",
    [
        {"latitude": "n/a", "longitude": -0.18, "accuracy": 10},
        {"latitude": 5.7, "longitude": [1, 2], "accuracy": 10},
        {"latitude": 5.7, "longitude": -0.18, "accuracy": "high"},
    ],
)
def test_unreadable_coordinates_are_unknown(position):
    with pytest.raises(LocationUnknownError) as exc_info:
        asyncio.run(acquire(GarbledSensor(position)))
    assert isinstance(exc_info.value.__cause__, (TypeError, ValueError))


def test_callback_after_loop_closed_is_ignored():
    sensor = HoldingSensor()
    with pytest.raises(LocationTimeoutError):
        asyncio.run(acquire(sensor, AcquireOptions(timeout_ms=20)))

    on_success, on_error = sensor.callbacks
    errors = []

    def _fire():
        try:
            on_success({"latitude": 1.0, "longitude": 2.0, "accuracy": 3.0})
            on_error(PositionErrorCode.TIMEOUT)
        except Exception as e:
            errors.append(e)

    worker = threading.Thread(target=_fire)
    worker.start()
    worker.join()
    assert errors == []
