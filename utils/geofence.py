# utils/geofence.py

import logging
from math import atan2, cos, floor, isnan, radians, sin, sqrt

from models.geo import OFFICE_GEOFENCE, GeofenceConfig, GeofenceVerdict, GeoPoint

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6371000

IN_RANGE_MESSAGE = "Location verified - you're at the office!"


def haversine_dist(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    φ1, φ2 = radians(lat1), radians(lat2)
    Δφ = radians(lat2 - lat1)
    Δλ = radians(lng2 - lng1)

    a = sin(Δφ / 2) ** 2 + cos(φ1) * cos(φ2) * sin(Δλ / 2) ** 2
    # Rounding can push near-antipodal pairs just past 1; NaN passes through
    if a > 1.0:
        a = 1.0
    elif a < 0.0:
        a = 0.0
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters between two points (unrounded)."""
    return haversine_dist(a.latitude, a.longitude, b.latitude, b.longitude)


def _format_radius(radius_m: float) -> str:
    return str(int(radius_m)) if float(radius_m).is_integer() else str(radius_m)


def evaluate(sample: GeoPoint, config: GeofenceConfig = OFFICE_GEOFENCE) -> GeofenceVerdict:
    """
    Compare a fix against a circular geofence.

    Recomputed on every call; a point exactly on the radius counts as inside.
    A fix with NaN coordinates has no distance and is always outside.
    """
    d = distance(sample, config.center)
    radius = _format_radius(config.radius_meters)

    if isnan(d):
        logger.warning(f"[GEOFENCE] ⚠️ Fix ({sample.latitude}, {sample.longitude}) has no usable distance")
        return GeofenceVerdict(
            within_range=False,
            distance_meters=None,
            message=(
                "Unable to determine your distance from the office. "
                f"You must be within {radius}m to check in."
            ),
        )

    within_range = d <= config.radius_meters
    # Half-up rounding; d is never negative
    rounded = int(floor(d + 0.5))

    if within_range:
        message = IN_RANGE_MESSAGE
    else:
        message = (
            f"You are {rounded}m away from the office. "
            f"You must be within {radius}m to check in."
        )

    logger.debug(
        f"[GEOFENCE] 📍 ({sample.latitude}, {sample.longitude}) is {d:.2f}m from center, "
        f"radius {config.radius_meters}m -> {'inside' if within_range else 'outside'}"
    )
    return GeofenceVerdict(within_range=within_range, distance_meters=rounded, message=message)
