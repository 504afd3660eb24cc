#!/usr/bin/env python3
"""
Validate a reported location against the office geofence.

Run from the project root:
    python -m scripts.check_location --lat 5.7675 --lng -0.1801
    python -m scripts.check_location --lat 5.7675 --lng -0.1801 --check-in --token <JWT>
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from core.log import configure_logging
from models.geo import OFFICE_GEOFENCE, AcquireOptions, GeofenceConfig, GeoPoint, WorkLocation
from services.attendance_client import AttendanceApiClient
from services.checkin_service import CheckInService
from services.location_validation import validate_location
from services.sensors import ReportedLocationSensor


def _build_config(args: argparse.Namespace) -> GeofenceConfig:
    center = OFFICE_GEOFENCE.center
    if args.center_lat is not None or args.center_lng is not None:
        center = GeoPoint(
            latitude=args.center_lat if args.center_lat is not None else center.latitude,
            longitude=args.center_lng if args.center_lng is not None else center.longitude,
        )
    radius = args.radius if args.radius is not None else OFFICE_GEOFENCE.radius_meters
    return GeofenceConfig(center=center, radius_meters=radius)


async def _run(args: argparse.Namespace) -> int:
    config = _build_config(args)
    sensor = ReportedLocationSensor(latitude=args.lat, longitude=args.lng, accuracy=args.accuracy)
    options = AcquireOptions(timeout_ms=args.timeout_ms) if args.timeout_ms else None

    if args.check_in:
        if not args.token:
            print("❌ --token is required with --check-in", file=sys.stderr)
            return 2
        service = CheckInService(AttendanceApiClient(), sensor, config, options)
        outcome = await service.check_in(args.token, args.work_location)
        if args.json:
            print(json.dumps(outcome.model_dump(mode="json"), ensure_ascii=False, indent=2))
        else:
            print(f"{'✅' if outcome.success else '❌'} {outcome.message}")
        return 0 if outcome.success else 1

    result = await validate_location(args.work_location, config, sensor, options)
    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        print(f"{'✅' if result.success else '❌'} {result.message}")
        if result.distance_meters is not None:
            print(f"   📏 Distance from office: {result.distance_meters}m (radius {config.radius_meters}m)")
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check a location against the office geofence")
    parser.add_argument("--lat", type=float, default=None, help="Reported latitude")
    parser.add_argument("--lng", type=float, default=None, help="Reported longitude")
    parser.add_argument("--accuracy", type=float, default=0.0, help="Reported accuracy in meters")
    parser.add_argument(
        "--work-location",
        choices=[w.value for w in WorkLocation],
        default=WorkLocation.OFFICE.value,
    )
    parser.add_argument("--center-lat", type=float, default=None, help="Override geofence center latitude")
    parser.add_argument("--center-lng", type=float, default=None, help="Override geofence center longitude")
    parser.add_argument("--radius", type=float, default=None, help="Override geofence radius in meters")
    parser.add_argument("--timeout-ms", type=int, default=None, help="Sensor timeout in milliseconds")
    parser.add_argument("--check-in", action="store_true", help="Submit an attendance check-in when valid")
    parser.add_argument("--token", default=None, help="Access token for --check-in")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("WARNING")
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
