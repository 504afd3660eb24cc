#!/usr/bin/env python3
"""
Serve the read-only office geofence API.

    python -m scripts.run --port 8000
"""

import argparse
import logging
import os
from typing import Optional

import uvicorn

from core.log import configure_logging
from models.geo import OFFICE_GEOFENCE, AcquireOptions

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the office geofence API")
    parser.add_argument("--host", default=os.getenv("APP_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("APP_PORT", "8000")))
    parser.add_argument("--log-level", default=os.getenv("APP_LOG_LEVEL", "info"))
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    center = OFFICE_GEOFENCE.center
    options = AcquireOptions()
    logger.info(
        f"[GEOFENCE] 🏢 Serving office geofence ({center.latitude}, {center.longitude}) "
        f"radius {OFFICE_GEOFENCE.radius_meters}m"
    )
    logger.info(
        f"[LOCATION] 🛰️ Default sensor options: high_accuracy={options.high_accuracy}, "
        f"timeout_ms={options.timeout_ms}, max_cache_age_ms={options.max_cache_age_ms}"
    )

    # Imported here so logging is configured before the app module loads
    from main import app

    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
