import os
from dotenv import load_dotenv

# Load environment variables from .env file, if it exists
load_dotenv()

# Settings are read once at import time; nothing below is mutated at runtime.

APP_ENV = os.getenv("APP_ENV", "development").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Office geofence (circular). Defaults to the head office coordinate.
OFFICE_LAT = float(os.getenv("OFFICE_LAT", "5.767477"))
OFFICE_LNG = float(os.getenv("OFFICE_LNG", "-0.180019"))
OFFICE_RADIUS_METERS = float(os.getenv("OFFICE_RADIUS_METERS", "100"))

# Location sensor request defaults
LOCATION_HIGH_ACCURACY = os.getenv("LOCATION_HIGH_ACCURACY", "True").lower() in ("true", "1", "t")
LOCATION_TIMEOUT_MS = int(os.getenv("LOCATION_TIMEOUT_MS", "15000"))
LOCATION_MAX_CACHE_AGE_MS = int(os.getenv("LOCATION_MAX_CACHE_AGE_MS", "0"))

# Attendance backend
ATTENDANCE_API_BASE_URL = os.getenv(
    "ATTENDANCE_API_BASE_URL", "https://vireworkplace-backend-hpca.onrender.com/api/v1"
).rstrip("/")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "30"))

# CORS origins for the geofence HTTP surface
DEV_DOMAIN = os.getenv("DEV_DOMAIN", "http://localhost:5173")
PRODUCTION_DOMAIN = os.getenv("PRODUCTION_DOMAIN", "https://vireworkplace.vercel.app")

if OFFICE_RADIUS_METERS <= 0:
    raise ValueError(f"OFFICE_RADIUS_METERS must be positive, got {OFFICE_RADIUS_METERS}")
if LOCATION_TIMEOUT_MS <= 0:
    raise ValueError(f"LOCATION_TIMEOUT_MS must be positive, got {LOCATION_TIMEOUT_MS}")


def is_development() -> bool:
    return APP_ENV in ("development", "dev", "local")
