import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.geofence_routes import router as geofence_router
from core.config import DEV_DOMAIN, PRODUCTION_DOMAIN
from core.log import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

# Construct the list of allowed origins, always including both dev and production
allowed_origins_list = [
    DEV_DOMAIN,
    PRODUCTION_DOMAIN,
    "http://localhost:3000",  # Additional fallback for React dev
    "http://127.0.0.1:5173",  # Additional fallback for Vite dev
]

# Remove any None values and duplicates
allowed_origins_list = sorted(set(origin for origin in allowed_origins_list if origin))

logger.info(f"🌐 CORS: Allowing origins: {allowed_origins_list}")

app = FastAPI(title="Attendance Geofence")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Office geofence lookups for check-in screens
app.include_router(geofence_router, prefix="/geofence", tags=["Geofence"])
