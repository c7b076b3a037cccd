"""
Eco Mission API - Main application entry point.

Backend for a mobile web app that turns small eco-friendly actions into
missions, points and a growing plant.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecomission.core.config import get_settings
from ecomission.core.database import Database
from ecomission.core.logging_config import setup_logging
from ecomission.backup.views import router as backup_router
from ecomission.gamification.views import router as gamification_router
from ecomission.leaderboard.views import router as leaderboard_router
from ecomission.location.views import router as location_router
from ecomission.missions.views import router as missions_router
from ecomission.places.views import router as places_router
from ecomission.profile.views import router as profile_router
from ecomission.weather.views import router as weather_router

settings = get_settings()
API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} with {settings.STORAGE_BACKEND} storage")
    if not settings.BACKUP_SHEET_URL:
        logger.warning("BACKUP_SHEET_URL is not set; backup push/restore are disabled")
    yield
    Database.disconnect()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
## Eco Mission API

Everyday eco-friendly habits, turned into a game.

### Features

- 🌤️ **Missions**: AI-suggested small eco actions based on weather and location
- 🌱 **Growth**: points grow your plant from Sprout to Tree
- 🔥 **Streaks**: consecutive days with a completed mission
- 🏆 **Leaderboard**: everyone backing up to the same sheet, ranked by points
- 📍 **Places**: pinned shortcuts for home, office and favourite spots
- 💾 **Backup**: send completions to a spreadsheet and restore from it
    """,
    lifespan=lifespan,
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
routers = [
    profile_router,
    missions_router,
    places_router,
    backup_router,
    leaderboard_router,
    gamification_router,
    weather_router,
    location_router,
]

for router in routers:
    app.include_router(router, prefix=API_PREFIX)


@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "storage": settings.STORAGE_BACKEND,
        "backup": "configured" if settings.BACKUP_SHEET_URL else "not configured",
        "version": settings.APP_VERSION,
    }
