"""Mission API routes."""

from typing import List

from fastapi import APIRouter, Depends, Query

from ecomission.core.dependencies import get_mission_service
from ecomission.location.models import LocationInfo
from ecomission.location.service import GeocodingService
from ecomission.missions.models import (
    Mission,
    MissionCompletionResponse,
    MissionLog,
    MissionMode,
    MissionSuggestions,
    StreakResponse,
)
from ecomission.missions.openai_service import MissionGenerator
from ecomission.missions.service import MissionService
from ecomission.weather.service import WeatherService

router = APIRouter(prefix="/missions", tags=["Missions"])


@router.get("/suggestions", response_model=MissionSuggestions)
async def get_mission_suggestions(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    mode: MissionMode = MissionMode.OUTDOOR,
    service: MissionService = Depends(get_mission_service),
):
    """
    Generate missions for the user's spot.

    Looks up the address and the weather, then asks the model for missions
    that have not been completed today.
    """
    address = await GeocodingService().reverse_geocode(lat, lon)
    weather = await WeatherService().current_weather(lat, lon)

    return await MissionGenerator().generate_missions(
        weather,
        LocationInfo(latitude=lat, longitude=lon, address=address),
        mode,
        service.completed_titles_today(),
    )


@router.post("/complete", response_model=MissionCompletionResponse)
async def complete_mission(
    mission: Mission,
    service: MissionService = Depends(get_mission_service),
):
    """Award points for a mission, log it and push it to the backup sheet."""
    return await service.complete_mission(mission)


@router.get("/logs", response_model=List[MissionLog])
async def get_mission_logs(service: MissionService = Depends(get_mission_service)):
    """Every completed mission, oldest first."""
    return service.get_logs()


@router.get("/streak", response_model=StreakResponse)
async def get_streak(service: MissionService = Depends(get_mission_service)):
    """Consecutive days with at least one completed mission."""
    return service.streak()
