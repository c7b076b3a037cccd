"""Weather API routes."""

from fastapi import APIRouter, Query

from ecomission.weather.models import WeatherData
from ecomission.weather.service import WeatherService

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("", response_model=WeatherData)
async def get_current_weather(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
):
    """Current temperature and condition at a coordinate."""
    service = WeatherService()
    return await service.current_weather(lat, lon)
