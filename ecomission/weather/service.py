"""Weather service using OpenWeatherMap API."""

from typing import Optional

import httpx

from ecomission.core.config import get_settings
from ecomission.core.exceptions import UpstreamException
from ecomission.weather.models import ConditionCode, WeatherData

settings = get_settings()


# OpenWeatherMap "main" groups folded into the four codes the client draws.
CONDITION_MAP = {
    "Rain": ConditionCode.RAIN,
    "Drizzle": ConditionCode.RAIN,
    "Thunderstorm": ConditionCode.RAIN,
    "Snow": ConditionCode.SNOW,
    "Clouds": ConditionCode.CLOUDS,
    "Mist": ConditionCode.CLOUDS,
    "Fog": ConditionCode.CLOUDS,
    "Haze": ConditionCode.CLOUDS,
    "Smoke": ConditionCode.CLOUDS,
    "Dust": ConditionCode.CLOUDS,
    "Clear": ConditionCode.SUNNY,
}


def condition_code_for(main: Optional[str]) -> ConditionCode:
    return CONDITION_MAP.get(main or "", ConditionCode.SUNNY)


class WeatherService:
    """Fetches current conditions for a coordinate."""

    _instance: "WeatherService" = None

    def __new__(cls):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.api_key = settings.OPENWEATHER_API_KEY
            cls._instance.base_url = "https://api.openweathermap.org/data/2.5"
            cls._instance.transport = None
        return cls._instance

    async def current_weather(self, lat: float, lon: float) -> WeatherData:
        """Temperature (°C), description and coarse condition code at lat/lon."""
        if not self.api_key:
            raise UpstreamException("Weather service is not configured (OPENWEATHER_API_KEY).")

        try:
            async with httpx.AsyncClient(timeout=10.0, transport=self.transport) as client:
                response = await client.get(
                    f"{self.base_url}/weather",
                    params={"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamException(f"Failed to fetch weather data: HTTP {e.response.status_code}")
        except Exception as e:
            raise UpstreamException(f"Failed to fetch weather data: {str(e)}")

        try:
            weather = (data.get("weather") or [{}])[0]
            return WeatherData(
                temperature=data["main"]["temp"],
                description=weather.get("description", ""),
                condition_code=condition_code_for(weather.get("main")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamException(f"Unexpected weather response: {e}")
