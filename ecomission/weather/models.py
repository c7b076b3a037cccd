"""Weather-related models and schemas."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from ecomission.core.schemas import CamelModel


class ConditionCode(str, Enum):
    """Coarse sky condition used to pick icons and mission themes."""
    SUNNY = "Sunny"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    SNOW = "Snow"


class WeatherData(CamelModel):
    """Current weather at a coordinate."""
    temperature: float
    description: str = ""
    condition_code: ConditionCode = ConditionCode.SUNNY
    fetched_at: datetime = Field(default_factory=datetime.utcnow)
