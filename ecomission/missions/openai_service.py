"""OpenAI service for generating eco missions from weather and location."""

import json
import re
import time
from typing import List, Optional

from openai import AsyncOpenAI

from ecomission.core.config import get_settings
from ecomission.core.exceptions import UpstreamException
from ecomission.location.models import LocationInfo
from ecomission.missions.models import Mission, MissionMode, MissionSuggestions
from ecomission.weather.models import WeatherData

settings = get_settings()

MISSION_COUNT = 3


def _extract_json(content: str) -> str:
    """Strip a markdown code fence if the model wrapped its JSON in one."""
    json_match = re.search(r'```(?:json)?\s*([\s\S]*?)\s*```', content)
    if json_match:
        return json_match.group(1).strip()
    return content.strip()


def parse_suggestions(content: str) -> MissionSuggestions:
    """Turn the model's JSON reply into missions, filling ids it left out."""
    try:
        data = json.loads(_extract_json(content))
    except json.JSONDecodeError as e:
        raise UpstreamException(f"Failed to parse OpenAI response as JSON: {e}. Response: {content[:200]}")

    if isinstance(data, list):
        data = {"missions": data}
    if not isinstance(data, dict):
        raise UpstreamException("OpenAI response is not a JSON object")

    stamp = int(time.time() * 1000)
    missions: List[Mission] = []
    for i, item in enumerate(data.get("missions") or []):
        if not isinstance(item, dict) or not item.get("title"):
            continue
        item.setdefault("id", f"m-{stamp}-{i}")
        try:
            missions.append(Mission.model_validate(item))
        except ValueError:
            continue

    return MissionSuggestions(
        missions=missions,
        location_context=str(data.get("locationContext") or ""),
    )


class MissionGenerator:
    """Handles OpenAI API interactions for mission suggestions."""

    _instance: "MissionGenerator" = None

    def __new__(cls):
        """Singleton pattern for OpenAI client."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY or "missing")
            cls._instance.model = settings.OPENAI_MODEL
        return cls._instance

    async def generate_missions(
        self,
        weather: WeatherData,
        location: LocationInfo,
        mode: MissionMode,
        exclude_titles: Optional[List[str]] = None,
    ) -> MissionSuggestions:
        """
        Suggest small eco actions that fit the weather, the place and whether
        the user is indoors or outdoors. Titles already completed today are
        excluded.
        """
        if not settings.OPENAI_API_KEY:
            raise UpstreamException("OpenAI API key is missing. Please set OPENAI_API_KEY in your environment.")

        excluded = ", ".join(exclude_titles or []) or "none"
        setting = "indoors" if mode == MissionMode.INDOOR else "outdoors"

        prompt = f"""You are a friendly coach for everyday eco-friendly habits.

The user is {setting} near: {location.address} (lat {location.latitude:.4f}, lon {location.longitude:.4f}).
Current weather: {weather.temperature:.0f}°C, {weather.description or weather.condition_code.value}.

Suggest {MISSION_COUNT} small eco missions the user can finish in a few minutes right where they are.
Do NOT suggest any of these, already completed today: {excluded}.

Return a JSON object with this structure:
{{
    "locationContext": "one short sentence describing the surroundings",
    "missions": [
        {{
            "title": "short imperative title",
            "description": "one or two sentences on what to do and why it helps",
            "points": 10 to 100,
            "estimatedTimeSeconds": seconds needed,
            "type": "recycling" or "energy" or "transport" or "water" or "consumption" or "nature",
            "iconName": "a lucide icon name, e.g. Leaf, Recycle, Footprints, Droplets"
        }}
    ]
}}

Return ONLY the JSON object, no other text."""

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=800,
                temperature=0.8,
            )
        except Exception as e:
            error_msg = str(e)
            if "api key" in error_msg.lower() or "authentication" in error_msg.lower():
                raise UpstreamException("OpenAI API key is missing or invalid. Please set OPENAI_API_KEY in your environment.")
            raise UpstreamException(f"OpenAI API error: {error_msg}")

        if not response.choices or not response.choices[0].message.content:
            raise UpstreamException("OpenAI returned an empty response")

        suggestions = parse_suggestions(response.choices[0].message.content)

        # The model does not always honour the exclusion list.
        done = {t.strip() for t in exclude_titles or []}
        suggestions.missions = [m for m in suggestions.missions if m.title.strip() not in done]
        return suggestions
