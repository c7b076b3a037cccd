"""Mission models - AI-suggested missions and the completion log."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from ecomission.core.schemas import CamelModel
from ecomission.profile.models import User

RECOVERED_TYPE = "recovered"


class MissionMode(str, Enum):
    """Where the user currently is; shapes which missions are suggested."""
    INDOOR = "indoor"
    OUTDOOR = "outdoor"


class Mission(CamelModel):
    """A candidate eco action the user can complete for points."""
    id: str
    title: str
    description: str = ""
    points: int = Field(..., ge=0)
    estimated_time_seconds: int = Field(default=60, ge=0)
    type: str = "general"  # category, e.g. recycling, energy, transport
    icon_name: str = "Leaf"


class MissionSuggestions(CamelModel):
    """Generated missions plus a short description of the user's surroundings."""
    missions: List[Mission] = Field(default_factory=list)
    location_context: str = ""


class MissionLog(CamelModel):
    """
    One completed mission. Never edited after it is written; the whole list
    is only replaced by a backup restore.
    """
    id: str
    mission_id: str
    title: str
    points: int = 0
    completed_at: str  # ISO-8601, local clock
    type: str = "general"  # mission category, or "recovered"


class MissionCompletionResponse(CamelModel):
    user: User
    log: MissionLog
    streak: int
    backup_message: Optional[str] = None


class StreakResponse(CamelModel):
    streak: int
    completed_today: int
