"""Leaderboard models."""

from enum import Enum
from typing import List, Optional

from ecomission.core.schemas import CamelModel


class LeaderboardSource(str, Enum):
    SHEET = "sheet"
    LOCAL = "local"


class LeaderboardEntry(CamelModel):
    """One ranked player. Ranks are 1-based and unique."""
    rank: int
    name: str
    points: int
    missions_completed: int = 0
    stage: str
    is_current_user: bool = False


class LeaderboardResponse(CamelModel):
    """
    Top entries plus the current user's own row, which is always present
    even when it falls outside ``entries``.
    """
    entries: List[LeaderboardEntry]
    my_rank: Optional[LeaderboardEntry] = None
    total_users: int = 0
    streak: int = 0
    source: LeaderboardSource = LeaderboardSource.LOCAL
    message: Optional[str] = None
