"""
Leaderboard service - ranks everyone who backs up to the shared sheet.

The sheet is the only place other players exist, so totals are summed from
its rows per trimmed user name. The current user's row always comes from the
local profile: pushes are fire-and-forget and the device is ahead of the
sheet. Without a reachable sheet the board is just the local user.
"""

import logging
from typing import Dict, List

from ecomission.backup.service import BackupService
from ecomission.core.store import LocalStore
from ecomission.gamification.rules import calculate_streak, parse_points, stage_for_points
from ecomission.leaderboard.models import (
    LeaderboardEntry,
    LeaderboardResponse,
    LeaderboardSource,
)

logger = logging.getLogger(__name__)


def aggregate_rows(rows: List) -> Dict[str, Dict[str, int]]:
    """Points and mission count per trimmed user name. Nameless rows are ignored."""
    totals: Dict[str, Dict[str, int]] = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        name = str(row.get("user") or "").strip()
        if not name:
            continue
        bucket = totals.setdefault(name, {"points": 0, "missions": 0})
        bucket["points"] += parse_points(row.get("points") or "0")
        bucket["missions"] += 1
    return totals


def rank_totals(totals: Dict[str, Dict[str, int]], current_name: str) -> List[LeaderboardEntry]:
    """Highest points first; equal points are ordered by name."""
    ordered = sorted(totals.items(), key=lambda item: (-item[1]["points"], item[0]))
    return [
        LeaderboardEntry(
            rank=index + 1,
            name=name,
            points=total["points"],
            missions_completed=total["missions"],
            stage=stage_for_points(total["points"]).value,
            is_current_user=name == current_name,
        )
        for index, (name, total) in enumerate(ordered)
    ]


class LeaderboardService:
    """Builds the ranking shown on the rank tab."""

    def __init__(self, store: LocalStore, backup: BackupService):
        self.store = store
        self.backup = backup

    async def get_leaderboard(self, limit: int = 20) -> LeaderboardResponse:
        user = self.store.load_user()
        logs = self.store.load_logs()
        current_name = user.name.strip()

        totals: Dict[str, Dict[str, int]] = {}
        source = LeaderboardSource.LOCAL
        message = None

        if self.backup.is_configured:
            try:
                totals = aggregate_rows(await self.backup.fetch_rows())
                source = LeaderboardSource.SHEET
            except Exception as e:
                logger.warning(f"Leaderboard falling back to local profile: {e}")
                message = "Sheet unavailable, showing local progress only"
        else:
            message = "Backup URL not configured, showing local progress only"

        totals[current_name] = {
            "points": user.lifetime_points,
            "missions": user.total_missions_completed,
        }

        ranked = rank_totals(totals, current_name)
        mine = next(entry for entry in ranked if entry.is_current_user)

        return LeaderboardResponse(
            entries=ranked[:limit],
            my_rank=mine,
            total_users=len(ranked),
            streak=calculate_streak(logs),
            source=source,
            message=message,
        )
