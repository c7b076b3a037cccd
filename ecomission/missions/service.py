"""Mission service - completion flow and the mission log."""

import logging
import time
from datetime import date, datetime
from typing import List, Optional

from ecomission.backup.service import BackupService
from ecomission.core.store import LocalStore
from ecomission.gamification.rules import calculate_streak, day_key
from ecomission.missions.models import (
    Mission,
    MissionCompletionResponse,
    MissionLog,
    StreakResponse,
)
from ecomission.profile.service import ProfileService

logger = logging.getLogger(__name__)


class MissionService:
    """Records completed missions and derives the daily streak."""

    def __init__(self, store: LocalStore, profile: ProfileService, backup: BackupService):
        self.store = store
        self.profile = profile
        self.backup = backup

    def get_logs(self) -> List[MissionLog]:
        return self.store.load_logs()

    def append_log(self, entry: MissionLog) -> List[MissionLog]:
        return self.store.append_log(entry)

    def logs_for_day(self, day: Optional[date] = None) -> List[MissionLog]:
        key = (day or date.today()).isoformat()
        return [log for log in self.store.load_logs() if day_key(log.completed_at) == key]

    def completed_titles_today(self) -> List[str]:
        """Titles already done today; passed to mission generation to avoid repeats."""
        return [log.title for log in self.logs_for_day()]

    def streak(self) -> StreakResponse:
        logs = self.store.load_logs()
        today = date.today()
        completed_today = sum(1 for log in logs if day_key(log.completed_at) == today.isoformat())
        return StreakResponse(
            streak=calculate_streak(logs, today=today),
            completed_today=completed_today,
        )

    async def complete_mission(self, mission: Mission) -> MissionCompletionResponse:
        """
        Award the mission's points, log it, then push it to the backup sheet.

        A failed push does not undo the local completion; its status is
        returned in ``backup_message``.
        """
        user = self.profile.award_points(mission.points)

        new_id = int(time.time() * 1000)
        existing = {log.id for log in self.store.load_logs()}
        while str(new_id) in existing:
            new_id += 1

        entry = MissionLog(
            id=str(new_id),
            mission_id=mission.id,
            title=mission.title,
            points=mission.points,
            completed_at=datetime.now().astimezone().isoformat(),
            type=mission.type,
        )
        logs = self.store.append_log(entry)

        backup_message = None
        if self.backup.is_configured:
            result = await self.backup.push(mission, user)
            backup_message = result.message

        logger.info(f"Mission completed: {mission.title} (+{mission.points}P)")
        return MissionCompletionResponse(
            user=user,
            log=entry,
            streak=calculate_streak(logs),
            backup_message=backup_message,
        )
