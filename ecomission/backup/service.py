"""
Backup to and restore from a spreadsheet web app (Google Apps Script).

Push sends one completed mission per request and is fire-and-forget: the
sheet endpoint answers with a redirect we do not follow, so a push counts as
successful once the request went out without a transport error. There is no
acknowledgement and no retry.

Restore pulls every row, keeps the ones for the given name and replaces the
local log and point totals with what the rows add up to. It is a destructive
"adopt the sheet as truth" operation, not a merge.
"""

import json
import logging
import time
from datetime import datetime
from typing import List, Optional

import httpx

from ecomission.backup.models import SyncData, SyncResult
from ecomission.core.config import Settings, get_settings
from ecomission.core.store import LocalStore
from ecomission.gamification.rules import parse_points, stage_for_points
from ecomission.missions.models import RECOVERED_TYPE, Mission, MissionLog
from ecomission.profile.models import User

logger = logging.getLogger(__name__)

DEFAULT_RECOVERED_TITLE = "Recovered mission"


class BackupError(Exception):
    """A restore could not read usable rows from the sheet."""


def _now_millis() -> int:
    return int(time.time() * 1000)


def _local_now_iso() -> str:
    return datetime.now().astimezone().isoformat()


class BackupService:
    """Push/restore against the configured backup sheet URL."""

    def __init__(
        self,
        store: LocalStore,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.transport = transport

    @property
    def url(self) -> str:
        return (self.settings.BACKUP_SHEET_URL or "").strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.url)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.BACKUP_TIMEOUT_SECONDS,
            transport=self.transport,
        )

    async def push(self, mission: Mission, user: User) -> SyncResult:
        """Send one completed mission. Success means "dispatched", not "stored"."""
        if not self.is_configured:
            return SyncResult(success=False, message="Backup URL not configured")

        payload = {
            "user": user.name,
            "mission": mission.title,
            "points": mission.points,
            "level": user.stage,
        }

        try:
            async with self._client() as client:
                await client.post(
                    self.url,
                    content=json.dumps(payload, ensure_ascii=False),
                    headers={"Content-Type": "text/plain;charset=utf-8"},
                )
        except Exception as e:
            logger.error(f"Backup push failed for {user.name}: {e}")
            return SyncResult(success=False, message="Send failed")

        return SyncResult(success=True, message="Sent! (shows up in the sheet within a few seconds)")

    async def fetch_rows(self) -> List:
        """All sheet rows, unfiltered. Raises BackupError on a bad response."""
        async with self._client() as client:
            response = await client.get(self.url, params={"t": _now_millis()})

        if not response.is_success:
            raise BackupError(f"Server responded with an error ({response.status_code})")

        try:
            rows = response.json()
        except ValueError:
            raise BackupError("Malformed data (response is not JSON)")

        if isinstance(rows, list):
            return rows
        if isinstance(rows, dict) and isinstance(rows.get("data"), list):
            return rows["data"]
        raise BackupError("Malformed data (expected a list of rows)")

    @staticmethod
    def _rows_to_logs(rows: List[dict]) -> List[MissionLog]:
        millis = _now_millis()
        logs = []
        for index, row in enumerate(rows):
            timestamp = row.get("timestamp")
            logs.append(MissionLog(
                id=f"rec-{index}-{millis}",
                mission_id=f"sheet-{index}",
                title=str(row.get("mission") or DEFAULT_RECOVERED_TITLE),
                points=parse_points(row.get("points") or "0"),
                completed_at=str(timestamp) if timestamp else _local_now_iso(),
                type=RECOVERED_TYPE,
            ))
        return logs

    async def restore(self, user_name: str) -> SyncResult:
        """
        Replace local history with the sheet rows recorded under user_name.

        Matching is exact on the trimmed name (case-sensitive). No matching
        rows is a successful call that changes nothing. Any fetch or parse
        failure leaves local state untouched.
        """
        if not self.is_configured:
            return SyncResult(success=False, message="Backup URL not configured")

        target = (user_name or "").strip()

        try:
            rows = await self.fetch_rows()

            user_rows = [
                row for row in rows
                if isinstance(row, dict)
                and row.get("user") not in (None, "")
                and str(row["user"]).strip() == target
            ]

            if not user_rows:
                return SyncResult(success=True, message=f"No records found for '{target}' in the sheet.")

            recovered = self._rows_to_logs(user_rows)
        except Exception as e:
            logger.error(f"Backup restore failed for {target}: {e}")
            return SyncResult(success=False, message=f"Restore failed: {str(e) or 'unknown error'}")

        total_points = sum(log.points for log in recovered)
        self.store.save_logs(recovered)

        user = self.store.load_user()
        user.points = total_points
        user.lifetime_points = total_points
        user.total_missions_completed = len(recovered)
        user.stage = stage_for_points(total_points).value
        self.store.save_user(user)

        logger.info(f"Restored {len(recovered)} missions ({total_points}P) for {target}")
        return SyncResult(
            success=True,
            message=f"Restore complete! Total {total_points}P",
            data=SyncData(user=user, logs=recovered),
        )
