"""Backup API routes."""

from typing import Optional

from fastapi import APIRouter, Depends

from ecomission.backup.models import RestoreRequest, SyncResult
from ecomission.backup.service import BackupService
from ecomission.core.dependencies import get_backup_service, get_profile_service
from ecomission.missions.models import Mission
from ecomission.profile.service import ProfileService

router = APIRouter(prefix="/backup", tags=["Backup"])


@router.post("/push", response_model=SyncResult)
async def push_last_mission(
    backup: BackupService = Depends(get_backup_service),
    profile: ProfileService = Depends(get_profile_service),
):
    """
    Re-send the most recent completed mission to the backup sheet.

    Delivery is fire-and-forget; see ``BackupService.push``.
    """
    logs = backup.store.load_logs()
    if not logs:
        return SyncResult(success=False, message="No completed missions to send")

    last = logs[-1]
    mission = Mission(id=last.mission_id, title=last.title, points=max(0, last.points), type=last.type)
    return await backup.push(mission, profile.get_user())


@router.post("/restore", response_model=SyncResult)
async def restore_from_backup(
    body: Optional[RestoreRequest] = None,
    backup: BackupService = Depends(get_backup_service),
    profile: ProfileService = Depends(get_profile_service),
):
    """
    Replace local missions and points with the rows saved under a name.

    This overwrites local history; it does not merge.
    """
    user_name = body.user_name if body and body.user_name else profile.get_user().name
    return await backup.restore(user_name)
