"""Backup models - results of pushing to and restoring from the backup sheet."""

from typing import List, Optional

from pydantic import Field

from ecomission.core.schemas import CamelModel
from ecomission.missions.models import MissionLog
from ecomission.profile.models import User


class SyncData(CamelModel):
    """State adopted from a restore."""
    user: User
    logs: List[MissionLog]


class SyncResult(CamelModel):
    """
    Outcome of a backup call. Failures are reported here rather than raised;
    ``data`` is only set by a restore that found rows.
    """
    success: bool
    message: str
    data: Optional[SyncData] = None


class RestoreRequest(CamelModel):
    """Restore rows for this name; defaults to the current profile name."""
    user_name: Optional[str] = Field(default=None, max_length=50)
