"""
Common dependencies for FastAPI routes.

The whole API serves one device, so a single LocalStore is shared by every
request. Tests swap it out through ``app.dependency_overrides[get_store]``.
"""

from functools import lru_cache

from fastapi import Depends

from ecomission.backup.service import BackupService
from ecomission.core.config import get_settings
from ecomission.core.storage import create_backend
from ecomission.core.store import LocalStore
from ecomission.leaderboard.service import LeaderboardService
from ecomission.missions.service import MissionService
from ecomission.places.service import PlacesService
from ecomission.profile.service import ProfileService


@lru_cache
def get_store() -> LocalStore:
    """Process-wide store on the configured backend."""
    return LocalStore(create_backend(get_settings()))


def get_profile_service(store: LocalStore = Depends(get_store)) -> ProfileService:
    return ProfileService(store)


def get_backup_service(store: LocalStore = Depends(get_store)) -> BackupService:
    return BackupService(store, get_settings())


def get_places_service(store: LocalStore = Depends(get_store)) -> PlacesService:
    return PlacesService(store)


def get_mission_service(
    store: LocalStore = Depends(get_store),
    profile: ProfileService = Depends(get_profile_service),
    backup: BackupService = Depends(get_backup_service),
) -> MissionService:
    return MissionService(store, profile, backup)


def get_leaderboard_service(
    store: LocalStore = Depends(get_store),
    backup: BackupService = Depends(get_backup_service),
) -> LeaderboardService:
    return LeaderboardService(store, backup)
