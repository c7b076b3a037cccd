"""
Local persistence for the device's three records: user profile, mission log
and saved places.

Each record is JSON text under a fixed key of a ``StorageBackend``. Loading
never raises: missing values yield defaults and corrupt values are logged,
discarded and replaced by defaults. The mission log is the exception: its
entries are checked individually, so a single bad entry is repaired or
skipped without losing the rest. Saving never raises either; a failed
write is logged and the caller keeps its in-memory result.
"""

import json
import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ecomission.core.storage import StorageBackend
from ecomission.gamification.rules import parse_points, stage_for_points
from ecomission.missions.models import MissionLog, MissionMode
from ecomission.places.models import SavedPlace
from ecomission.profile.models import User

logger = logging.getLogger(__name__)

USER_KEY = "eco_user_v1"
LOGS_KEY = "eco_logs_v1"
PLACES_KEY = "eco_places_v1"

UNTITLED_MISSION = "Untitled mission"

_PLACES_ADAPTER = TypeAdapter(List[SavedPlace])


def default_places() -> List[SavedPlace]:
    """Seed shortcuts shown before the user pins anything."""
    return [
        SavedPlace(id=1, name="Home", type=MissionMode.INDOOR,
                   address="Gangnam-gu, Seoul (home)", lat=37.5642, lon=127.0016),
        SavedPlace(id=2, name="Office", type=MissionMode.INDOOR,
                   address="Jung-gu, Seoul (office)", lat=37.5635, lon=126.9750),
        SavedPlace(id=3, name="Neighborhood Park", type=MissionMode.OUTDOOR,
                   address="Mapo-gu, Seoul (park)", lat=37.5568, lon=126.9237),
    ]


def _migrate_user(raw: dict) -> dict:
    """Bring records written by older app versions up to the current schema."""
    if raw.get("lifetimePoints", raw.get("lifetime_points")) is None:
        raw["lifetimePoints"] = raw.get("points", 0)
    if raw.get("inventory") is None:
        raw["inventory"] = []
    return raw


def _lenient_points(raw) -> int:
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return max(0, int(raw))
    return parse_points(raw)


def _first(item: dict, *keys):
    for key in keys:
        value = item.get(key)
        if value not in (None, ""):
            return value
    return None


def _repair_log(item, index: int) -> Optional[MissionLog]:
    """
    Best-effort rebuild of a log entry written by an older or hand-edited
    client. Entries without a completion timestamp cannot be placed on a
    day and are given up on.
    """
    if not isinstance(item, dict):
        return None

    completed_at = _first(item, "completedAt", "completed_at")
    if completed_at is None:
        return None

    try:
        return MissionLog(
            id=str(_first(item, "id") or f"log-{index}"),
            mission_id=str(_first(item, "missionId", "mission_id") or ""),
            title=str(_first(item, "title") or UNTITLED_MISSION),
            points=_lenient_points(item.get("points")),
            completed_at=str(completed_at),
            type=str(_first(item, "type") or "general"),
        )
    except ValidationError:
        return None


class LocalStore:
    """Read/write access to the persisted records of one device."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    # --- raw helpers ---

    def _read_json(self, key: str):
        """Parsed JSON under key, or None if absent. Raises on bad JSON."""
        stored = self.backend.get_item(key)
        if stored is None or stored == "":
            return None
        return json.loads(stored)

    def _write_json(self, key: str, value) -> bool:
        try:
            self.backend.set_item(key, json.dumps(value, ensure_ascii=False))
            return True
        except Exception as e:
            logger.error(f"Failed to save {key}: {e}")
            return False

    # --- user ---

    def load_user(self) -> User:
        """Stored user, migrated to the current schema; a fresh default otherwise."""
        try:
            raw = self._read_json(USER_KEY)
            if raw is not None:
                if not isinstance(raw, dict):
                    raise ValueError(f"expected an object, got {type(raw).__name__}")
                user = User.model_validate(_migrate_user(raw))
                user.stage = stage_for_points(user.lifetime_points).value
                return user
        except (ValueError, ValidationError) as e:
            logger.error(f"User data corrupted, resetting: {e}")
            self._discard(USER_KEY)
        except Exception as e:
            logger.error(f"User data unavailable, using defaults: {e}")
        return User()

    def save_user(self, user: User) -> bool:
        return self._write_json(USER_KEY, user.to_record())

    # --- mission log ---

    def load_logs(self) -> List[MissionLog]:
        """
        Stored log entries, oldest first.

        Only unparseable JSON (or a non-list) drops the record. Entries are
        checked one by one; off-schema ones are repaired where possible and
        skipped otherwise, so one bad row never costs the rest of the history.
        """
        try:
            raw = self._read_json(LOGS_KEY)
        except Exception as e:
            logger.error(f"Logs corrupted, resetting: {e}")
            return []

        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.error(f"Logs corrupted, resetting: expected a list, got {type(raw).__name__}")
            return []

        logs = []
        for index, item in enumerate(raw):
            try:
                logs.append(MissionLog.model_validate(item))
                continue
            except ValidationError:
                pass

            repaired = _repair_log(item, index)
            if repaired is None:
                logger.warning(f"Skipping unrecoverable log entry #{index}: {item!r:.200}")
            else:
                logger.warning(f"Repaired off-schema log entry #{index}")
                logs.append(repaired)
        return logs

    def save_logs(self, logs: List[MissionLog]) -> bool:
        return self._write_json(LOGS_KEY, [log.to_record() for log in logs])

    def append_log(self, entry: MissionLog) -> List[MissionLog]:
        """Load, append, save the whole list. Returns the new list."""
        logs = self.load_logs()
        logs.append(entry)
        self.save_logs(logs)
        return logs

    # --- saved places ---

    def load_places(self) -> List[SavedPlace]:
        try:
            raw = self._read_json(PLACES_KEY)
            if raw is not None:
                return _PLACES_ADAPTER.validate_python(raw)
        except Exception as e:
            logger.error(f"Saved places corrupted, using defaults: {e}")
        return default_places()

    def save_places(self, places: List[SavedPlace]) -> bool:
        return self._write_json(PLACES_KEY, [place.to_record() for place in places])

    # --- wipe ---

    def clear(self) -> None:
        """Remove every record; the next loads return defaults."""
        for key in (USER_KEY, LOGS_KEY, PLACES_KEY):
            self._discard(key)

    def _discard(self, key: str) -> None:
        try:
            self.backend.remove_item(key)
        except Exception as e:
            logger.error(f"Failed to remove {key}: {e}")
