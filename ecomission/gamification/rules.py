"""
Progression rules: growth stage from lifetime points, daily streak from the
mission log.

Everything here is pure; the only ambient input is the local calendar date,
which callers may pass explicitly.
"""

import logging
import re
from datetime import date, timedelta
from typing import Iterable, List, Optional, Set

from ecomission.gamification.models import Stage, StageDefinition, StageProgress

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")


# Ascending; each stage starts at min_points (inclusive).
STAGES: List[StageDefinition] = [
    StageDefinition(stage=Stage.SPROUT, min_points=0, icon="🌱"),
    StageDefinition(stage=Stage.FLOWER, min_points=500, icon="🌸"),
    StageDefinition(stage=Stage.FRUIT, min_points=1500, icon="🍎"),
    StageDefinition(stage=Stage.TREE, min_points=3000, icon="🌳"),
]


def _stage_index(lifetime_points: int) -> int:
    index = 0
    for i, definition in enumerate(STAGES):
        if lifetime_points >= definition.min_points:
            index = i
    return index


def stage_for_points(lifetime_points: int) -> Stage:
    """Stage reached with the given lifetime points."""
    return STAGES[_stage_index(lifetime_points)].stage


def stage_progress(lifetime_points: int) -> StageProgress:
    """
    Current stage plus progress towards the next one.
    At the top stage there is no next stage and progress is 100%.
    """
    index = _stage_index(lifetime_points)
    current = STAGES[index]

    if index == len(STAGES) - 1:
        return StageProgress(
            stage=current.stage,
            icon=current.icon,
            lifetime_points=lifetime_points,
            stage_min_points=current.min_points,
            progress_percent=100.0,
        )

    nxt = STAGES[index + 1]
    range_size = nxt.min_points - current.min_points
    progress_in_range = max(0, lifetime_points - current.min_points)
    progress_percent = min(100.0, (progress_in_range / range_size) * 100)

    return StageProgress(
        stage=current.stage,
        icon=current.icon,
        lifetime_points=lifetime_points,
        stage_min_points=current.min_points,
        next_stage=nxt.stage,
        points_to_next_stage=nxt.min_points - max(lifetime_points, current.min_points),
        progress_percent=round(progress_percent, 1),
    )


def parse_points(raw) -> int:
    """
    Lenient points parser for hand-edited sheet cells.

    Drops every non-digit ("100P" -> 100, "1,200" -> 1200) and falls back
    to 0 when nothing numeric is left.
    """
    digits = _NON_DIGITS.sub("", str(raw if raw is not None else "0"))
    if not digits:
        return 0
    return int(digits)


def day_key(completed_at) -> str:
    """``YYYY-MM-DD`` bucket of an ISO timestamp (the part before ``T``)."""
    return str(completed_at).split("T")[0]


def _completed_at(entry):
    if isinstance(entry, dict):
        return entry["completedAt"]
    return entry.completed_at


def calculate_streak(logs: Optional[Iterable], today: Optional[date] = None) -> int:
    """
    Number of consecutive calendar days with at least one completed mission.

    The run ends today, or yesterday when nothing has been logged yet today,
    so the streak does not drop to zero before the user has had a chance to
    act. Returns 0 when neither day has an entry, and on any malformed input.
    """
    if not logs:
        return 0

    try:
        days: Set[str] = {day_key(_completed_at(entry)) for entry in logs}

        cursor = today or date.today()
        if cursor.isoformat() not in days:
            cursor -= timedelta(days=1)
            if cursor.isoformat() not in days:
                return 0

        streak = 0
        while cursor.isoformat() in days:
            streak += 1
            cursor -= timedelta(days=1)
        return streak
    except Exception as e:
        logger.error(f"Streak calculation failed: {e}")
        return 0
