"""Gamification models - Stage definitions and responses."""

from enum import Enum
from typing import Optional

from ecomission.core.schemas import CamelModel


class Stage(str, Enum):
    """Growth stages of the user's plant, lowest first."""
    SPROUT = "Sprout"
    FLOWER = "Flower"
    FRUIT = "Fruit"
    TREE = "Tree"


class StageDefinition(CamelModel):
    """A single stage and the lifetime points needed to reach it."""
    stage: Stage
    min_points: int
    icon: str


class StageProgress(CamelModel):
    """Where a lifetime-points total sits within the stage ladder."""
    stage: Stage
    icon: str
    lifetime_points: int
    stage_min_points: int
    next_stage: Optional[Stage] = None  # None at the top stage
    points_to_next_stage: Optional[int] = None
    progress_percent: float  # 0-100
