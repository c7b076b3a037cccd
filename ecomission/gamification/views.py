"""Gamification API endpoints."""

from typing import List

from fastapi import APIRouter, Query

from ecomission.gamification.models import StageDefinition, StageProgress
from ecomission.gamification.rules import STAGES, stage_progress

router = APIRouter(prefix="/stages", tags=["Gamification"])


@router.get("", response_model=List[StageDefinition])
async def get_all_stages():
    """
    Get all growth stages, lowest first.
    Stages are static, so no profile is needed.
    """
    return STAGES


@router.get("/progress", response_model=StageProgress)
async def get_progress_for_points(points: int = Query(..., ge=0)):
    """Stage and progress for an arbitrary lifetime-points total."""
    return stage_progress(points)
