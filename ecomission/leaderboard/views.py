"""Leaderboard API routes."""

from fastapi import APIRouter, Depends, Query

from ecomission.core.dependencies import get_leaderboard_service
from ecomission.leaderboard.models import LeaderboardResponse
from ecomission.leaderboard.service import LeaderboardService

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    limit: int = Query(20, ge=1, le=100),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """
    Players ranked by lifetime points, read from the backup sheet.

    Falls back to the local profile alone when the sheet is not configured
    or cannot be read.
    """
    return await service.get_leaderboard(limit=limit)
