"""Profile API routes."""

from fastapi import APIRouter, Depends

from ecomission.core.dependencies import get_profile_service
from ecomission.core.exceptions import BadRequestException
from ecomission.gamification.models import StageProgress
from ecomission.gamification.rules import stage_progress
from ecomission.profile.models import PurchaseRequest, PurchaseResponse, RenameRequest, User
from ecomission.profile.service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=User)
async def get_profile(service: ProfileService = Depends(get_profile_service)):
    """Current user profile (created with zero values on first access)."""
    return service.get_user()


@router.patch("", response_model=User)
async def rename_profile(
    body: RenameRequest,
    service: ProfileService = Depends(get_profile_service),
):
    """
    Change the display name.

    The name is also the key used to find this user's rows in the backup sheet.
    """
    try:
        return service.rename(body.name)
    except ValueError as e:
        raise BadRequestException(str(e))


@router.delete("", response_model=User)
async def reset_profile(service: ProfileService = Depends(get_profile_service)):
    """Wipe profile, mission log and saved places. Returns the fresh profile."""
    return service.reset()


@router.get("/stage", response_model=StageProgress)
async def get_stage_progress(service: ProfileService = Depends(get_profile_service)):
    """Growth stage and progress towards the next one."""
    user = service.get_user()
    return stage_progress(user.lifetime_points)


@router.post("/purchase", response_model=PurchaseResponse)
async def purchase_item(
    body: PurchaseRequest,
    service: ProfileService = Depends(get_profile_service),
):
    """
    Buy a shop item with points.

    Not having enough points is a normal outcome: ``success`` is false and
    the balance is unchanged.
    """
    user = service.purchase(body.item_id, body.cost)
    if user is None:
        return PurchaseResponse(success=False, message="Not enough points")
    return PurchaseResponse(success=True, message="Purchased", user=user)
