"""Profile models - the device's single user record and request schemas."""

from typing import List, Optional

from pydantic import Field, field_validator

from ecomission.core.schemas import CamelModel
from ecomission.gamification.models import Stage

DEFAULT_USER_NAME = "Earth Guardian"


class User(CamelModel):
    """Persisted user profile (one per device)."""
    name: str = DEFAULT_USER_NAME
    points: int = 0  # spendable balance
    lifetime_points: int = 0  # total ever earned, drives stage
    total_missions_completed: int = 0
    stage: str = Stage.SPROUT.value
    inventory: List[str] = Field(default_factory=list)

    @field_validator("inventory")
    @classmethod
    def _unique_inventory(cls, v: List[str]) -> List[str]:
        # Keep first occurrence order for display.
        return list(dict.fromkeys(v))


class RenameRequest(CamelModel):
    """Change the display name used as the backup join key."""
    name: str = Field(..., min_length=1, max_length=50)


class PurchaseRequest(CamelModel):
    item_id: str = Field(..., min_length=1)
    cost: int = Field(..., ge=0)


class PurchaseResponse(CamelModel):
    success: bool
    message: str
    user: Optional[User] = None
