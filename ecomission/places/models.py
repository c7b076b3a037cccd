"""Saved place models."""

from typing import List, Union

from pydantic import Field

from ecomission.core.schemas import CamelModel
from ecomission.missions.models import MissionMode


class SavedPlace(CamelModel):
    """A user-pinned location shortcut."""
    id: Union[int, str]
    name: str
    type: MissionMode
    address: str = ""
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class SavedPlaceCreate(CamelModel):
    """New place; ``address`` is reverse-geocoded when omitted."""
    name: str = Field(..., min_length=1, max_length=50)
    type: MissionMode = MissionMode.OUTDOOR
    address: str = ""
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class SavedPlacesResponse(CamelModel):
    places: List[SavedPlace]
    count: int
