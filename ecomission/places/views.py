"""API routes for saved places."""

from typing import List

from fastapi import APIRouter, Depends, status

from ecomission.core.dependencies import get_places_service
from ecomission.core.exceptions import BadRequestException
from ecomission.location.service import GeocodingService
from ecomission.places.models import SavedPlace, SavedPlaceCreate, SavedPlacesResponse
from ecomission.places.service import PlacesService

router = APIRouter(prefix="/places", tags=["Places"])


@router.get("", response_model=SavedPlacesResponse)
async def get_places(service: PlacesService = Depends(get_places_service)):
    """Saved places, seeded with a few defaults on first use."""
    places = service.list_places()
    return SavedPlacesResponse(places=places, count=len(places))


@router.post("", response_model=SavedPlace, status_code=status.HTTP_201_CREATED)
async def add_place(
    body: SavedPlaceCreate,
    service: PlacesService = Depends(get_places_service),
):
    """Pin a new place. The address is looked up when not given."""
    if not body.address.strip():
        body.address = await GeocodingService().reverse_geocode(body.lat, body.lon)
    return service.add_place(body)


@router.put("", response_model=SavedPlacesResponse)
async def replace_places(
    places: List[SavedPlace],
    service: PlacesService = Depends(get_places_service),
):
    """Replace the whole list (used for edits and deletes)."""
    try:
        saved = service.replace_places(places)
    except ValueError as e:
        raise BadRequestException(str(e))
    return SavedPlacesResponse(places=saved, count=len(saved))
