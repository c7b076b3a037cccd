"""Location API routes."""

from fastapi import APIRouter, Query

from ecomission.core.exceptions import NotFoundException
from ecomission.location.models import Coordinates, LocationInfo
from ecomission.location.service import GeocodingService

router = APIRouter(prefix="/location", tags=["Location"])


@router.get("/reverse", response_model=LocationInfo)
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
):
    """Short address for a coordinate. Falls back to the coordinates themselves."""
    address = await GeocodingService().reverse_geocode(lat, lon)
    return LocationInfo(latitude=lat, longitude=lon, address=address)


@router.get("/search", response_model=Coordinates)
async def search_place(q: str = Query(..., min_length=1, max_length=200)):
    """Resolve a place name or address to a coordinate for the map."""
    result = await GeocodingService().search(q)
    if result is None:
        raise NotFoundException(f"No place found for '{q}'")
    return result
