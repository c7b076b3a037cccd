"""Location models."""

from typing import Optional

from ecomission.core.schemas import CamelModel


class Coordinates(CamelModel):
    """A resolved point, optionally with the geocoder's display name."""
    lat: float
    lon: float
    display_name: Optional[str] = None


class LocationInfo(CamelModel):
    """Coordinate plus the short address shown in the header."""
    latitude: float
    longitude: float
    address: str
