"""Geocoding service: coordinates to a short address and back."""

import logging
from typing import Optional

import httpx

from ecomission.core.config import get_settings
from ecomission.location.models import Coordinates

logger = logging.getLogger(__name__)

settings = get_settings()

BIGDATACLOUD_URL = "https://api.bigdatacloud.net/data/reverse-geocode-client"
NOMINATIM_URL = "https://nominatim.openstreetmap.org"
USER_AGENT = f"{settings.APP_NAME}/{settings.APP_VERSION}"


def format_coordinates(lat: float, lon: float) -> str:
    return f"{lat:.4f}, {lon:.4f}"


class GeocodingService:
    """
    Best-effort address lookup.

    Reverse geocoding tries BigDataCloud, then Nominatim, and finally falls
    back to the raw coordinates, so it never fails.
    """

    _instance: "GeocodingService" = None

    def __new__(cls):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.timeout = settings.GEOCODING_TIMEOUT_SECONDS
            cls._instance.language = "en"
            cls._instance.transport = None
        return cls._instance

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT},
            transport=self.transport,
        )

    async def _bigdatacloud(self, client: httpx.AsyncClient, lat: float, lon: float) -> Optional[str]:
        response = await client.get(BIGDATACLOUD_URL, params={
            "latitude": lat,
            "longitude": lon,
            "localityLanguage": self.language,
        })
        response.raise_for_status()
        data = response.json()

        region = data.get("principalSubdivision") or ""
        district = data.get("locality") or data.get("city") or ""
        address = f"{region} {district}".strip()
        return address or None

    async def _nominatim(self, client: httpx.AsyncClient, lat: float, lon: float) -> Optional[str]:
        response = await client.get(f"{NOMINATIM_URL}/reverse", params={
            "format": "json",
            "lat": lat,
            "lon": lon,
            "zoom": 14,
            "addressdetails": 1,
            "accept-language": self.language,
        })
        response.raise_for_status()
        data = response.json()

        addr = data.get("address") or {}
        district = addr.get("borough") or addr.get("district") or addr.get("city") or ""
        neighborhood = addr.get("quarter") or addr.get("neighbourhood") or addr.get("suburb") or ""
        address = f"{district} {neighborhood}".strip()
        if address:
            return address

        display_name = data.get("display_name") or ""
        return " ".join(part.strip() for part in display_name.split(",")[:2]) or None

    async def reverse_geocode(self, lat: float, lon: float) -> str:
        """Short display address for a coordinate."""
        async with self._client() as client:
            for lookup in (self._bigdatacloud, self._nominatim):
                try:
                    address = await lookup(client, lat, lon)
                    if address:
                        return address
                except Exception as e:
                    logger.warning(f"Reverse geocoding via {lookup.__name__} failed: {e}")

        return format_coordinates(lat, lon)

    async def search(self, query: str) -> Optional[Coordinates]:
        """First coordinate matching a free-text query, or None."""
        q = (query or "").strip()
        if not q:
            return None

        try:
            async with self._client() as client:
                response = await client.get(f"{NOMINATIM_URL}/search", params={
                    "format": "json",
                    "q": q,
                    "limit": 1,
                    "accept-language": self.language,
                })
                response.raise_for_status()
                results = response.json()
        except Exception as e:
            logger.warning(f"Place search failed for {q!r}: {e}")
            return None

        if not results:
            return None

        first = results[0]
        return Coordinates(
            lat=float(first["lat"]),
            lon=float(first["lon"]),
            display_name=first.get("display_name"),
        )
