"""Place-name lookup against OpenStreetMap Nominatim."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


class GeocodingUnavailableError(Exception):
    """The geocoding service could not be reached or answered badly."""


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


class Geocoder(Protocol):
    """Interface for place-name lookups."""

    async def lookup(self, name: str) -> GeoPoint | None:
        """Return the best match for ``name``, or None when nothing matches."""


@dataclass
class NominatimGeocoder(Geocoder):
    """HTTPX-backed Nominatim geocoder."""

    http_client: httpx.AsyncClient
    base_url: str = NOMINATIM_URL
    user_agent: str = "RoadTripPlanner/1.0"

    @classmethod
    def create(cls) -> "NominatimGeocoder":
        """Create a geocoder with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient())

    async def lookup(self, name: str) -> GeoPoint | None:
        """Look up a place name. No match is None; a failing service raises."""
        try:
            response = await self.http_client.get(
                self.base_url,
                params={"q": name, "format": "json", "limit": 1},
                headers={"User-Agent": self.user_agent},
                timeout=10,
            )
            response.raise_for_status()
            results = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Geocoding lookup for '{name}' failed: {e}")
            raise GeocodingUnavailableError("Geocoding service failed") from e

        if not results:
            return None

        try:
            best = results[0]
            return GeoPoint(latitude=float(best["lat"]), longitude=float(best["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingUnavailableError("Unexpected geocoding response") from e

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
