"""Client-side session state: token, current user, trips and the trip form."""

import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx

from roadtrip.client.api import ApiError, TripPlannerApi
from roadtrip.client.geocoding import Geocoder
from roadtrip.client.map_overview import MapOverview, build_map_overview

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InvalidDraftError(Exception):
    """The trip form is not ready to be submitted."""


class StopNotFoundError(Exception):
    """The geocoder found no coordinates for a stop name."""


@dataclass
class TripDraft:
    """A trip being composed before it is saved."""

    title: str = ""
    description: str = ""
    stops: list[dict[str, Any]] = field(default_factory=list)

    async def add_stop(self, name: str, geocoder: Geocoder) -> dict[str, Any]:
        """Geocode ``name`` and append it as the next stop.

        GeocodingUnavailableError from the geocoder propagates unchanged so the
        caller can tell "service down" apart from "no such place".
        """
        name = name.strip()
        if not name:
            raise InvalidDraftError("Location name cannot be empty.")

        point = await geocoder.lookup(name)
        if point is None:
            raise StopNotFoundError(
                f'Could not find coordinates for: "{name}". Try a more specific name.'
            )

        stop = {"name": name, "latitude": point.latitude, "longitude": point.longitude}
        self.stops.append(stop)
        return stop

    def remove_stop(self, index: int) -> None:
        del self.stops[index]

    def validate(self) -> None:
        if not self.title.strip() or not self.stops:
            raise InvalidDraftError("Please provide a title and at least one location stop.")

    def to_payload(self) -> dict[str, Any]:
        """Request body for trip creation."""
        self.validate()
        return {
            "title": self.title.strip(),
            "description": self.description,
            "locations": list(self.stops),
        }


@dataclass
class PlannerSession:
    """Holds the logged-in user and their trips, mirroring what the server returns."""

    api: TripPlannerApi
    user: dict[str, Any] | None = None
    trips: list[dict[str, Any]] = field(default_factory=list)
    last_error: str | None = None

    @property
    def token(self) -> str | None:
        return self.api.token

    @property
    def is_authenticated(self) -> bool:
        return self.api.token is not None and self.user is not None

    async def _call(self, request: Awaitable[T], fallback: str) -> T:
        """Await an API call, recording a display message if it fails."""
        self.last_error = None
        try:
            return await request
        except ApiError as e:
            self.last_error = e.message or fallback
            raise
        except httpx.HTTPError as e:
            logger.warning(f"API request failed: {e}")
            self.last_error = fallback
            raise

    def _start(self, data: dict[str, Any]) -> dict[str, Any]:
        self.api.token = data["token"]
        self.user = {key: data[key] for key in ("_id", "username", "email")}
        self.trips = []
        return self.user

    async def signup(self, username: str, email: str, password: str) -> dict[str, Any]:
        """Register and keep the issued token for later requests."""
        data = await self._call(self.api.signup(username, email, password), "Signup failed.")
        return self._start(data)

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in and keep the issued token for later requests."""
        data = await self._call(self.api.login(email, password), "Login failed.")
        return self._start(data)

    def logout(self) -> None:
        self.api.token = None
        self.user = None
        self.trips = []
        self.last_error = None

    async def load_trips(self) -> list[dict[str, Any]]:
        """Refresh the trip list from the server."""
        if not self.is_authenticated:
            self.trips = []
            self.last_error = "Please log in to view your planned road trips."
            return self.trips

        self.trips = await self._call(
            self.api.fetch_trips(), "Failed to load trips. You might need to log in again."
        )
        return self.trips

    async def add_trip(self, draft: TripDraft) -> dict[str, Any]:
        """Save a drafted trip, then reload the list."""
        payload = draft.to_payload()
        created = await self._call(self.api.create_trip(payload), "Failed to create trip.")
        await self.load_trips()
        return created

    async def delete_trip(self, trip_id: int) -> None:
        """Delete a trip, then reload the list."""
        await self._call(self.api.delete_trip(trip_id), "Failed to delete trip. Check ownership.")
        await self.load_trips()

    def map_overview(self) -> MapOverview:
        return build_map_overview(self.trips)
