"""Tests for the async client: API wrapper, geocoder, trip form and map overview."""

import asyncio
import json

import httpx
import pytest

from roadtrip.client import (
    ApiError,
    GeocodingUnavailableError,
    GeoPoint,
    InvalidDraftError,
    NominatimGeocoder,
    PlannerSession,
    StopNotFoundError,
    TripDraft,
    TripPlannerApi,
    build_map_overview,
)
from roadtrip.client.map_overview import DEFAULT_CENTER
from roadtrip.main import app


class _FakeGeocoder:
    def __init__(self, places: dict[str, GeoPoint]) -> None:
        self.places = places
        self.calls: list[str] = []

    async def lookup(self, name: str) -> GeoPoint | None:
        self.calls.append(name)
        return self.places.get(name)


class _DownGeocoder:
    async def lookup(self, name: str) -> GeoPoint | None:
        raise GeocodingUnavailableError("Geocoding service failed")


def _geocoder(handler) -> NominatimGeocoder:
    return NominatimGeocoder(http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_geocoder_returns_best_match() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["q"] == "Paris"
        assert request.url.params["format"] == "json"
        assert request.url.params["limit"] == "1"
        assert request.headers["User-Agent"].startswith("RoadTripPlanner")
        return httpx.Response(200, json=[{"lat": "48.8566", "lon": "2.3522"}])

    point = asyncio.run(_geocoder(handler).lookup("Paris"))

    assert point == GeoPoint(latitude=48.8566, longitude=2.3522)


def test_geocoder_no_match_is_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    assert asyncio.run(_geocoder(handler).lookup("Atlantis")) is None


def test_geocoder_error_status_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="overloaded")

    with pytest.raises(GeocodingUnavailableError):
        asyncio.run(_geocoder(handler).lookup("Paris"))


def test_geocoder_transport_failure_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route to host", request=request)

    with pytest.raises(GeocodingUnavailableError):
        asyncio.run(_geocoder(handler).lookup("Paris"))


def test_draft_add_stop_geocodes_in_order() -> None:
    geocoder = _FakeGeocoder({"Paris": GeoPoint(48.8566, 2.3522), "Rome": GeoPoint(41.9, 12.5)})
    draft = TripDraft(title="Europe")

    asyncio.run(draft.add_stop("  Paris ", geocoder))
    asyncio.run(draft.add_stop("Rome", geocoder))

    assert [stop["name"] for stop in draft.stops] == ["Paris", "Rome"]
    assert draft.stops[0] == {"name": "Paris", "latitude": 48.8566, "longitude": 2.3522}


def test_draft_add_stop_failures_leave_stops_unchanged() -> None:
    draft = TripDraft(title="Europe")

    with pytest.raises(InvalidDraftError):
        asyncio.run(draft.add_stop("   ", _FakeGeocoder({})))
    with pytest.raises(StopNotFoundError):
        asyncio.run(draft.add_stop("Atlantis", _FakeGeocoder({})))
    with pytest.raises(GeocodingUnavailableError):
        asyncio.run(draft.add_stop("Paris", _DownGeocoder()))

    assert draft.stops == []


def test_draft_validation_and_payload() -> None:
    draft = TripDraft(title=" Road ", description="desc")
    with pytest.raises(InvalidDraftError):
        draft.to_payload()

    draft.stops.append({"name": "A", "latitude": 1.0, "longitude": 2.0})
    draft.stops.append({"name": "B", "latitude": 3.0, "longitude": 4.0})
    draft.remove_stop(0)

    assert draft.to_payload() == {
        "title": "Road",
        "description": "desc",
        "locations": [{"name": "B", "latitude": 3.0, "longitude": 4.0}],
    }


def test_map_overview_without_stops() -> None:
    overview = build_map_overview([{"_id": 1, "locations": []}])

    assert overview.center == DEFAULT_CENTER
    assert overview.zoom == 2
    assert overview.markers == []


def test_map_overview_flattens_all_trips() -> None:
    trips = [
        {"_id": 1, "locations": [{"name": "Pier", "latitude": 34.0, "longitude": -118.5}]},
        {
            "_id": 2,
            "locations": [
                {"name": "", "latitude": 0.0, "longitude": 0.0},
                {"name": "Rome", "latitude": 41.9, "longitude": 12.5},
            ],
        },
    ]

    overview = build_map_overview(trips)

    assert overview.center == (34.0, -118.5)
    assert overview.zoom == 5
    assert [(m.trip_id, m.index, m.label) for m in overview.markers] == [
        (1, 0, "Stop: Pier"),
        (2, 0, "Location 1"),
        (2, 1, "Stop: Rome"),
    ]


def test_api_error_carries_server_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(401, json={"error": "Not authorized, no token", "stack": None})

    api = TripPlannerApi(
        base_url="http://api.test/api",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(api.fetch_trips())

    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Not authorized, no token"


def test_api_attaches_bearer_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer abc"
        assert request.url.path == "/api/trips"
        payload = json.loads(request.content.decode())
        return httpx.Response(201, json={"_id": 1, **payload})

    api = TripPlannerApi(
        base_url="http://api.test/api",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        token="abc",
    )

    created = asyncio.run(api.create_trip({"title": "T", "locations": []}))
    assert created["_id"] == 1


def test_session_requires_login_to_load_trips() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    session = PlannerSession(
        api=TripPlannerApi(
            base_url="http://api.test/api",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
    )

    assert asyncio.run(session.load_trips()) == []
    assert session.last_error == "Please log in to view your planned road trips."


def test_session_records_fallback_on_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    session = PlannerSession(
        api=TripPlannerApi(
            base_url="http://api.test/api",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
    )

    with pytest.raises(httpx.ConnectError):
        asyncio.run(session.login("alice@example.com", "pw123456"))
    assert session.last_error == "Login failed."
    assert session.token is None


def test_sessions_against_running_app(client) -> None:
    """Alice plans and deletes a trip; Bob cannot delete it."""
    geocoder = _FakeGeocoder({"Pier": GeoPoint(34.0, -118.5)})

    async def scenario() -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport) as http_client:
            alice = PlannerSession(TripPlannerApi("http://testserver/api", http_client))
            bob = PlannerSession(TripPlannerApi("http://testserver/api", http_client))

            user = await alice.signup("alice", "alice@example.com", "pw123456")
            await bob.signup("bob", "bob@example.com", "pw123456")
            assert alice.is_authenticated
            assert user["username"] == "alice"

            draft = TripDraft(title="Coastal Run")
            await draft.add_stop("Pier", geocoder)
            created = await alice.add_trip(draft)
            assert [trip["_id"] for trip in alice.trips] == [created["_id"]]
            assert alice.map_overview().center == (34.0, -118.5)

            with pytest.raises(ApiError) as excinfo:
                await bob.delete_trip(created["_id"])
            assert excinfo.value.status_code == 403
            assert bob.last_error == "Not authorized to delete this trip"
            assert bob.trips == []

            await alice.load_trips()
            assert len(alice.trips) == 1

            await alice.delete_trip(created["_id"])
            assert alice.trips == []

            alice.logout()
            assert alice.token is None
            assert not alice.is_authenticated

            await alice.login("alice@example.com", "pw123456")
            assert alice.user["_id"] == user["_id"]

    asyncio.run(scenario())
