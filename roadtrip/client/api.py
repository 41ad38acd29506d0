"""HTTPX client for the trip planner API."""

from dataclasses import dataclass
from typing import Any

import httpx


class ApiError(Exception):
    """Non-2xx response from the API, carrying the server's ``error`` message."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase


@dataclass
class TripPlannerApi:
    """Calls the trip planner endpoints, attaching the bearer token when one is set."""

    base_url: str
    http_client: httpx.AsyncClient
    token: str | None = None

    @classmethod
    def create(cls, base_url: str = "http://localhost:5000/api") -> "TripPlannerApi":
        """Create an API client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            headers=headers,
            timeout=15,
        )
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    async def signup(self, username: str, email: str, password: str) -> dict[str, Any]:
        """Register an account. Returns ``{_id, username, email, token}``."""
        return await self._request(
            "POST",
            "/auth/signup",
            json={"username": username, "email": email, "password": password},
        )

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in. Returns ``{_id, username, email, token}``."""
        return await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )

    async def me(self) -> dict[str, Any]:
        return await self._request("GET", "/auth/me")

    async def fetch_trips(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/trips")

    async def fetch_trip(self, trip_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/trips/{trip_id}")

    async def create_trip(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/trips", json=payload)

    async def delete_trip(self, trip_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/trips/{trip_id}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
