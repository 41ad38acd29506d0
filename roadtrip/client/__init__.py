"""Async client for the road trip planner API."""

from roadtrip.client.api import ApiError, TripPlannerApi
from roadtrip.client.geocoding import (
    GeocodingUnavailableError,
    GeoPoint,
    Geocoder,
    NominatimGeocoder,
)
from roadtrip.client.map_overview import MapMarker, MapOverview, build_map_overview
from roadtrip.client.session import (
    InvalidDraftError,
    PlannerSession,
    StopNotFoundError,
    TripDraft,
)

__all__ = [
    "ApiError",
    "TripPlannerApi",
    "GeoPoint",
    "Geocoder",
    "GeocodingUnavailableError",
    "NominatimGeocoder",
    "MapMarker",
    "MapOverview",
    "build_map_overview",
    "InvalidDraftError",
    "PlannerSession",
    "StopNotFoundError",
    "TripDraft",
]
