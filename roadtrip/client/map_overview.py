"""Map overview built from the stops of a set of trips."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_CENTER = (40.7128, -74.0060)  # New York
WORLD_ZOOM = 2
TRIPS_ZOOM = 5


@dataclass(frozen=True)
class MapMarker:
    trip_id: Any
    index: int
    latitude: float
    longitude: float
    label: str


@dataclass(frozen=True)
class MapOverview:
    center: tuple[float, float]
    zoom: int
    markers: list[MapMarker] = field(default_factory=list)


def build_map_overview(trips: Iterable[Mapping[str, Any]]) -> MapOverview:
    """Place one marker per stop across all trips, centred on the first stop.

    With no usable stops the overview falls back to a world view.
    """
    markers = []
    for trip in trips:
        for index, stop in enumerate(trip.get("locations") or []):
            if stop.get("latitude") is None or stop.get("longitude") is None:
                continue
            name = stop.get("name")
            markers.append(
                MapMarker(
                    trip_id=trip.get("_id"),
                    index=index,
                    latitude=stop["latitude"],
                    longitude=stop["longitude"],
                    label=f"Stop: {name}" if name else f"Location {index + 1}",
                )
            )

    if not markers:
        return MapOverview(center=DEFAULT_CENTER, zoom=WORLD_ZOOM)

    first = markers[0]
    return MapOverview(center=(first.latitude, first.longitude), zoom=TRIPS_ZOOM, markers=markers)
