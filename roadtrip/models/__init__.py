"""SQLAlchemy models."""

from roadtrip.models.trip import Trip, TripStop
from roadtrip.models.user import User

__all__ = [
    "User",
    "Trip",
    "TripStop",
]
