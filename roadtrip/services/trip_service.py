"""Trip service: ownership-scoped access to trips."""

import logging

from sqlalchemy.orm import Session, joinedload, selectinload

from roadtrip.errors import AuthorizationError, NotFoundError, ValidationError
from roadtrip.models.trip import Trip, TripStop
from roadtrip.schemas.trip import StopCreate

logger = logging.getLogger(__name__)


class TripService:
    """Service for trip operations on behalf of a single owner."""

    def __init__(self, db: Session):
        self.db = db

    def list_trips(self, owner_id: int) -> list[Trip]:
        """All trips owned by ``owner_id``, oldest first. Empty is a valid result."""
        return (
            self.db.query(Trip)
            .options(joinedload(Trip.owner), selectinload(Trip.stops))
            .filter(Trip.owner_id == owner_id)
            .order_by(Trip.id)
            .all()
        )

    def create_trip(
        self,
        owner_id: int,
        title: str | None,
        description: str | None,
        stops: list[StopCreate] | None,
    ) -> Trip:
        """Persist a new trip owned by ``owner_id``.

        Nothing is written when the title is blank or there are no stops.
        """
        title = title.strip() if title else ""
        if not title or not stops:
            raise ValidationError("Please include a title and at least one location")

        stop_rows = []
        for position, stop in enumerate(stops):
            name = stop.name.strip()
            if not name:
                raise ValidationError("Every location needs a name")
            stop_rows.append(
                TripStop(
                    position=position,
                    name=name,
                    latitude=stop.latitude,
                    longitude=stop.longitude,
                )
            )

        trip = Trip(title=title, description=description, owner_id=owner_id)
        for row in stop_rows:
            trip.stops.append(row)
        self.db.add(trip)
        self.db.commit()
        self.db.refresh(trip)

        logger.info(f"User {owner_id} created trip {trip.id} with {len(stop_rows)} stops")
        return trip

    def get_trip(self, owner_id: int, trip_id: int) -> Trip:
        """Fetch a trip, telling "missing" apart from "not yours"."""
        trip = self.db.query(Trip).filter(Trip.id == trip_id).first()
        if trip is None:
            raise NotFoundError("Trip not found")

        if trip.owner_id != owner_id:
            logger.warning(f"User {owner_id} denied access to trip {trip_id}")
            raise AuthorizationError("Not authorized to access this trip")

        return trip

    def delete_trip(self, owner_id: int, trip_id: int) -> None:
        """Delete a trip (owner only)."""
        trip = self.db.query(Trip).filter(Trip.id == trip_id).first()
        if trip is None:
            raise NotFoundError("Trip not found")

        if trip.owner_id != owner_id:
            logger.warning(
                f"User {owner_id} tried to delete trip {trip_id} owned by {trip.owner_id}"
            )
            raise AuthorizationError("Not authorized to delete this trip")

        self.db.delete(trip)
        self.db.commit()
        logger.info(f"User {owner_id} deleted trip {trip_id}")
