"""Trip and TripStop models."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship

from roadtrip.database import Base
from roadtrip.models.mixins import TimestampMixin


class Trip(Base, TimestampMixin):
    """A road trip: a title, an optional description and an ordered list of stops."""

    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Relationships
    owner = relationship("User", backref="trips")
    stops = relationship(
        "TripStop",
        back_populates="trip",
        order_by="TripStop.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )


class TripStop(Base):
    """Named waypoint within a trip, kept in visiting order by ``position``."""

    __tablename__ = "trip_stops"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(
        Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="stops")
