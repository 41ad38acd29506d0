"""User model."""

from sqlalchemy import Column, Integer, String

from roadtrip.database import Base
from roadtrip.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Account that owns trips.

    ``password_hash`` holds the bcrypt verifier and is only ever written by
    ``roadtrip.services.auth.set_password``.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)
