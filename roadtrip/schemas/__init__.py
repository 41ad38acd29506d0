"""Pydantic schemas for API requests and responses."""

from roadtrip.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from roadtrip.schemas.error import ErrorResponse
from roadtrip.schemas.trip import (
    MessageResponse,
    StopCreate,
    StopResponse,
    TripCreate,
    TripOwner,
    TripResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "ErrorResponse",
    "StopCreate",
    "StopResponse",
    "TripCreate",
    "TripOwner",
    "TripResponse",
    "MessageResponse",
]
