"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from roadtrip.config import Settings, get_settings
from roadtrip.database import get_db
from roadtrip.models.user import User
from roadtrip.services.auth import authenticate_token
from roadtrip.services.trip_service import TripService

# auto_error is off so a missing header reaches authenticate_token and gets our 401 body
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials if credentials else None
    return authenticate_token(db, settings, token)


def get_trip_service(
    db: Annotated[Session, Depends(get_db)],
) -> TripService:
    """Get trip service with dependencies."""
    return TripService(db)
