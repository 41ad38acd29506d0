"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from roadtrip.api.dependencies import get_current_user
from roadtrip.config import Settings, get_settings
from roadtrip.database import get_db
from roadtrip.models.user import User
from roadtrip.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from roadtrip.schemas.error import ErrorResponse
from roadtrip.services.auth import login_user, register_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def signup(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Register a new user."""
    user, token = register_user(
        db, settings, user_data.username, user_data.email, user_data.password
    )
    return AuthResponse(id=user.id, username=user.username, email=user.email, token=token)


@router.post("/login", response_model=AuthResponse, responses={401: {"model": ErrorResponse}})
async def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with email and password."""
    user, token = login_user(db, settings, credentials.email, credentials.password)
    return AuthResponse(id=user.id, username=user.username, email=user.email, token=token)


@router.get("/me", response_model=UserResponse, responses={401: {"model": ErrorResponse}})
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
