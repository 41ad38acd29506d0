"""Trip API endpoints. Every route requires a bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from roadtrip.api.dependencies import get_current_user, get_trip_service
from roadtrip.models.user import User
from roadtrip.schemas.error import ErrorResponse
from roadtrip.schemas.trip import MessageResponse, TripCreate, TripResponse
from roadtrip.services.trip_service import TripService

# Ids outside the integer column range are rejected before they reach the database
TripId = Annotated[int, Path(ge=1, le=2**31 - 1)]

router = APIRouter(
    prefix="/api/trips",
    tags=["trips"],
    responses={401: {"model": ErrorResponse}},
)


@router.get("", response_model=list[TripResponse])
async def get_trips(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TripService, Depends(get_trip_service)],
):
    """Get all trips created by the current user."""
    return service.list_trips(current_user.id)


@router.post(
    "",
    response_model=TripResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_trip(
    trip_data: TripCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TripService, Depends(get_trip_service)],
):
    """Create a new trip."""
    return service.create_trip(
        current_user.id, trip_data.title, trip_data.description, trip_data.locations
    )


@router.get(
    "/{trip_id}",
    response_model=TripResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_trip(
    trip_id: TripId,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TripService, Depends(get_trip_service)],
):
    """Get a specific trip (owner only)."""
    return service.get_trip(current_user.id, trip_id)


@router.delete(
    "/{trip_id}",
    response_model=MessageResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_trip(
    trip_id: TripId,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TripService, Depends(get_trip_service)],
):
    """Delete a trip (owner only)."""
    service.delete_trip(current_user.id, trip_id)
    return MessageResponse(message="Trip removed successfully")
