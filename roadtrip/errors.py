"""Error taxonomy shared by the services and the HTTP layer.

Each error carries the status code it is reported with. The handlers in
``roadtrip.main`` turn them into ``{"error": ..., "stack": ...}`` bodies.
"""

from fastapi import status


class TripPlannerError(Exception):
    """Base class for failures that end a request with a client-visible error."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TripPlannerError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(TripPlannerError):
    """Missing, invalid or expired token, or bad login credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(TripPlannerError):
    """Known identity without rights over the requested resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(TripPlannerError):
    """Referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(TripPlannerError):
    """Uniqueness violation. Reported as 400, the API never used 409 here."""

    status_code = status.HTTP_400_BAD_REQUEST
