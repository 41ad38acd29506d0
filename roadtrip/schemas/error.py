"""Error response schema."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every error response. ``stack`` is only filled in development."""

    error: str
    stack: str | None = None
