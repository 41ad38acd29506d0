"""Trip schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class StopCreate(BaseModel):
    """A stop as submitted by the client. Coordinates must be finite but are not range-checked."""

    name: str = Field(..., max_length=255)
    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)


class TripCreate(BaseModel):
    """Create a new trip."""

    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    locations: list[StopCreate] | None = None


class StopResponse(BaseModel):
    """Stop response."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    latitude: float
    longitude: float


class TripOwner(BaseModel):
    """Owner reference resolved to its display name."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    username: str


class TripResponse(BaseModel):
    """Trip response, stops in visiting order."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    title: str
    description: str | None
    locations: list[StopResponse] = Field(
        validation_alias=AliasChoices("stops", "locations"), serialization_alias="locations"
    )
    created_by: TripOwner = Field(
        validation_alias=AliasChoices("owner", "createdBy"), serialization_alias="createdBy"
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"), serialization_alias="updatedAt"
    )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
