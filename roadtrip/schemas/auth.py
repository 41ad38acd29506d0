"""Authentication schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _check_password_length(password: str | None) -> str | None:
    if password is not None and len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


class UserRegister(BaseModel):
    """User registration request.

    Fields are optional here so that a missing field is reported by the
    credential service with its own message instead of a schema error.
    """

    username: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str | None) -> str | None:
        return _check_password_length(value)


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str | None) -> str | None:
        return _check_password_length(value)


class AuthResponse(BaseModel):
    """Account identity plus a freshly issued bearer token."""

    id: int = Field(validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    username: str
    email: str
    token: str


class UserResponse(BaseModel):
    """User information response. The password verifier is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    username: str
    email: str
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )
