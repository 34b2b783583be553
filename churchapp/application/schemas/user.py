"""Pydantic DTOs (Data Transfer Objects) for the demo registration server."""

from pydantic import BaseModel, Field

_EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class UserRegister(BaseModel):
    """Schema for registering a new user. Only the email is mandatory."""

    email: str = Field(
        ..., max_length=255, pattern=_EMAIL_PATTERN, examples=["grace@example.com"],
    )
    username: str | None = Field(None, max_length=100, examples=["grace"])


class UserUpdate(BaseModel):
    """Schema for editing a user — all fields optional."""

    username: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255, pattern=_EMAIL_PATTERN)


class UserResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    username: str | None
    email: str

    model_config = {"from_attributes": True}
