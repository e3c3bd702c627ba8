"""Pydantic models for authentication requests and responses."""

from __future__ import annotations

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

from iam.application.value_objects import UserProfile


class CredentialsRequest(BaseModel):
    """Email and password submitted to sign up or sign in.

    The email is checked for syntax only and kept exactly as submitted.
    Accounts are matched on the stored string, so no part of the address
    is case-folded.
    """

    email: str = Field(..., description="Account email address")
    password: str = Field(
        ...,
        description="Account password",
        min_length=8,
    )

    @field_validator("email")
    @classmethod
    def validate_email_syntax(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}") from e
        return value


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Account email address")
    created_at: datetime | None = Field(None, description="When the user registered")
    updated_at: datetime | None = Field(None, description="Last modification time")

    @classmethod
    def from_profile(cls, profile: UserProfile) -> UserResponse:
        """Convert an application-layer profile to an API response."""
        return cls(
            id=profile.id.value,
            email=profile.email,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class SignInResponse(BaseModel):
    """Payload of a successful sign-in. The token travels only in the cookie."""

    user: UserResponse
