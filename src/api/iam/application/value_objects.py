"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
cross-cutting concerns like authentication context and read-only views.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId


@dataclass(frozen=True)
class AuthenticatedCaller:
    """The user a request was authenticated as.

    Produced by the session cookie check and only lives as long as the
    request. It is an application-layer concept because it describes the
    request, not a stored entity.
    """

    user_id: UserId


@dataclass(frozen=True)
class UserProfile:
    """Externally visible projection of a User, without the password hash."""

    id: UserId
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> UserProfile:
        return cls(
            id=user.id,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True)
class SignInResult:
    """Outcome of a successful sign-in."""

    user: UserProfile
    token: str
