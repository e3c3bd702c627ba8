"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from iam.domain.value_objects import UserId


@dataclass(frozen=True)
class User:
    """User aggregate representing a registered account.

    Users are created on registration and never modified afterwards. The
    password hash stays inside the IAM context: anything returned to a
    caller is projected through ``UserProfile`` instead.
    """

    id: UserId
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.email})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
