"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates without tying the application layer to a database.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence."""

    async def create(self, user: User) -> User:
        """Persist a new user.

        Args:
            user: The User aggregate to persist

        Returns:
            The stored user with timestamps populated

        Raises:
            DuplicateUserEmailError: If the email is already registered
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by email address.

        The comparison is exact, so addresses are case-sensitive as stored.

        Args:
            email: The email address

        Returns:
            The User aggregate, or None if not found
        """
        ...
