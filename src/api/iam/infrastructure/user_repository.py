"""PostgreSQL implementation of IUserRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateUserEmailError
from iam.ports.repositories import IUserRepository


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates.

    Every method runs in its own short transaction, so no transaction is
    held open between repository calls.
    """

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def create(self, user: User) -> User:
        """Insert a new user.

        Raises:
            DuplicateUserEmailError: If the email is already registered
        """
        model = UserModel(
            id=user.id.value,
            email=user.email,
            password_hash=user.password_hash,
        )
        try:
            async with self._session.begin():
                self._session.add(model)
        except IntegrityError as e:
            self._probe.duplicate_email(user.email)
            raise DuplicateUserEmailError(
                f"User with email '{user.email}' already exists"
            ) from e

        self._probe.user_created(user.id.value, user.email)
        return self._to_domain(model)

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID."""
        async with self._session.begin():
            stmt = select(UserModel).where(UserModel.id == user_id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by their email address."""
        async with self._session.begin():
            stmt = select(UserModel).where(UserModel.email == email)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            self._probe.email_not_found(email)
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(
            id=UserId(value=model.id),
            email=model.email,
            password_hash=model.password_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
