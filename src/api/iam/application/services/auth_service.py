"""Account registration and sign-in for IAM bounded context."""

from __future__ import annotations

from iam.application.observability import AuthServiceProbe, DefaultAuthServiceProbe
from iam.application.value_objects import SignInResult, UserProfile
from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.ports.exceptions import DuplicateUserEmailError
from iam.ports.repositories import IUserRepository
from shared_kernel.auth import CredentialService
from shared_kernel.errors import AppError

EMAIL_TAKEN_MESSAGE = (
    "User with the email address already exists. "
    "Please use a different email or sign in"
)
UNKNOWN_EMAIL_MESSAGE = (
    "User with this email address does not exists. Please sign up first"
)
INVALID_CREDENTIALS_MESSAGE = "Invalid Credentials"


class AuthService:
    """Application service for account registration and sign-in.

    Operational failures are raised as ``AppError`` and logged as
    rejections. Anything else is logged as a failure and propagated for
    the error boundary to mask.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        credentials: CredentialService,
        probe: AuthServiceProbe | None = None,
    ):
        """Initialize AuthService with dependencies.

        Args:
            user_repository: Repository for user persistence
            credentials: Password hashing and token issuing
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._credentials = credentials
        self._probe = probe or DefaultAuthServiceProbe()

    async def register(self, email: str, password: str) -> UserProfile:
        """Create a new account.

        Args:
            email: Email address, unique across users
            password: Plaintext password, hashed before storage

        Returns:
            The stored user without the password hash

        Raises:
            AppError: CONFLICT if the email is already registered
        """
        try:
            if await self._user_repository.get_by_email(email) is not None:
                raise AppError.conflict(EMAIL_TAKEN_MESSAGE)

            password_hash = await self._credentials.hash_password(password)
            user = User(id=UserId.generate(), email=email, password_hash=password_hash)
            try:
                stored = await self._user_repository.create(user)
            except DuplicateUserEmailError as e:
                raise AppError.conflict(EMAIL_TAKEN_MESSAGE) from e
        except AppError as e:
            self._probe.operation_rejected("register", email=email, reason=e.message)
            raise
        except Exception as e:
            self._probe.operation_failed("register", email=email, error=str(e))
            raise

        self._probe.user_registered(user_id=stored.id.value, email=email)
        return UserProfile.from_user(stored)

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """Verify credentials and issue a session token.

        Args:
            email: Registered email address
            password: Plaintext password

        Returns:
            SignInResult with the user profile and a signed session token

        Raises:
            AppError: NOT_FOUND if no user has this email, UNAUTHORIZED if
                the password does not match
        """
        try:
            user = await self._user_repository.get_by_email(email)
            if user is None:
                raise AppError.not_found(UNKNOWN_EMAIL_MESSAGE)

            if not await self._credentials.verify_password(
                password, user.password_hash
            ):
                raise AppError.unauthorized(INVALID_CREDENTIALS_MESSAGE)

            token = self._credentials.issue_token(user.id.value)
        except AppError as e:
            self._probe.operation_rejected("sign_in", email=email, reason=e.message)
            raise
        except Exception as e:
            self._probe.operation_failed("sign_in", email=email, error=str(e))
            raise

        self._probe.user_signed_in(user_id=user.id.value, email=email)
        return SignInResult(user=UserProfile.from_user(user), token=token)
