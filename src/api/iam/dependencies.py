"""Dependency injection for IAM bounded context.

Composes infrastructure resources (database sessions, credential
services held on ``app.state``) with IAM-specific components
(repositories, services) and provides the session cookie check used by
every protected route.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services import AuthService
from iam.application.value_objects import AuthenticatedCaller
from iam.domain.value_objects import UserId
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_session
from infrastructure.settings import AuthSettings, get_auth_settings
from shared_kernel.auth import (
    CredentialService,
    InvalidTokenError,
    SessionTokenVerifier,
    TokenFailureReason,
)
from shared_kernel.errors import AppError

NO_TOKEN_MESSAGE = "No token provided. Please log in"

_FAILURE_MESSAGES: dict[TokenFailureReason, str] = {
    TokenFailureReason.MALFORMED: "Authentication failed. Invalid token.",
    TokenFailureReason.EXPIRED: "Authentication failed. Token has expired.",
    TokenFailureReason.UNEXPECTED: (
        "Authentication failed due to an unexpected server error."
    ),
}


def get_credential_service(request: Request) -> CredentialService:
    """Get the credential service built at startup."""
    return request.app.state.credentials


def get_session_token_verifier(request: Request) -> SessionTokenVerifier:
    """Get the session token verifier built at startup."""
    return request.app.state.token_verifier


def get_authentication_probe() -> AuthenticationProbe:
    """Get authentication probe for observability."""
    return DefaultAuthenticationProbe()


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserRepository:
    """Get UserRepository instance.

    Args:
        session: Async database session

    Returns:
        UserRepository instance
    """
    return UserRepository(session=session)


def get_auth_service(
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    credentials: Annotated[CredentialService, Depends(get_credential_service)],
) -> AuthService:
    """Get AuthService instance.

    Args:
        user_repository: User repository
        credentials: Password hashing and token issuing

    Returns:
        AuthService instance
    """
    return AuthService(user_repository=user_repository, credentials=credentials)


async def get_authenticated_caller(
    request: Request,
    verifier: Annotated[SessionTokenVerifier, Depends(get_session_token_verifier)],
    settings: Annotated[AuthSettings, Depends(get_auth_settings)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> AuthenticatedCaller:
    """Resolve the caller from the session cookie.

    Every failure, whatever its cause, is reported to the client as
    UNAUTHENTICATED. The probe records which kind of failure it was.

    Raises:
        AppError: UNAUTHENTICATED if the cookie is missing or the token is
            rejected
    """
    token = request.cookies.get(settings.cookie_name)
    if not token:
        probe.authentication_failed(reason="missing")
        raise AppError.unauthenticated(NO_TOKEN_MESSAGE)

    try:
        claims = verifier.verify(token)
        user_id = UserId.from_string(claims.sub)
    except InvalidTokenError as e:
        probe.authentication_failed(reason=e.reason.value)
        raise AppError.unauthenticated(_FAILURE_MESSAGES[e.reason]) from e
    except ValueError as e:
        probe.authentication_failed(reason=TokenFailureReason.MALFORMED.value)
        raise AppError.unauthenticated(
            _FAILURE_MESSAGES[TokenFailureReason.MALFORMED]
        ) from e

    structlog.contextvars.bind_contextvars(user_id=user_id.value)
    probe.caller_authenticated(user_id=user_id.value)
    return AuthenticatedCaller(user_id=user_id)
