"""Domain probe for account registration and sign-in.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the AuthService use cases. Expected
rejections (duplicate email, unknown email, wrong password) are warnings;
anything else is an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthServiceProbe(Protocol):
    """Domain probe for AuthService operations."""

    def user_registered(self, user_id: str, email: str) -> None:
        """Record that a new account was created."""
        ...

    def user_signed_in(self, user_id: str, email: str) -> None:
        """Record that a user signed in."""
        ...

    def operation_rejected(self, operation: str, email: str, reason: str) -> None:
        """Record an expected, caller-facing rejection."""
        ...

    def operation_failed(self, operation: str, email: str, error: str) -> None:
        """Record an unexpected failure."""
        ...

    def with_context(self, context: ObservationContext) -> AuthServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthServiceProbe:
    """Default implementation of AuthServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAuthServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthServiceProbe(logger=self._logger, context=context)

    def user_registered(self, user_id: str, email: str) -> None:
        self._logger.info(
            "user_registered",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_signed_in(self, user_id: str, email: str) -> None:
        self._logger.info(
            "user_signed_in",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def operation_rejected(self, operation: str, email: str, reason: str) -> None:
        self._logger.warning(
            "auth_operation_rejected",
            operation=operation,
            email=email,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, email: str, error: str) -> None:
        self._logger.error(
            "auth_operation_failed",
            operation=operation,
            email=email,
            error=error,
            **self._get_context_kwargs(),
        )
