"""Protocol for authentication observability.

Defines the interface for domain probes that capture authentication events
for the session cookie dependency.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for authentication operations."""

    def caller_authenticated(self, user_id: str) -> None:
        """Record that a request carried a valid session token."""
        ...

    def authentication_failed(self, reason: str) -> None:
        """Record that a request was rejected as unauthenticated.

        Args:
            reason: Failure reason (missing, malformed, expired, unexpected)
        """
        ...

    def user_signed_out(self) -> None:
        """Record that a session cookie was cleared."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def caller_authenticated(self, user_id: str) -> None:
        self._logger.debug(
            "caller_authenticated",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def authentication_failed(self, reason: str) -> None:
        self._logger.warning(
            "authentication_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def user_signed_out(self) -> None:
        self._logger.info("user_signed_out", **self._get_context_kwargs())
