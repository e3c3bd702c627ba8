"""Domain probe for session token verification.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to session token checks. Each kind of
rejection is logged at its own level: malformed tokens are suspicious,
expired tokens are routine, and unexpected verifier failures are errors.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SessionTokenProbe(Protocol):
    """Domain probe for session token operations."""

    def token_issued(self, subject: str) -> None:
        """Record that a session token was issued."""
        ...

    def token_verified(self, subject: str) -> None:
        """Record that a token was successfully verified."""
        ...

    def token_rejected(self, reason: str) -> None:
        """Record that a token failed signature or structure checks."""
        ...

    def token_expired(self) -> None:
        """Record that an expired token was presented."""
        ...

    def verification_errored(self, error: Exception) -> None:
        """Record that the verifier failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> SessionTokenProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSessionTokenProbe:
    """Default implementation of SessionTokenProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSessionTokenProbe:
        """Create a new probe with observation context bound."""
        return DefaultSessionTokenProbe(logger=self._logger, context=context)

    def token_issued(self, subject: str) -> None:
        self._logger.info(
            "session_token_issued",
            subject=subject,
            **self._get_context_kwargs(),
        )

    def token_verified(self, subject: str) -> None:
        self._logger.debug(
            "session_token_verified",
            subject=subject,
            **self._get_context_kwargs(),
        )

    def token_rejected(self, reason: str) -> None:
        self._logger.warning(
            "session_token_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def token_expired(self) -> None:
        self._logger.info(
            "session_token_expired",
            **self._get_context_kwargs(),
        )

    def verification_errored(self, error: Exception) -> None:
        self._logger.error(
            "session_token_verification_errored",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
