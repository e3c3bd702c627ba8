"""Domain probes for HTTP middleware.

Following Domain-Oriented Observability patterns, these probes capture
request lifecycle and throttling events without the middleware knowing
how they are logged.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RequestLoggingProbe(Protocol):
    """Domain probe for the request lifecycle."""

    def request_started(self, method: str, path: str, client: str | None) -> None:
        """Record that a request was received."""
        ...

    def request_completed(
        self, method: str, path: str, status_code: int, duration_ms: float
    ) -> None:
        """Record that a response was produced."""
        ...

    def with_context(self, context: ObservationContext) -> RequestLoggingProbe:
        """Create a new probe with observation context bound."""
        ...


class RateLimitProbe(Protocol):
    """Domain probe for request throttling."""

    def rate_limit_exceeded(self, client: str, path: str, retry_after: int) -> None:
        """Record that a client was throttled."""
        ...

    def with_context(self, context: ObservationContext) -> RateLimitProbe:
        """Create a new probe with observation context bound."""
        ...


class _StructlogProbe:
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


class DefaultRequestLoggingProbe(_StructlogProbe):
    """Default implementation of RequestLoggingProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultRequestLoggingProbe:
        return DefaultRequestLoggingProbe(logger=self._logger, context=context)

    def request_started(self, method: str, path: str, client: str | None) -> None:
        self._logger.info(
            "http_request_started",
            method=method,
            path=path,
            client=client,
            **self._get_context_kwargs(),
        )

    def request_completed(
        self, method: str, path: str, status_code: int, duration_ms: float
    ) -> None:
        log = self._logger.warning if status_code >= 400 else self._logger.info
        log(
            "http_request_completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
            **self._get_context_kwargs(),
        )


class DefaultRateLimitProbe(_StructlogProbe):
    """Default implementation of RateLimitProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultRateLimitProbe:
        return DefaultRateLimitProbe(logger=self._logger, context=context)

    def rate_limit_exceeded(self, client: str, path: str, retry_after: int) -> None:
        self._logger.warning(
            "rate_limit_exceeded",
            client=client,
            path=path,
            retry_after=retry_after,
            **self._get_context_kwargs(),
        )
