"""Domain probe for the request error boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ErrorBoundaryProbe(Protocol):
    """Domain probe for failures reaching the edge of the application."""

    def operational_error(
        self, kind: str, message: str, method: str, path: str
    ) -> None:
        """Record an expected failure returned to the caller."""
        ...

    def unexpected_error(self, error: BaseException, method: str, path: str) -> None:
        """Record an unhandled exception that was masked as an internal error."""
        ...

    def with_context(self, context: ObservationContext) -> ErrorBoundaryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultErrorBoundaryProbe:
    """Default implementation of ErrorBoundaryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultErrorBoundaryProbe:
        return DefaultErrorBoundaryProbe(logger=self._logger, context=context)

    def operational_error(
        self, kind: str, message: str, method: str, path: str
    ) -> None:
        self._logger.info(
            "request_failed",
            kind=kind,
            message=message,
            method=method,
            path=path,
            **self._get_context_kwargs(),
        )

    def unexpected_error(self, error: BaseException, method: str, path: str) -> None:
        self._logger.error(
            "unhandled_exception",
            error=str(error),
            error_type=type(error).__name__,
            method=method,
            path=path,
            exc_info=error,
            **self._get_context_kwargs(),
        )
