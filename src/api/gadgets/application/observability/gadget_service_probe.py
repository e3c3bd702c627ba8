"""Domain probe for gadget lifecycle operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the GadgetService use cases. Rejections the
caller can act on (unknown gadget, redundant transition) are warnings;
unexpected failures are errors.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GadgetServiceProbe(Protocol):
    """Domain probe for GadgetService operations."""

    def gadget_created(self, gadget_id: str, name: str, codename: str) -> None:
        """Record that a gadget was created."""
        ...

    def gadgets_listed(self, count: int, status: str | None) -> None:
        """Record that gadgets were listed."""
        ...

    def gadget_updated(self, gadget_id: str, fields: list[str]) -> None:
        """Record that a gadget was updated."""
        ...

    def gadget_decommissioned(self, gadget_id: str) -> None:
        """Record that a gadget was decommissioned."""
        ...

    def gadget_self_destructed(self, gadget_id: str) -> None:
        """Record that a gadget self-destructed."""
        ...

    def operation_rejected(
        self, operation: str, gadget_id: str | None, reason: str
    ) -> None:
        """Record an expected, caller-facing rejection."""
        ...

    def operation_failed(
        self, operation: str, gadget_id: str | None, error: str
    ) -> None:
        """Record an unexpected failure."""
        ...

    def with_context(self, context: ObservationContext) -> GadgetServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGadgetServiceProbe:
    """Default implementation of GadgetServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGadgetServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultGadgetServiceProbe(logger=self._logger, context=context)

    def gadget_created(self, gadget_id: str, name: str, codename: str) -> None:
        self._logger.info(
            "gadget_created",
            gadget_id=gadget_id,
            name=name,
            codename=codename,
            **self._get_context_kwargs(),
        )

    def gadgets_listed(self, count: int, status: str | None) -> None:
        self._logger.info(
            "gadgets_listed",
            count=count,
            status=status,
            **self._get_context_kwargs(),
        )

    def gadget_updated(self, gadget_id: str, fields: list[str]) -> None:
        self._logger.info(
            "gadget_updated",
            gadget_id=gadget_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def gadget_decommissioned(self, gadget_id: str) -> None:
        self._logger.info(
            "gadget_decommissioned",
            gadget_id=gadget_id,
            **self._get_context_kwargs(),
        )

    def gadget_self_destructed(self, gadget_id: str) -> None:
        self._logger.info(
            "gadget_self_destructed",
            gadget_id=gadget_id,
            **self._get_context_kwargs(),
        )

    def operation_rejected(
        self, operation: str, gadget_id: str | None, reason: str
    ) -> None:
        self._logger.warning(
            "gadget_operation_rejected",
            operation=operation,
            gadget_id=gadget_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def operation_failed(
        self, operation: str, gadget_id: str | None, error: str
    ) -> None:
        self._logger.error(
            "gadget_operation_failed",
            operation=operation,
            gadget_id=gadget_id,
            error=error,
            **self._get_context_kwargs(),
        )
