"""Domain probe for gadget repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GadgetRepositoryProbe(Protocol):
    """Domain probe for gadget persistence operations."""

    def gadget_created(self, gadget_id: str, codename: str) -> None:
        """Record that a gadget was inserted."""
        ...

    def gadgets_listed(self, count: int, status: str | None) -> None:
        """Record a list query and how many rows it returned."""
        ...

    def gadget_updated(self, gadget_id: str, fields: list[str]) -> None:
        """Record that a gadget was changed."""
        ...

    def gadget_not_found(self, gadget_id: str) -> None:
        """Record that no gadget has the given id."""
        ...

    def duplicate_codename(self, codename: str) -> None:
        """Record that an insert hit the unique codename index."""
        ...

    def with_context(self, context: ObservationContext) -> GadgetRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGadgetRepositoryProbe:
    """Default implementation of GadgetRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultGadgetRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGadgetRepositoryProbe(logger=self._logger, context=context)

    def gadget_created(self, gadget_id: str, codename: str) -> None:
        self._logger.info(
            "gadget_created",
            gadget_id=gadget_id,
            codename=codename,
            **self._get_context_kwargs(),
        )

    def gadgets_listed(self, count: int, status: str | None) -> None:
        self._logger.debug(
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

    def gadget_not_found(self, gadget_id: str) -> None:
        self._logger.debug(
            "gadget_not_found",
            gadget_id=gadget_id,
            **self._get_context_kwargs(),
        )

    def duplicate_codename(self, codename: str) -> None:
        self._logger.error(
            "duplicate_gadget_codename",
            codename=codename,
            **self._get_context_kwargs(),
        )
