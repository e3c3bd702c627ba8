"""Repository protocols (ports) for the gadgets bounded context."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from gadgets.domain.aggregates import Gadget
from gadgets.domain.value_objects import GadgetChanges, GadgetId, GadgetStatus


@runtime_checkable
class IGadgetRepository(Protocol):
    """Repository for Gadget aggregate persistence.

    Mutating methods return the stored gadget after the change, or None if
    no gadget has the given id.
    """

    async def create(self, gadget: Gadget) -> Gadget:
        """Insert a new gadget.

        Raises:
            DuplicateCodenameError: If the codename is already taken
        """
        ...

    async def list(self, status: GadgetStatus | None = None) -> list[Gadget]:
        """List gadgets, optionally only those with the given status."""
        ...

    async def get_by_id(self, gadget_id: GadgetId) -> Gadget | None:
        """Retrieve a gadget by ID."""
        ...

    async def update(
        self, gadget_id: GadgetId, changes: GadgetChanges
    ) -> Gadget | None:
        """Apply the supplied fields of ``changes`` and nothing else."""
        ...

    async def decommission(
        self, gadget_id: GadgetId, decommissioned_at: datetime
    ) -> Gadget | None:
        """Set status Decommissioned and the timestamp in one write."""
        ...

    async def mark_destroyed(self, gadget_id: GadgetId) -> Gadget | None:
        """Set status Destroyed."""
        ...
