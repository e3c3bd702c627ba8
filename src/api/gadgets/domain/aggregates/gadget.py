"""Gadget aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from gadgets.domain.value_objects import GadgetId, GadgetStatus


@dataclass(frozen=True)
class Gadget:
    """A tracked device.

    The codename is generated once at creation and never changes.
    ``decommissioned_at`` is only ever set by the decommission transition.
    """

    id: GadgetId
    name: str
    codename: str
    status: GadgetStatus = GadgetStatus.AVAILABLE
    decommissioned_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_decommissioned(self) -> bool:
        return self.status is GadgetStatus.DECOMMISSIONED

    @property
    def is_destroyed(self) -> bool:
        return self.status is GadgetStatus.DESTROYED

    def __eq__(self, other: object) -> bool:
        """Gadgets are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, Gadget):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
