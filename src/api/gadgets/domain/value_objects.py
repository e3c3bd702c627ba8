"""Value objects for the gadgets domain."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class GadgetId:
    """Identifier for a Gadget aggregate (canonical UUID string)."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> GadgetId:
        """Generate a new random GadgetId."""
        return cls(value=str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str) -> GadgetId:
        """Create GadgetId from string value.

        Raises:
            ValueError: If value is not a valid UUID
        """
        try:
            parsed = uuid.UUID(value)
        except (ValueError, AttributeError, TypeError) as e:
            raise ValueError(f"Invalid GadgetId: {value}") from e
        return cls(value=str(parsed))


class GadgetStatus(StrEnum):
    """Lifecycle status of a gadget.

    Values are the exact strings exchanged with clients and stored in the
    database.
    """

    AVAILABLE = "Available"
    DEPLOYED = "Deployed"
    DESTROYED = "Destroyed"
    DECOMMISSIONED = "Decommissioned"


@dataclass(frozen=True)
class GadgetChanges:
    """Partial update of a gadget. ``None`` means "leave unchanged"."""

    name: str | None = None
    status: GadgetStatus | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.status is None

    def as_dict(self) -> dict[str, object]:
        """Only the supplied fields, keyed by attribute name."""
        values: dict[str, object] = {}
        if self.name is not None:
            values["name"] = self.name
        if self.status is not None:
            values["status"] = self.status
        return values
