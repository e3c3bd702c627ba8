"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Stored and exchanged as the canonical UUID string.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new random UserId."""
        return cls(value=str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Args:
            value: UUID string

        Returns:
            UserId instance

        Raises:
            ValueError: If value is not a valid UUID
        """
        try:
            parsed = uuid.UUID(value)
        except (ValueError, AttributeError, TypeError) as e:
            raise ValueError(f"Invalid UserId: {value}") from e

        return cls(value=str(parsed))
