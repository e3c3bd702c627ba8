"""Service protocols (ports) for the gadgets bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CodenameGenerator(Protocol):
    """Produces human-readable codenames such as "The Silent Falcon"."""

    def generate(self) -> str:
        """Return a new codename."""
        ...
