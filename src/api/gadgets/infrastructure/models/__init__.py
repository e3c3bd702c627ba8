"""SQLAlchemy ORM models for the gadgets bounded context."""

from gadgets.infrastructure.models.gadget import GadgetModel

__all__ = [
    "GadgetModel",
]
