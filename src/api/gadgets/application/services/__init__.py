"""Application services for the gadgets bounded context."""

from gadgets.application.services.gadget_service import GadgetService

__all__ = [
    "GadgetService",
]
