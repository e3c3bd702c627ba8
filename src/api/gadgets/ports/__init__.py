"""Ports (interfaces) for the gadgets bounded context."""

from gadgets.ports.exceptions import DuplicateCodenameError
from gadgets.ports.repositories import IGadgetRepository
from gadgets.ports.services import CodenameGenerator

__all__ = [
    "CodenameGenerator",
    "DuplicateCodenameError",
    "IGadgetRepository",
]
