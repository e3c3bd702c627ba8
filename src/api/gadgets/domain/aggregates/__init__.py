"""Domain aggregates for the gadgets context."""

from gadgets.domain.aggregates.gadget import Gadget

__all__ = [
    "Gadget",
]
