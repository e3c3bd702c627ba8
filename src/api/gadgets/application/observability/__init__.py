"""Domain-Oriented Observability for the gadgets application layer."""

from gadgets.application.observability.gadget_service_probe import (
    DefaultGadgetServiceProbe,
    GadgetServiceProbe,
)

__all__ = [
    "DefaultGadgetServiceProbe",
    "GadgetServiceProbe",
]
