"""Domain-Oriented Observability for gadgets infrastructure."""

from gadgets.infrastructure.observability.repository_probe import (
    DefaultGadgetRepositoryProbe,
    GadgetRepositoryProbe,
)

__all__ = [
    "DefaultGadgetRepositoryProbe",
    "GadgetRepositoryProbe",
]
