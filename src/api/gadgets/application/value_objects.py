"""Application-layer value objects for the gadgets bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from gadgets.domain.aggregates import Gadget


@dataclass(frozen=True)
class GadgetView:
    """A gadget as listed, with its derived success estimate.

    ``mission_success_probability`` is computed on every read and never
    stored. Two reads of the same gadget will usually differ.
    """

    gadget: Gadget
    mission_success_probability: str


@dataclass(frozen=True)
class SelfDestructResult:
    """Outcome of a self-destruct: the destroyed gadget and a one-off code.

    The confirmation code is informational only. It is not stored and is
    not checked anywhere.
    """

    gadget: Gadget
    confirmation_code: str
