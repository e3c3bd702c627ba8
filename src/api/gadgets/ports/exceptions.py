"""Domain exceptions for the gadgets bounded context."""


class DuplicateCodenameError(Exception):
    """Raised when a generated codename collides with an existing gadget.

    Codenames are a unique secondary key. A collision is never resolved by
    overwriting: the insert fails and the error propagates.
    """

    pass
