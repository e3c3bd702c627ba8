"""Generated values attached to gadget operations."""

from __future__ import annotations

import random
import secrets

CONFIRMATION_CODE_LENGTH = 6


def generate_confirmation_code(length: int = CONFIRMATION_CODE_LENGTH) -> str:
    """Generate a numeric confirmation code of ``length`` digits.

    Leading zeros are kept, so the result always has exactly ``length``
    characters.
    """
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice("0123456789") for _ in range(length))


def random_success_percentage() -> int:
    """Pick a success percentage between 0 and 100 inclusive."""
    return random.randint(0, 100)


def format_success_probability(codename: str, percentage: int) -> str:
    return f"{codename} - {percentage}% success probability"
