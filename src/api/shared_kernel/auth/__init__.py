"""Authentication shared kernel module."""

from shared_kernel.auth.credentials import CredentialService
from shared_kernel.auth.observability import (
    DefaultSessionTokenProbe,
    SessionTokenProbe,
)
from shared_kernel.auth.session_tokens import (
    InvalidTokenError,
    SessionTokenVerifier,
    TokenClaims,
    TokenFailureReason,
)

__all__ = [
    "CredentialService",
    "DefaultSessionTokenProbe",
    "InvalidTokenError",
    "SessionTokenProbe",
    "SessionTokenVerifier",
    "TokenClaims",
    "TokenFailureReason",
]
