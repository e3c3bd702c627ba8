"""Session token verification.

Verifies HMAC-signed session tokens issued by ``CredentialService`` and
classifies every failure so callers can treat all of them as
"unauthenticated" while logs still tell them apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from shared_kernel.auth.observability import DefaultSessionTokenProbe

if TYPE_CHECKING:
    from shared_kernel.auth.observability import SessionTokenProbe


@dataclass(frozen=True)
class TokenClaims:
    """Verified session token claims."""

    sub: str


class TokenFailureReason(StrEnum):
    """Why a token was rejected."""

    MALFORMED = "malformed"
    EXPIRED = "expired"
    UNEXPECTED = "unexpected"


class InvalidTokenError(Exception):
    """Raised when a session token cannot be accepted."""

    def __init__(self, reason: TokenFailureReason, message: str):
        super().__init__(message)
        self.reason = reason


class SessionTokenVerifier:
    """Verifies signature and expiry of session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        probe: SessionTokenProbe | None = None,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._probe = probe or DefaultSessionTokenProbe()

    def verify(self, token: str) -> TokenClaims:
        """Verify a token and return its claims.

        Args:
            token: The encoded JWT.

        Returns:
            TokenClaims with the subject.

        Raises:
            InvalidTokenError: If the token is malformed, badly signed,
                expired, lacks a subject, or the verifier fails.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": True, "verify_iat": True},
            )
        except ExpiredSignatureError as e:
            self._probe.token_expired()
            raise InvalidTokenError(
                TokenFailureReason.EXPIRED, "Token has expired"
            ) from e
        except JWTError as e:
            self._probe.token_rejected(reason=str(e))
            raise InvalidTokenError(
                TokenFailureReason.MALFORMED, f"Invalid token: {e}"
            ) from e
        except Exception as e:
            self._probe.verification_errored(e)
            raise InvalidTokenError(
                TokenFailureReason.UNEXPECTED, "Token verification failed"
            ) from e

        subject = claims.get("sub")
        if not subject:
            self._probe.token_rejected(reason="Missing sub claim")
            raise InvalidTokenError(
                TokenFailureReason.MALFORMED, "Missing required claim: sub"
            )

        self._probe.token_verified(subject=str(subject))
        return TokenClaims(sub=str(subject))
