"""Password hashing and session token issuing.

Passwords are hashed with bcrypt. Hashing is CPU bound and deliberately
slow, so both hashing and verification run in a worker thread to keep
the event loop responsive.

Session tokens are HMAC-signed JWTs whose ``sub`` claim is the user id.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import anyio.to_thread
import bcrypt
from jose import jwt

from shared_kernel.auth.observability import DefaultSessionTokenProbe

if TYPE_CHECKING:
    from shared_kernel.auth.observability import SessionTokenProbe

# bcrypt only considers the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class CredentialService:
    """Hashes and verifies passwords and issues session tokens."""

    def __init__(
        self,
        secret: str,
        token_ttl: timedelta = timedelta(days=1),
        bcrypt_rounds: int = 10,
        algorithm: str = "HS256",
        probe: SessionTokenProbe | None = None,
    ):
        """Initialize the credential service.

        Args:
            secret: Shared secret used to sign session tokens.
            token_ttl: Lifetime of issued tokens (default: 1 day).
            bcrypt_rounds: bcrypt cost factor (default: 10).
            algorithm: JWT signing algorithm (default: HS256).
            probe: Optional domain probe for observability.
        """
        self._secret = secret
        self._token_ttl = token_ttl
        self._bcrypt_rounds = bcrypt_rounds
        self._algorithm = algorithm
        self._probe = probe or DefaultSessionTokenProbe()

    async def hash_password(self, password: str) -> str:
        """Hash a plaintext password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._bcrypt_rounds)
        hashed = await anyio.to_thread.run_sync(
            bcrypt.hashpw, _password_bytes(password), salt
        )
        return hashed.decode("utf-8")

    async def verify_password(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored bcrypt hash.

        A malformed stored hash is treated as a mismatch.
        """
        try:
            return await anyio.to_thread.run_sync(
                bcrypt.checkpw,
                _password_bytes(password),
                password_hash.encode("utf-8"),
            )
        except ValueError:
            return False

    def issue_token(self, subject: str, now: datetime | None = None) -> str:
        """Issue a signed session token for ``subject``.

        Args:
            subject: Value of the ``sub`` claim (the user id).
            now: Issue time, defaults to the current UTC time.

        Returns:
            The encoded JWT.
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self._token_ttl,
        }
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        self._probe.token_issued(subject=subject)
        return token
