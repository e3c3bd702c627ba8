"""Application error taxonomy.

A single exception type tagged with an ``ErrorKind`` carries every
operational failure through the application. Each kind knows the HTTP
status it maps to, so the edge boundary can translate without a lookup
table of exception subclasses.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Closed set of operational failure kinds."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    BAD_REQUEST = "BAD_REQUEST"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def status_code(self) -> int:
        """HTTP status code for this kind of failure."""
        return _STATUS_CODES[self]


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.PAYLOAD_TOO_LARGE: 413,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.INTERNAL_ERROR: 500,
}


class AppError(Exception):
    """An expected, operational failure.

    Operational errors are safe to surface to the caller as-is: the
    message is written for clients and ``details`` holds structured
    context (for example the field errors of a validation failure).

    Attributes:
        kind: The failure kind, which determines the HTTP status.
        message: Client-facing message.
        details: Optional structured details included in the envelope.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def validation_failed(
        cls, details: list[dict[str, str]], message: str = "Validation Failed"
    ) -> AppError:
        return cls(ErrorKind.VALIDATION_FAILED, message, details)

    @classmethod
    def unauthenticated(cls, message: str) -> AppError:
        return cls(ErrorKind.UNAUTHENTICATED, message)

    @classmethod
    def unauthorized(cls, message: str) -> AppError:
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def not_found(cls, message: str) -> AppError:
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> AppError:
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def bad_request(cls, message: str) -> AppError:
        return cls(ErrorKind.BAD_REQUEST, message)

    @classmethod
    def payload_too_large(cls, message: str) -> AppError:
        return cls(ErrorKind.PAYLOAD_TOO_LARGE, message)

    @classmethod
    def rate_limited(cls, message: str) -> AppError:
        return cls(ErrorKind.RATE_LIMITED, message)

    @classmethod
    def internal(cls, message: str = "Internal Server Error") -> AppError:
        return cls(ErrorKind.INTERNAL_ERROR, message)
