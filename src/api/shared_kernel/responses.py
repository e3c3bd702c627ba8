"""Response envelopes shared by every route.

Successful and failed responses use two distinct shapes. They are kept as
separate models rather than a common base so the ``success`` flag is a
literal on each and cannot drift.
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from shared_kernel.errors import AppError, ErrorKind

T = TypeVar("T")


class SuccessEnvelope(BaseModel, Generic[T]):
    """Envelope for successful responses."""

    success: Literal[True] = True
    message: str = Field(..., description="Human readable outcome")
    data: T | None = Field(default=None, description="Operation payload")


class ErrorBody(BaseModel):
    """Structured error attached to a failure envelope."""

    kind: ErrorKind
    details: Any | None = None


class ErrorEnvelope(BaseModel):
    """Envelope for failed responses."""

    success: Literal[False] = False
    message: str
    error: ErrorBody | None = None

    @classmethod
    def from_app_error(cls, error: AppError) -> ErrorEnvelope:
        return cls(
            message=error.message,
            error=ErrorBody(kind=error.kind, details=error.details),
        )


def error_response(
    error: AppError,
    headers: dict[str, str] | None = None,
    status_code: int | None = None,
) -> JSONResponse:
    """Render an AppError as a JSON failure envelope.

    ``status_code`` overrides the status implied by the error kind.
    """
    envelope = ErrorEnvelope.from_app_error(error)
    return JSONResponse(
        status_code=status_code or error.status_code,
        content=envelope.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )
