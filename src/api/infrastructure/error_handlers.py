"""Global exception handlers: the single error normalization boundary.

Every failure raised while handling a request ends up here:

- ``AppError`` is operational. Its kind picks the status and its message
  and details are returned unchanged.
- FastAPI's own ``RequestValidationError`` becomes VALIDATION_FAILED with
  field-level details.
- Starlette ``HTTPException`` (unknown route, wrong method) keeps its
  status and is rendered in the same envelope.
- Anything else is logged with its traceback and returned as a generic
  INTERNAL_ERROR. Its message never reaches the client.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from infrastructure.observability.error_probe import (
    DefaultErrorBoundaryProbe,
    ErrorBoundaryProbe,
)
from shared_kernel.errors import AppError, ErrorKind
from shared_kernel.responses import error_response

_HTTP_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.UNAUTHENTICATED,
    403: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    413: ErrorKind.PAYLOAD_TOO_LARGE,
    429: ErrorKind.RATE_LIMITED,
}


def register_error_handlers(
    app: FastAPI, probe: ErrorBoundaryProbe | None = None
) -> None:
    """Register all global error handlers on the FastAPI app."""
    probe = probe or DefaultErrorBoundaryProbe()

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        probe.operational_error(
            kind=exc.kind.value,
            message=exc.message,
            method=request.method,
            path=request.url.path,
        )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {
                "field": ".".join(str(part) for part in item["loc"]),
                "message": item["msg"],
            }
            for item in exc.errors()
        ]
        error = AppError.validation_failed(details)
        probe.operational_error(
            kind=error.kind.value,
            message=error.message,
            method=request.method,
            path=request.url.path,
        )
        return error_response(error)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        kind = _HTTP_STATUS_KINDS.get(exc.status_code)
        if kind is None:
            kind = (
                ErrorKind.INTERNAL_ERROR
                if exc.status_code >= 500
                else ErrorKind.BAD_REQUEST
            )
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        probe.operational_error(
            kind=kind.value,
            message=message,
            method=request.method,
            path=request.url.path,
        )
        # 405 and friends keep their exact status under a coarser kind
        return error_response(
            AppError(kind, message),
            headers=getattr(exc, "headers", None),
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        probe.unexpected_error(exc, method=request.method, path=request.url.path)
        return error_response(AppError.internal())
