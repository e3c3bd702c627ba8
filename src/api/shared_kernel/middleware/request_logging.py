"""Request logging middleware.

Assigns every request an id, binds it into the structlog context so all
events emitted while handling the request carry it, and logs the start
and outcome of the request.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from shared_kernel.middleware.observability import (
    DefaultRequestLoggingProbe,
    RequestLoggingProbe,
)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request and tags log events with a request id.

    An incoming ``X-Request-ID`` header is reused so ids can be correlated
    with an upstream proxy; otherwise a fresh one is generated. The id is
    echoed back on the response.
    """

    def __init__(self, app: ASGIApp, probe: RequestLoggingProbe | None = None):
        super().__init__(app)
        self._probe = probe or DefaultRequestLoggingProbe()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        client = request.client.host if request.client else None
        self._probe.request_started(
            method=request.method, path=request.url.path, client=client
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._probe.request_completed(
                method=request.method,
                path=request.url.path,
                status_code=500,
                duration_ms=(time.perf_counter() - started) * 1000,
            )
            raise
        self._probe.request_completed(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
