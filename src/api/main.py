"""Main FastAPI application entry point."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from gadgets import presentation as gadgets_presentation
from iam import presentation as iam_presentation
from infrastructure.database.connection import Database
from infrastructure.error_handlers import register_error_handlers
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import (
    AuthSettings,
    Settings,
    get_auth_settings,
    get_database_settings,
    get_rate_limit_settings,
    get_settings,
)
from infrastructure.version import __version__
from shared_kernel.auth import CredentialService, SessionTokenVerifier
from shared_kernel.middleware import (
    RateLimiter,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)

API_PREFIX = "/api/v1"


def build_credentials(
    auth: AuthSettings, allow_weak_secret: bool = False
) -> tuple[CredentialService, SessionTokenVerifier]:
    """Build the token issuer and verifier from one shared secret."""
    secret = auth.require_secret(allow_weak=allow_weak_secret)
    credentials = CredentialService(
        secret=secret,
        token_ttl=timedelta(seconds=auth.token_ttl_seconds),
        bcrypt_rounds=auth.bcrypt_rounds,
        algorithm=auth.jwt_algorithm,
    )
    verifier = SessionTokenVerifier(secret=secret, algorithm=auth.jwt_algorithm)
    return credentials, verifier


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Credential service and token verifier construction
    - Database handle creation on startup and disposal on shutdown
    """
    settings: Settings = app.state.settings
    probe: StartupProbe = app.state.startup_probe
    configure_logging(settings.log_level)

    credentials, verifier = build_credentials(
        get_auth_settings(), allow_weak_secret=settings.debug
    )
    app.state.credentials = credentials
    app.state.token_verifier = verifier

    database = Database.from_settings(get_database_settings())
    app.state.database = database
    try:
        await database.ping()
    except Exception as e:
        # Requests will fail individually until the database comes back
        probe.database_unreachable(error=str(e))

    probe.application_started(app_name=settings.app_name, version=__version__)
    try:
        yield
    finally:
        probe.application_stopping()
        await database.dispose()
        app.state.database = None
        probe.application_stopped()


def create_app(
    settings: Settings | None = None,
    startup_probe: StartupProbe | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings (default: loaded from environment)
        startup_probe: Optional probe for lifecycle events

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Inventory of IMF gadgets and their lifecycle",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.startup_probe = startup_probe or DefaultStartupProbe()
    app.state.started_at = time.monotonic()

    rate_limit = get_rate_limit_settings()
    if rate_limit.enabled:
        app.state.rate_limiter = RateLimiter(
            max_requests=rate_limit.max_requests,
            window_seconds=rate_limit.window_seconds,
        )
        app.add_middleware(RateLimitMiddleware, limiter=app.state.rate_limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    # Added last so it wraps everything else
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)

    app.include_router(iam_presentation.router, prefix=API_PREFIX)
    app.include_router(gadgets_presentation.router, prefix=API_PREFIX)

    @app.get("/status", tags=["health"])
    def status(request: Request) -> dict:
        """Liveness check with uptime and version."""
        return {
            "success": True,
            "message": "Server is up and running smoothly!",
            "uptime_seconds": round(
                time.monotonic() - request.app.state.started_at, 3
            ),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
        }

    return app


app = create_app()


def run() -> None:
    """Run the application with uvicorn using configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "main:app", host=settings.host, port=settings.port, server_header=False
    )


if __name__ == "__main__":
    run()
