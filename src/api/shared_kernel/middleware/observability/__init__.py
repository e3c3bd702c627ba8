"""Observability for shared middleware operations."""

from shared_kernel.middleware.observability.http_probe import (
    DefaultRateLimitProbe,
    DefaultRequestLoggingProbe,
    RateLimitProbe,
    RequestLoggingProbe,
)

__all__ = [
    "DefaultRateLimitProbe",
    "DefaultRequestLoggingProbe",
    "RateLimitProbe",
    "RequestLoggingProbe",
]
