"""Shared middleware for cross-cutting concerns.

Request logging, security headers and rate limiting apply to every route
regardless of bounded context.
"""

from shared_kernel.middleware.rate_limit import RateLimiter, RateLimitMiddleware
from shared_kernel.middleware.request_logging import RequestLoggingMiddleware
from shared_kernel.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RateLimitMiddleware",
    "RateLimiter",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
]
