"""FastAPI middleware components.

This package contains custom middleware for request processing: tracing,
request logging and per-route request metrics.
"""

from api.src.middleware.tracing import RequestTracingMiddleware, matched_route

__all__ = [
    "RequestTracingMiddleware",
    "matched_route",
]
