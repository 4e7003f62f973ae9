"""
Request tracing middleware.

Opens a ``request`` span around every HTTP request. The span carries the
method, the full URI and the matched route pattern (``/getPalette``, never
the literal path with values substituted). Errors propagate untouched; the
span, the request log and the request counter record them on the way out.
"""

import time
from typing import Optional

import structlog
from fastapi import Request, Response
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from shared.logging import bind_context
from shared.metrics import PaletteMetrics

logger = structlog.get_logger(__name__)


def matched_route(request: Request) -> Optional[str]:
    """
    Route pattern the router dispatched this request to.

    Only known once routing has run: the router records the matched route
    in the request scope. Unknown paths have none.
    """
    return getattr(request.scope.get("route"), "path", None)


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Wraps each request in a server span and counts it by route."""

    def __init__(
        self,
        app: ASGIApp,
        tracer_provider: Optional[trace.TracerProvider] = None,
        metrics: Optional[PaletteMetrics] = None,
    ):
        super().__init__(app)
        self.tracer_provider = tracer_provider
        self.metrics = metrics

    def _count(self, method: str, route: Optional[str], status_code: int) -> None:
        if self.metrics is not None:
            self.metrics.http_requests.labels(
                method=method,
                route=route or "unmatched",
                status=status_code,
            ).inc()

    async def dispatch(self, request: Request, call_next) -> Response:
        method = request.method
        uri = str(request.url)

        tracer = trace.get_tracer(__name__, tracer_provider=self.tracer_provider)

        with tracer.start_as_current_span(
            "request",
            kind=SpanKind.SERVER,
            attributes={"http.method": method, "http.url": uri},
        ) as span:
            bind_context(http_method=method)
            start_time = time.perf_counter()

            logger.debug("request_started", method=method, uri=uri)

            try:
                response = await call_next(request)
            except Exception as e:
                route = matched_route(request)
                if route is not None:
                    span.set_attribute("http.route", route)
                span.set_attribute("http.status_code", 500)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                self._count(method, route, 500)
                logger.error(
                    "request_failed",
                    method=method,
                    uri=uri,
                    route=route,
                    error_type=type(e).__name__,
                    duration=f"{time.perf_counter() - start_time:.3f}s",
                    exc_info=True,
                )
                raise

            route = matched_route(request)
            if route is not None:
                span.set_attribute("http.route", route)
            span.set_attribute("http.status_code", response.status_code)
            if response.status_code >= 500:
                span.set_status(Status(StatusCode.ERROR))

            self._count(method, route, response.status_code)

            logger.info(
                "request_completed",
                method=method,
                uri=uri,
                route=route,
                status_code=response.status_code,
                duration=f"{time.perf_counter() - start_time:.3f}s",
            )

            return response
