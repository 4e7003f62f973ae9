"""
FastAPI application entry point for the palette service.

This module provides the main FastAPI application with:
- The greeting, palette and health endpoints
- Uniform error responses for every failure
- Request tracing with OpenTelemetry
- Structured logging with structlog
- Prometheus metrics
"""

import structlog
import uvicorn
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from opentelemetry import trace
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry

from api.src.config import get_settings, Settings
from api.src.errors import PaletteError, error_response
from api.src.middleware.tracing import RequestTracingMiddleware
from api.src.routers.palette import router as palette_router
from api.src.services.palette_service import PaletteService
from api.src.services.theme_provider import MaterialThemeProvider, ThemeProvider
from shared.logging import configure_logging
from shared.metrics import get_metrics_handler, setup_metrics
from shared.tracing import configure_tracing

# Initialize logger
logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[ThemeProvider] = None,
    tracer_provider: Optional[trace.TracerProvider] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use, defaults to the cached environment settings
        provider: Color theme provider, defaults to Material Color Utilities
        tracer_provider: Tracer provider for request spans, defaults to the
            global one (configured at startup when tracing is enabled)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.app_name,
        environment=settings.environment,
    )

    # ========================================================================
    # Lifespan Management
    # ========================================================================

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Configure tracing on startup and flush it on shutdown."""
        logger.info(
            "application_starting",
            app_name=settings.app_name,
            version=settings.app_version,
            environment=settings.environment,
        )

        configured_provider = None
        if settings.tracing_enabled and tracer_provider is None:
            logger.info(
                "initializing_tracing",
                exporter=settings.tracing_exporter,
                sample_rate=settings.tracing_sample_rate,
            )
            configured_provider = configure_tracing(
                service_name=settings.app_name,
                service_version=settings.app_version,
                exporter=settings.tracing_exporter,
                otlp_endpoint=settings.tracing_otlp_endpoint,
                sampling_rate=settings.tracing_sample_rate,
            )

        logger.info("application_started", custom_colors=len(settings.custom_colors))

        try:
            yield
        finally:
            logger.info("application_shutting_down")
            if configured_provider is not None:
                configured_provider.shutdown()
            logger.info("application_shutdown_complete")

    # ========================================================================
    # FastAPI Application
    # ========================================================================

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Generates Material color palettes from a single base color.",
        lifespan=lifespan,
        debug=settings.debug,
    )

    metrics = None
    if settings.metrics_enabled:
        registry = CollectorRegistry()
        metrics = setup_metrics(registry)
        metrics_handler = get_metrics_handler(registry)

        @app.get("/metrics", tags=["Monitoring"], response_class=PlainTextResponse)
        async def prometheus_metrics() -> Response:
            """Prometheus metrics endpoint."""
            return Response(content=metrics_handler(), media_type=CONTENT_TYPE_LATEST)

    app.state.settings = settings
    app.state.metrics = metrics
    app.state.palette_service = PaletteService(
        provider=provider or MaterialThemeProvider(),
        custom_colors=settings.custom_colors,
        metrics=metrics,
    )

    app.add_middleware(
        RequestTracingMiddleware,
        tracer_provider=tracer_provider,
        metrics=metrics,
    )

    # ========================================================================
    # Exception Handlers
    # ========================================================================

    @app.exception_handler(PaletteError)
    async def palette_error_handler(request: Request, exc: PaletteError) -> PlainTextResponse:
        """Render application errors uniformly."""
        logger.error(
            "error_occurred",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=exc.message,
        )
        return error_response(exc.message, exc.response_status(settings.classify_error_status))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
        """Handle request validation errors like any other failure."""
        message = "; ".join(str(error.get("msg", error)) for error in exc.errors())
        logger.error("error_occurred", path=request.url.path, error_type="RequestValidationError", error=message)
        status_code = (
            status.HTTP_400_BAD_REQUEST if settings.classify_error_status
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return error_response(message, status_code)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "error_occurred",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=True,
        )
        return error_response(str(exc))

    app.include_router(palette_router)

    return app


app = create_app()

# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    settings = get_settings()

    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
