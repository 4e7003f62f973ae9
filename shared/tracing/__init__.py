"""Distributed tracing module using OpenTelemetry."""

from .otel_config import EXPORTERS, configure_tracing, get_tracer, trace_function

__all__ = ["EXPORTERS", "configure_tracing", "get_tracer", "trace_function"]
