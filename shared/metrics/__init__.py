"""Metrics module using Prometheus."""

from .prometheus_metrics import (
    PaletteMetrics,
    setup_metrics,
    get_metrics_handler,
)

__all__ = [
    "PaletteMetrics",
    "setup_metrics",
    "get_metrics_handler",
]
