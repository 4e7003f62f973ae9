"""Prometheus metrics definitions and helpers.

Provides the metric definitions shared by the palette service components.
"""

from typing import Callable

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    REGISTRY,
    CollectorRegistry,
)


class PaletteMetrics:
    """Palette service metrics."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize palette metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.registry = registry

        # Palette requests by outcome
        self.palette_requests = Counter(
            "palette_requests_total",
            "Total number of palette generation requests",
            ["theme_type", "status"],
            registry=registry,
        )

        # Generation duration
        self.generation_duration = Histogram(
            "palette_generation_duration_seconds",
            "Time spent generating a palette string",
            ["theme_type"],
            buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
            registry=registry,
        )

        # HTTP requests by matched route
        self.http_requests = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "route", "status"],
            registry=registry,
        )


def setup_metrics(registry: CollectorRegistry = REGISTRY) -> PaletteMetrics:
    """Setup and return the metric instances.

    Passing a fresh ``CollectorRegistry`` keeps repeated application builds
    (as in tests) from registering duplicate collectors.
    """
    return PaletteMetrics(registry=registry)


def get_metrics_handler(registry: CollectorRegistry = REGISTRY) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(registry)

    return metrics_handler
