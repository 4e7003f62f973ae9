"""
Palette generation service.

Turns a validated ``PaletteRequest`` into the positional hex string returned
by ``/getPalette``: every scheme role of the selected mode in provider order,
followed by color, color-container, on-color and on-color-container for each
custom accent. No separators, no ``#``.
"""

import time
from typing import Callable, Optional, Sequence

import structlog

from api.src.errors import PaletteError
from api.src.models.palette import CustomColorSpec, GeneratedTheme, PaletteRequest, ThemeType
from api.src.services.theme_provider import ThemeProvider
from shared.metrics import PaletteMetrics
from shared.tracing import trace_function

logger = structlog.get_logger(__name__)


def format_palette(
    theme: GeneratedTheme,
    theme_type: ThemeType,
    to_hex: Callable[[int], str],
) -> str:
    """
    Serialize a generated theme for one mode.

    Args:
        theme: Provider output
        theme_type: Which scheme set to serialize
        to_hex: ARGB -> six hex digits

    Returns:
        Concatenated hex string
    """
    base = "".join(to_hex(argb) for argb in theme.scheme(theme_type).values())
    custom = "".join(
        to_hex(argb)
        for group in theme.custom_colors
        for argb in group.for_theme(theme_type).ordered()
    )
    return base + custom


class PaletteService:
    """Generates palette strings from a base color."""

    def __init__(
        self,
        provider: ThemeProvider,
        custom_colors: Sequence[CustomColorSpec] = (),
        metrics: Optional[PaletteMetrics] = None,
    ):
        self.provider = provider
        self.custom_colors = tuple(custom_colors)
        self.metrics = metrics

    @trace_function("generate_palette")
    def generate(self, request: PaletteRequest) -> str:
        """
        Generate the palette string for a request.

        Raises:
            PaletteError: If the provider fails; nothing is returned partially
        """
        logger.info(
            "generating_theme",
            theme_type=request.theme_type.value,
            base_color=request.base_color,
        )

        start_time = time.perf_counter()
        try:
            theme = self.provider.build(request.base_color, self.custom_colors)
            palette = format_palette(theme, request.theme_type, self.provider.to_hex)
        except PaletteError:
            self._record(request.theme_type, "error")
            raise

        self._record(request.theme_type, "success", time.perf_counter() - start_time)

        logger.info("theme_generated", theme_type=request.theme_type.value, palette=palette)

        return palette

    def _record(self, theme_type: ThemeType, outcome: str, duration: Optional[float] = None) -> None:
        if self.metrics is None:
            return
        self.metrics.palette_requests.labels(theme_type=theme_type.value, status=outcome).inc()
        if duration is not None:
            self.metrics.generation_duration.labels(theme_type=theme_type.value).observe(duration)
