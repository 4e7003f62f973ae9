"""
Color theme provider backed by Material Color Utilities.

The color science (HCT conversion, tonal palettes, harmonization) belongs to
``material_color_utilities_python``. This module only adapts its
dictionary-shaped output to ``GeneratedTheme`` and turns its failures into
``ProviderError``.
"""

from typing import Protocol, Sequence

import structlog
from material_color_utilities_python import argbFromHex, hexFromArgb, themeFromSourceColor

from api.src.errors import ProviderError
from api.src.models.palette import (
    CustomColorGroup,
    CustomColorRoles,
    CustomColorSpec,
    GeneratedTheme,
)

logger = structlog.get_logger(__name__)


class ThemeProvider(Protocol):
    """Interface the palette service needs from a color theme provider."""

    def build(self, source: str, custom_colors: Sequence[CustomColorSpec]) -> GeneratedTheme:
        ...

    def to_hex(self, argb: int) -> str:
        ...


def _roles(group: dict) -> CustomColorRoles:
    return CustomColorRoles(
        color=group["color"],
        color_container=group["colorContainer"],
        on_color=group["onColor"],
        on_color_container=group["onColorContainer"],
    )


class MaterialThemeProvider:
    """Builds Material You themes from a hex source color."""

    def build(self, source: str, custom_colors: Sequence[CustomColorSpec]) -> GeneratedTheme:
        """
        Generate light and dark schemes plus accent variants.

        Args:
            source: Validated 6 or 8 digit hex source color
            custom_colors: Accents to generate variants for, in output order

        Returns:
            Generated theme

        Raises:
            ProviderError: If the library rejects the input or fails internally
        """
        try:
            theme = themeFromSourceColor(
                argbFromHex(source),
                [
                    {"value": argbFromHex(color.value), "name": color.name, "blend": color.blend}
                    for color in custom_colors
                ],
            )

            return GeneratedTheme(
                light=dict(theme["schemes"]["light"].props),
                dark=dict(theme["schemes"]["dark"].props),
                custom_colors=[
                    CustomColorGroup(
                        name=color.name,
                        light=_roles(group["light"]),
                        dark=_roles(group["dark"]),
                    )
                    for color, group in zip(custom_colors, theme["customColors"])
                ],
            )
        except Exception as e:
            logger.warning("theme_provider_failed", source=source, error=str(e))
            raise ProviderError(f"theme generation failed for {source!r}: {e}") from e

    def to_hex(self, argb: int) -> str:
        """Six lower-case hex digits, zero-padded, without ``#``."""
        return hexFromArgb(argb).lstrip("#")
