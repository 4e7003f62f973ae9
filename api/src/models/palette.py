"""
Palette request, custom color and generated theme models.

Provides the Pydantic schemas that flow through a palette request:
- ThemeType: light/dark selector parsed from the query string
- CustomColorSpec: a named accent color appended after the base scheme
- PaletteRequest: validated query parameters
- GeneratedTheme: provider output, reduced to role -> ARGB mappings
"""

import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.src.errors import InvalidColorError, InvalidThemeTypeError

HEX_COLOR_PATTERN = re.compile(r"^#?(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def validate_hex_color(value: Optional[str], field: str = "base_color") -> str:
    """
    Check that a color string is 6 (RGB) or 8 (ARGB) hex digits.

    A single leading ``#`` is accepted and stripped.

    Raises:
        InvalidColorError: If the value is missing or malformed
    """
    if value is None:
        raise InvalidColorError(f"missing required query parameter '{field}'")
    if not HEX_COLOR_PATTERN.fullmatch(value):
        raise InvalidColorError(
            f"invalid color string {value!r} for '{field}': "
            "expected 6 (RGB) or 8 (ARGB) hex digits"
        )
    return value.lstrip("#")


# ============================================================================
# Theme Type
# ============================================================================


class ThemeType(str, Enum):
    """Which of the two generated schemes to serialize."""
    DARK = "Dark"
    LIGHT = "Light"

    @classmethod
    def parse(cls, token: str) -> "ThemeType":
        """
        Map a query-string token onto a theme type.

        Matching is exact and case-sensitive: ``Dark`` and ``Light`` only.

        Raises:
            InvalidThemeTypeError: For any other token
        """
        theme_type = _THEME_TYPE_TOKENS.get(token)
        if theme_type is None:
            raise InvalidThemeTypeError(
                f"unknown theme_type {token!r}, expected one of: "
                f"{', '.join(_THEME_TYPE_TOKENS)}"
            )
        return theme_type


_THEME_TYPE_TOKENS: Dict[str, ThemeType] = {
    "Dark": ThemeType.DARK,
    "Light": ThemeType.LIGHT,
}


# ============================================================================
# Custom Colors
# ============================================================================


class CustomColorSpec(BaseModel):
    """A named accent color, optionally harmonized toward the source color."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Accent name")
    value: str = Field(..., description="RGB or ARGB hex string")
    blend: bool = Field(True, description="Harmonize toward the source color")

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        """Reject accent values that are not hex colors."""
        try:
            return validate_hex_color(v, field="custom_colors.value")
        except InvalidColorError as exc:
            raise ValueError(exc.message) from exc


DEFAULT_CUSTOM_COLORS: Tuple[CustomColorSpec, ...] = (
    CustomColorSpec(name="red", value="FF7676", blend=True),
    CustomColorSpec(name="green", value="59EB5C", blend=True),
    CustomColorSpec(name="blue", value="0000FF", blend=True),
    CustomColorSpec(name="yellow", value="F8F770", blend=False),
    CustomColorSpec(name="purple", value="BA64F2", blend=True),
    CustomColorSpec(name="cyan", value="61D1FA", blend=True),
    CustomColorSpec(name="orange", value="E69E50", blend=False),
)


# ============================================================================
# Request
# ============================================================================


class PaletteRequest(BaseModel):
    """Validated ``/getPalette`` query."""

    model_config = ConfigDict(frozen=True)

    base_color: str
    theme_type: ThemeType

    @classmethod
    def from_query(
        cls,
        base_color: Optional[str],
        theme_type: Optional[str],
        default_theme_type: ThemeType = ThemeType.LIGHT,
    ) -> "PaletteRequest":
        """
        Build a request from raw query parameters.

        A missing ``theme_type`` falls back to ``default_theme_type``; an
        empty or unrecognized one is an error.
        """
        color = validate_hex_color(base_color)
        selected = default_theme_type if theme_type is None else ThemeType.parse(theme_type)
        return cls(base_color=color, theme_type=selected)


# ============================================================================
# Generated Theme
# ============================================================================


class CustomColorRoles(BaseModel):
    """The four role variants of one accent in one mode, as ARGB integers."""

    model_config = ConfigDict(frozen=True)

    color: int
    color_container: int
    on_color: int
    on_color_container: int

    def ordered(self) -> Tuple[int, int, int, int]:
        """Roles in serialization order."""
        return (self.color, self.color_container, self.on_color, self.on_color_container)


class CustomColorGroup(BaseModel):
    """Light and dark variants generated for one accent."""

    model_config = ConfigDict(frozen=True)

    name: str
    light: CustomColorRoles
    dark: CustomColorRoles

    def for_theme(self, theme_type: ThemeType) -> CustomColorRoles:
        return self.dark if theme_type is ThemeType.DARK else self.light


class GeneratedTheme(BaseModel):
    """
    Provider output for one source color.

    ``light`` and ``dark`` map scheme role names to ARGB integers in the
    provider's native role order; serialization relies on that order.
    """

    model_config = ConfigDict(frozen=True)

    light: Dict[str, int]
    dark: Dict[str, int]
    custom_colors: List[CustomColorGroup] = Field(default_factory=list)

    def scheme(self, theme_type: ThemeType) -> Dict[str, int]:
        return self.dark if theme_type is ThemeType.DARK else self.light
