"""
Unit tests for application settings.

Tests cover defaults, environment overrides (including the JSON-encoded
custom color table) and validation failures.
"""

import json

import pytest
from pydantic import ValidationError

from api.src.config import Settings, clear_settings_cache, get_settings
from api.src.models.palette import DEFAULT_CUSTOM_COLORS, ThemeType


@pytest.fixture(autouse=True)
def reset_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestSettingsDefaults:
    """Test default values."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.app_name == "palette-service"
        assert settings.custom_colors == DEFAULT_CUSTOM_COLORS
        assert settings.default_theme_type is ThemeType.LIGHT
        assert settings.classify_error_status is False
        assert settings.tracing_exporter == "none"
        assert settings.json_logs is True


class TestSettingsEnvironment:
    """Test environment overrides."""

    def test_scalar_overrides(self, monkeypatch):
        monkeypatch.setenv("PALETTE_API_LOG_LEVEL", "debug")
        monkeypatch.setenv("PALETTE_API_DEFAULT_THEME_TYPE", "Dark")
        monkeypatch.setenv("PALETTE_API_TRACING_EXPORTER", "Console")

        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.default_theme_type is ThemeType.DARK
        assert settings.tracing_exporter == "console"

    def test_custom_colors_from_json(self, monkeypatch):
        monkeypatch.setenv(
            "PALETTE_API_CUSTOM_COLORS",
            json.dumps([
                {"name": "teal", "value": "#008080", "blend": False},
                {"name": "pink", "value": "FFC0CB"},
            ]),
        )

        settings = Settings(_env_file=None)

        assert [(c.name, c.value, c.blend) for c in settings.custom_colors] == [
            ("teal", "008080", False),
            ("pink", "FFC0CB", True),
        ]

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()


class TestSettingsValidation:
    """Test validation failures."""

    @pytest.mark.parametrize("field,value", [
        ("log_level", "LOUD"),
        ("environment", "moon"),
        ("log_format", "xml"),
        ("tracing_exporter", "jaeger"),
        ("tracing_sample_rate", 1.5),
        ("port", 0),
    ])
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_rejects_bad_custom_color(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, custom_colors=[{"name": "bad", "value": "xyz"}])

    def test_rejects_duplicate_custom_color_names(self):
        with pytest.raises(ValidationError, match="duplicated"):
            Settings(
                _env_file=None,
                custom_colors=[
                    {"name": "red", "value": "FF0000"},
                    {"name": "red", "value": "EE0000"},
                ],
            )
