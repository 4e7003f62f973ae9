"""
FastAPI application configuration using Pydantic Settings.

Provides centralized configuration for:
- API settings (name, version, bind address)
- Palette generation (custom accent colors, default theme type)
- Error status classification
- Logging, tracing and metrics

All settings support environment variable overrides and .env file loading.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional, Tuple
from functools import lru_cache

from api.src.models.palette import DEFAULT_CUSTOM_COLORS, CustomColorSpec, ThemeType
from shared.tracing import EXPORTERS


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables with the
    prefix "PALETTE_API_" (e.g., PALETTE_API_LOG_LEVEL).

    Environment variables are loaded from:
    1. System environment
    2. .env file in the current directory
    3. Default values defined below
    """

    # =========================================================================
    # API Settings
    # =========================================================================

    app_name: str = Field(
        default="palette-service",
        description="Application name"
    )
    app_version: str = Field(
        default="0.1.0",
        description="API version"
    )

    debug: bool = Field(
        default=False,
        description="Debug mode - enables auto-reload and verbose logging"
    )
    environment: str = Field(
        default="production",
        description="Environment: development|staging|production"
    )

    host: str = Field(
        default="0.0.0.0",
        description="API bind host"
    )
    port: int = Field(
        default=8000,
        description="API bind port",
        gt=0,
        lt=65536
    )

    # =========================================================================
    # Palette Settings
    # =========================================================================

    custom_colors: Tuple[CustomColorSpec, ...] = Field(
        default=DEFAULT_CUSTOM_COLORS,
        description="Accent colors appended after the base scheme, in order (JSON list)"
    )
    default_theme_type: ThemeType = Field(
        default=ThemeType.LIGHT,
        description="Theme type used when the request omits theme_type"
    )
    classify_error_status: bool = Field(
        default=False,
        description="Answer invalid input with 400 instead of 500"
    )

    # =========================================================================
    # Monitoring and Observability
    # =========================================================================

    metrics_enabled: bool = Field(
        default=True,
        description="Enable Prometheus metrics and the /metrics endpoint"
    )

    tracing_enabled: bool = Field(
        default=True,
        description="Enable OpenTelemetry tracing"
    )
    tracing_exporter: str = Field(
        default="none",
        description="Span exporter: none|console|otlp"
    )
    tracing_otlp_endpoint: Optional[str] = Field(
        default=None,
        description="OTLP/HTTP traces endpoint (e.g. http://collector:4318/v1/traces)"
    )
    tracing_sample_rate: float = Field(
        default=1.0,
        description="Trace sampling rate (0.0-1.0, where 1.0 = 100%)",
        ge=0.0,
        le=1.0
    )

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG|INFO|WARNING|ERROR|CRITICAL"
    )
    log_format: str = Field(
        default="json",
        description="Log format: json|text"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got: {v}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got: {v}")
        return v_lower

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        allowed = ["json", "text"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got: {v}")
        return v_lower

    @field_validator("tracing_exporter")
    @classmethod
    def validate_tracing_exporter(cls, v: str) -> str:
        """Validate the span exporter name."""
        v_lower = v.lower()
        if v_lower not in EXPORTERS:
            raise ValueError(f"tracing_exporter must be one of {list(EXPORTERS)}, got: {v}")
        return v_lower

    @field_validator("custom_colors")
    @classmethod
    def validate_custom_color_names(cls, v: Tuple[CustomColorSpec, ...]) -> Tuple[CustomColorSpec, ...]:
        """Accent names must be unique."""
        names = [color.name for color in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"custom_colors names must be unique, duplicated: {duplicates}")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def json_logs(self) -> bool:
        """Whether logs should be rendered as JSON."""
        return self.log_format == "json"

    # =========================================================================
    # Model Config
    # =========================================================================

    model_config = SettingsConfigDict(
        env_prefix="PALETTE_API_",  # Environment variable prefix
        env_file=".env",             # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",              # Ignore extra environment variables
        validate_default=True,       # Validate default values
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once and shared
    across the application.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


def clear_settings_cache():
    """
    Clear the settings cache.

    Useful for testing when you need to reload settings with different
    environment variables.
    """
    get_settings.cache_clear()
