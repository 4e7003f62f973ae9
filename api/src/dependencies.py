"""
FastAPI dependency injection for settings and services.

Everything here is created once by the application factory and stored on
``app.state``; dependencies only read it back.
"""

from fastapi import Request

from api.src.config import Settings
from api.src.services.palette_service import PaletteService


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_palette_service(request: Request) -> PaletteService:
    """Palette service shared by all requests."""
    return request.app.state.palette_service

