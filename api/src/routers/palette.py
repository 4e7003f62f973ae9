"""
Palette router.

Provides the public endpoints:
- GET /           liveness greeting
- GET /getPalette concatenated hex palette for a base color
- GET /health     JSON health status for container probes

Failures are raised as ``PaletteError`` and rendered by the application's
exception handlers.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from api.src.config import Settings
from api.src.dependencies import get_app_settings, get_palette_service
from api.src.models.palette import PaletteRequest
from api.src.services.palette_service import PaletteService

GREETING = "Hello, world!"

router = APIRouter(tags=["Palette"])


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def hello_world() -> str:
    return GREETING


@router.get(
    "/getPalette",
    response_class=PlainTextResponse,
    summary="Generate Palette",
    description="""
    Generate a Material color palette from a base color.

    **Query Parameters:**
    - base_color: 6 (RGB) or 8 (ARGB) hex digits, optional leading `#`
    - theme_type: `Light` or `Dark` (case-sensitive, defaults to `Light`)

    **Success Response (200):** every scheme role of the selected mode,
    followed by color, color-container, on-color and on-color-container of
    each custom accent, as six hex digits each with no separators.

    **Error Response (500):** `Something went wrong: <message>`
    """,
)
def get_palette(
    base_color: Optional[str] = Query(None, description="Source color as hex"),
    theme_type: Optional[str] = Query(None, description="Light or Dark"),
    settings: Settings = Depends(get_app_settings),
    palette_service: PaletteService = Depends(get_palette_service),
) -> str:
    """
    Generate the palette string.

    Declared sync so FastAPI runs the CPU-bound generation in its threadpool.
    """
    request = PaletteRequest.from_query(
        base_color,
        theme_type,
        default_theme_type=settings.default_theme_type,
    )
    return palette_service.generate(request)


@router.get("/health", tags=["Health"])
async def health_check(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns basic health status. The service has no dependencies to check.
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }
