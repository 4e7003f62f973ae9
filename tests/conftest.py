"""
Shared fixtures for the palette service tests.

Provides a deterministic fake color theme provider so unit and contract
tests exercise request handling and serialization without depending on the
Material color math.
"""

from typing import List, Sequence

import pytest
from fastapi.testclient import TestClient

from api.src.config import Settings
from api.src.errors import ProviderError
from api.src.main import create_app
from api.src.models.palette import (
    CustomColorGroup,
    CustomColorRoles,
    CustomColorSpec,
    GeneratedTheme,
)

FAKE_ROLES = ["primary", "onPrimary", "surface", "onSurface", "error"]


class FakeThemeProvider:
    """
    Produces predictable themes.

    Light role ``i`` is ``0xFF000000 | i``, dark role ``i`` is
    ``0xFF100000 | i``. Accent ``n`` gets ``0xFF0n0001``..``0xFF0n0004`` for
    light and ``0xFF1n0001``..``0xFF1n0004`` for dark.
    """

    def __init__(self):
        self.calls: List[tuple] = []

    def build(self, source: str, custom_colors: Sequence[CustomColorSpec]) -> GeneratedTheme:
        self.calls.append((source, tuple(custom_colors)))
        if source.lower() == "dead00":
            raise ProviderError("fake provider refused dead00")
        if source.lower() == "0bad00":
            raise RuntimeError("fake provider crashed")

        def roles(base: int) -> CustomColorRoles:
            return CustomColorRoles(
                color=base | 1,
                color_container=base | 2,
                on_color=base | 3,
                on_color_container=base | 4,
            )

        return GeneratedTheme(
            light={role: 0xFF000000 | i for i, role in enumerate(FAKE_ROLES)},
            dark={role: 0xFF100000 | i for i, role in enumerate(FAKE_ROLES)},
            custom_colors=[
                CustomColorGroup(
                    name=color.name,
                    light=roles(0xFF000000 | (n << 16)),
                    dark=roles(0xFF100000 | (n << 16)),
                )
                for n, color in enumerate(custom_colors)
            ],
        )

    def to_hex(self, argb: int) -> str:
        return f"{argb & 0xFFFFFF:06x}"


@pytest.fixture
def fake_provider() -> FakeThemeProvider:
    """Fresh fake provider per test."""
    return FakeThemeProvider()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment, tracing off."""
    return Settings(_env_file=None, tracing_enabled=False, log_format="text")


@pytest.fixture
def client(settings, fake_provider) -> TestClient:
    """Test client backed by the fake provider."""
    return TestClient(create_app(settings=settings, provider=fake_provider))
