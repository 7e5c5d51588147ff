"""Shared fixtures for the fretscale test suite."""

import pytest

from fretscale.config import RenderSettings, Settings
from fretscale.fretboard_engine.position_table import Fretboard, build_fretboard


@pytest.fixture(scope="session")
def fretboard() -> Fretboard:
    return build_fretboard()


@pytest.fixture
def small_render() -> RenderSettings:
    """Tiny diagrams with Pillow's bundled font, fast enough for unit tests."""
    return RenderSettings(
        square_length=40,
        font_regular=None,
        font_size_regular=12,
        font_light=None,
        font_size_light=10,
        font_size_title=8,
    )


@pytest.fixture
def small_settings(small_render: RenderSettings) -> Settings:
    return Settings(render=small_render)
