"""Pytest configuration and fixtures."""

import os

import pytest

# Keep test output free of engine logs
os.environ.setdefault("SCREENMATCH_DISABLE_LOGGING", "1")

from screenmatch.config import reset_settings  # noqa: E402
from screenmatch.find import FindExecutor  # noqa: E402
from screenmatch.mock import StaticCaptureProvider  # noqa: E402
from screenmatch.model import ImageResource  # noqa: E402
from imaging import encode_png, noise  # noqa: E402

SCREEN_WIDTH = 200
SCREEN_HEIGHT = 150


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings so environment changes made by a test do not leak."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def screen():
    """Create a textured 200x150 BGR screen."""
    return noise(SCREEN_WIDTH, SCREEN_HEIGHT, seed=1234)


@pytest.fixture
def provider(screen):
    """Provide an in-memory capture provider serving ``screen``."""
    return StaticCaptureProvider(screen)


@pytest.fixture
def executor(provider):
    """Provide a FindExecutor bound to the in-memory provider."""
    return FindExecutor(provider)


@pytest.fixture
def crop_template(screen):
    """Factory building a template from a rectangle of ``screen``."""

    def _crop(x: int, y: int, width: int, height: int) -> ImageResource:
        return ImageResource.from_buffer(encode_png(screen[y : y + height, x : x + width]))

    return _crop


@pytest.fixture
def foreign_template():
    """Template that occurs nowhere on ``screen``."""
    return ImageResource.from_buffer(encode_png(noise(40, 30, seed=99)))
