"""Tests for the in-memory capture provider."""

import numpy as np
import pytest

from screenmatch.mock import StaticCaptureProvider
from screenmatch.model import ScreenRegion


def test_serves_copy_of_frame(screen):
    original = screen.copy()
    provider = StaticCaptureProvider(screen)
    screen[0, 0] = 255 - screen[0, 0]

    assert np.array_equal(provider.frame, original)


def test_region_capture_crops(screen, provider):
    capture = provider.capture(ScreenRegion(5, 6, 7, 8))

    assert np.array_equal(capture.to_bgr(), screen[6:14, 5:12])
    assert provider.captured_regions == [ScreenRegion(5, 6, 7, 8)]
    assert provider.capture_count == 1


def test_set_frame(provider):
    provider.set_frame(np.zeros((20, 30), dtype=np.uint8))

    assert provider.get_screen_size() == (30, 20)
    assert provider.capture().to_bgr().shape == (20, 30, 3)


@pytest.mark.parametrize(
    "frame",
    [np.zeros((4, 4, 3), dtype=np.float32), np.zeros((2, 2, 2, 2), dtype=np.uint8)],
)
def test_rejects_unusable_frames(frame):
    with pytest.raises(ValueError):
        StaticCaptureProvider(frame)
