"""Image helpers shared by the test modules."""

import cv2
import numpy as np


def encode_png(pixels: np.ndarray) -> bytes:
    """Encode a BGR array as PNG bytes."""
    ok, buffer = cv2.imencode(".png", pixels)
    assert ok
    return buffer.tobytes()


def noise(width: int, height: int, seed: int) -> np.ndarray:
    """Uniform random BGR noise; no two windows of it look alike."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


def gradient(width: int, height: int, seed: int) -> np.ndarray:
    """Horizontal ramp with a random offset per row.

    Horizontally shifted windows differ from each other by a constant, so
    mean-normalized metrics score them as perfect matches.
    """
    assert width + 56 <= 256
    rng = np.random.default_rng(seed)
    offsets = rng.integers(0, 56, size=(height, 1))
    gray = (np.arange(width)[np.newaxis, :] + offsets).astype(np.uint8)
    return np.dstack([gray, gray, gray])
