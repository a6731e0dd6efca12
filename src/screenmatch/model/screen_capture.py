"""ScreenCapture - raw pixels handed over by a capture provider."""

from __future__ import annotations

from dataclasses import dataclass, field

import cv2
import numpy as np

from ..vision_exceptions import DecodeError

BYTES_PER_PIXEL = 4


@dataclass(frozen=True)
class ScreenCapture:
    """Uncompressed capture of the screen or a part of it.

    ``pixel_bytes`` holds tightly packed BGRA rows, the layout produced
    by mss, so backends can pass their buffer through unchanged.
    """

    width: int
    height: int
    pixel_bytes: bytes = field(repr=False)

    @classmethod
    def from_bgr(cls, image: np.ndarray) -> ScreenCapture:
        """Build a capture from a BGR (or grayscale) uint8 array."""
        if image.ndim == 2:
            bgra = cv2.cvtColor(image, cv2.COLOR_GRAY2BGRA)
        else:
            bgra = cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)
        height, width = bgra.shape[:2]
        return cls(width=int(width), height=int(height), pixel_bytes=bgra.tobytes())

    def to_bgr(self) -> np.ndarray:
        """Convert the BGRA buffer to a BGR array of shape (height, width, 3).

        Raises:
            DecodeError: If the buffer size does not match the dimensions
        """
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.pixel_bytes) != expected:
            raise DecodeError(
                f"capture buffer holds {len(self.pixel_bytes)} bytes, "
                f"expected {expected} for {self.width}x{self.height} BGRA"
            )
        bgra = np.frombuffer(self.pixel_bytes, dtype=np.uint8).reshape(
            self.height, self.width, BYTES_PER_PIXEL
        )
        return cv2.cvtColor(bgra, cv2.COLOR_BGRA2BGR)

    def encode(self, ext: str = ".png") -> bytes:
        """Encode the capture so it can be used as a template.

        Args:
            ext: Image format extension understood by OpenCV

        Returns:
            Encoded image bytes
        """
        ok, buffer = cv2.imencode(ext, self.to_bgr())
        if not ok:
            raise DecodeError(f"OpenCV could not encode capture as '{ext}'")
        return buffer.tobytes()
