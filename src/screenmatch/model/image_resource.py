"""ImageResource - immutable template source.

Wraps an encoded image buffer (PNG, JPEG, BMP, ...) together with the path
it was read from, if any. Pixels are decoded lazily with Pillow, once per
resource, and handed to the matcher as a read-only BGR array.
"""

from __future__ import annotations

import asyncio
import io
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

import cv2
import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ..logging import get_logger
from ..vision_exceptions import DecodeError, ImageLoadError

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageResource:
    """Encoded image bytes used as a template.

    Example:
        >>> button = ImageResource.load_sync("assets/button.png")
        >>> button.width, button.height
        (120, 32)
    """

    data: bytes = field(repr=False)
    """Encoded image buffer."""

    path: Path | None = None
    """File the buffer was read from, None for in-memory buffers."""

    @classmethod
    async def load(cls, path: str | Path) -> ImageResource:
        """Read a template file without blocking the event loop.

        Raises:
            ImageLoadError: If the file cannot be read
        """
        return await asyncio.to_thread(cls.load_sync, path)

    @classmethod
    def load_sync(cls, path: str | Path) -> ImageResource:
        """Read a template file.

        Args:
            path: Path to the image file

        Returns:
            ImageResource holding the file bytes

        Raises:
            ImageLoadError: If the file cannot be read
        """
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise ImageLoadError(str(file_path), e.strerror or str(e)) from e

        logger.debug("image_loaded", path=str(file_path), size=len(data))
        return cls(data=data, path=file_path)

    @classmethod
    def from_buffer(cls, data: bytes | bytearray | memoryview) -> ImageResource:
        """Wrap an in-memory encoded buffer."""
        return cls(data=bytes(data))

    @property
    def name(self) -> str | None:
        """File stem of the origin path, if any."""
        return self.path.stem if self.path is not None else None

    @cached_property
    def pixels(self) -> np.ndarray:
        """Decoded BGR pixels (read-only, decoded on first access)."""
        return self.decode()

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def decode(self) -> np.ndarray:
        """Decode the buffer into a BGR uint8 array.

        Returns:
            Array of shape (height, width, 3)

        Raises:
            DecodeError: If the bytes are not a supported, intact image
        """
        image_path = str(self.path) if self.path is not None else None
        if not self.data:
            raise DecodeError("buffer is empty", image_path=image_path)

        try:
            with PILImage.open(io.BytesIO(self.data)) as pil_image:
                rgb = pil_image.convert("RGB")
        except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as e:
            raise DecodeError(str(e), image_path=image_path) from e

        bgr = cv2.cvtColor(np.asarray(rgb), cv2.COLOR_RGB2BGR)
        bgr.setflags(write=False)
        return bgr
