"""Scale space generation for multi-scale template search.

Expands a template into the resized variants that are worth matching
against a given haystack.
"""

from __future__ import annotations

from dataclasses import dataclass

import cv2
import numpy as np

from ..model.match_config import MatchConfig

# Scales this close to 1.0 reuse the original pixels
_UNIT_SCALE_TOLERANCE = 1e-3


@dataclass(frozen=True)
class ScaledTemplate:
    """A template resized by ``scale``, ready for matching."""

    scale: float
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


def scaled_size(width: int, height: int, scale: float) -> tuple[int, int]:
    """Compute template dimensions at ``scale``.

    Dimensions are rounded half-up and never drop below 1x1.
    """
    return (max(1, int(width * scale + 0.5)), max(1, int(height * scale + 0.5)))


def generate_scales(
    template: np.ndarray,
    config: MatchConfig,
    haystack_size: tuple[int, int],
) -> list[ScaledTemplate]:
    """Build the scaled templates to evaluate.

    Args:
        template: Template pixels (BGR)
        config: Normalized match configuration
        haystack_size: (width, height) of the image being searched

    Returns:
        One ScaledTemplate per usable scale, in ``scale_steps`` order.
        Scales whose template would not fit inside the haystack are skipped.
    """
    template_height, template_width = template.shape[:2]
    haystack_width, haystack_height = haystack_size

    scaled: list[ScaledTemplate] = []
    for scale in config.effective_scales:
        width, height = scaled_size(template_width, template_height, scale)
        if width > haystack_width or height > haystack_height:
            continue

        if abs(scale - 1.0) < _UNIT_SCALE_TOLERANCE or (
            width == template_width and height == template_height
        ):
            pixels = template
        else:
            interpolation = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
            pixels = cv2.resize(template, (width, height), interpolation=interpolation)

        scaled.append(ScaledTemplate(scale=scale, pixels=pixels))

    return scaled
