"""Foreground masking and border strokes.

This module handles:
- Thresholding a segmentation confidence buffer into a binary alpha mask
- Applying the mask to a source image (destination-in compositing)
- Drawing a rectangular border stroke around an image
"""

import numpy as np
from numpy.typing import ArrayLike
from PIL import Image, ImageDraw

from photosheet.config import MASK_THRESHOLD
from photosheet.errors import DimensionMismatchError


def confidence_to_mask(confidence: ArrayLike, threshold: float = MASK_THRESHOLD) -> Image.Image:
    """Convert a per-pixel confidence buffer into a binary (0/255) mask.

    Args:
        confidence: 2D buffer shaped (height, width)
        threshold: Pixels strictly above this value are foreground

    Returns:
        Mask image in mode "L"
    """
    buffer = np.asarray(confidence, dtype=np.float32)
    if buffer.ndim != 2:
        raise DimensionMismatchError(f"Confidence buffer must be 2D, got shape {buffer.shape}")
    mask = np.where(buffer > threshold, 255, 0).astype(np.uint8)
    return Image.fromarray(mask)


def apply_foreground_mask(
    image: Image.Image,
    confidence: ArrayLike,
    threshold: float = MASK_THRESHOLD,
) -> Image.Image:
    """Keep foreground pixels of ``image`` and make everything else transparent.

    Args:
        image: Source image (left untouched)
        confidence: Foreground likelihood per pixel, shaped (height, width)
        threshold: Pixels strictly above this value are kept

    Returns:
        New RGBA image; background pixels are (0, 0, 0, 0)

    Raises:
        DimensionMismatchError: If the buffer shape disagrees with the image size
    """
    buffer = np.asarray(confidence, dtype=np.float32)
    if buffer.shape != (image.height, image.width):
        raise DimensionMismatchError(
            f"Confidence buffer shape {buffer.shape} does not match image "
            f"{image.width}x{image.height}"
        )

    keep = np.asarray(confidence_to_mask(buffer, threshold)) > 0
    pixels = np.array(image.convert("RGBA"))
    pixels[~keep] = 0
    return Image.fromarray(pixels)


def add_border(
    image: Image.Image,
    stroke_width_px: int,
    color_rgba: tuple[int, int, int, int],
) -> Image.Image:
    """Draw a rectangular stroke along the edges of a copy of ``image``.

    The stroke is centered on a rectangle inset by half its width, so it
    covers exactly the outermost ``stroke_width_px`` pixels on each side.

    Raises:
        ValueError: If stroke_width_px is negative
    """
    if stroke_width_px < 0:
        raise ValueError(f"Stroke width must be non-negative, got {stroke_width_px}")

    bordered = image.convert("RGBA")
    if stroke_width_px == 0:
        return bordered

    draw = ImageDraw.Draw(bordered)
    draw.rectangle(
        (0, 0, bordered.width - 1, bordered.height - 1),
        outline=tuple(color_rgba),
        width=stroke_width_px,
    )
    return bordered
