"""Shared image factories for photosheet tests."""

from collections.abc import Callable

import numpy as np
import pytest
from PIL import Image


def make_solid(width: int, height: int, color: tuple[int, int, int, int] = (200, 30, 30, 255)) -> Image.Image:
    """Build an opaque single-colour RGBA image."""
    return Image.new("RGBA", (width, height), color)


def make_gradient(width: int, height: int) -> Image.Image:
    """Build an opaque RGBA image whose pixels encode their own coordinates."""
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.stack(
        [xs % 256, ys % 256, (xs // 256 + ys // 256 * 16) % 256, np.full_like(xs, 255)],
        axis=-1,
    ).astype(np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def solid_image() -> Callable[..., Image.Image]:
    """Factory fixture for single-colour images."""
    return make_solid


@pytest.fixture
def gradient_image() -> Callable[[int, int], Image.Image]:
    """Factory fixture for coordinate-encoded images."""
    return make_gradient
