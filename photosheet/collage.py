"""Greedy row-packing auto-layout for free-form collages.

This module handles:
- Scaling each image by its collage scale factor (never below 100px a side)
- Packing images left to right in input order, wrapping to a new row when
  the next image would cross the right edge of the canvas
- Rendering the packed placements onto a white A4 canvas
"""

import logging
from collections.abc import Sequence
from typing import TypedDict

from PIL import Image

from photosheet.canvas import blit, new_canvas, round_half_up
from photosheet.config import MIN_SCALED_DIMENSION_PX
from photosheet.errors import EmptyInputError
from photosheet.recipes import COLLAGE_A4, LayoutRecipe

logger = logging.getLogger(__name__)


class CollagePlacement(TypedDict):
    """Where one collage image lands on the canvas."""

    index: int  # position in the input sequence
    x: int
    y: int
    width: int
    height: int


def scaled_size(width: int, height: int, scale: float) -> tuple[int, int]:
    """Apply a scale factor, keeping each side at least MIN_SCALED_DIMENSION_PX."""
    return (
        max(MIN_SCALED_DIMENSION_PX, round_half_up(width * scale)),
        max(MIN_SCALED_DIMENSION_PX, round_half_up(height * scale)),
    )


def plan_collage(
    sizes: Sequence[tuple[int, int]],
    scales: Sequence[float],
    canvas_width: int = COLLAGE_A4.canvas_width,
    margin: int = COLLAGE_A4.margin,
) -> list[CollagePlacement]:
    """Compute collage placements with greedy row packing.

    Args:
        sizes: Native (width, height) of each image, in placement order
        scales: Scale factor per image
        canvas_width: Width used for the row-wrap decision
        margin: Page margin and gap between neighbouring images (px)

    Returns:
        One CollagePlacement per image, in input order

    Raises:
        ValueError: If sizes and scales differ in length

    Note:
        There is no vertical overflow guard: with enough (or large enough)
        images, placements run past the bottom of the canvas.
    """
    if len(sizes) != len(scales):
        raise ValueError(f"Got {len(sizes)} images but {len(scales)} scale factors")

    x = margin
    y = margin
    row_height = 0
    placements: list[CollagePlacement] = []

    for i, ((width, height), scale) in enumerate(zip(sizes, scales)):
        scaled_width, scaled_height = scaled_size(width, height, scale)
        row_empty = row_height == 0
        gap = 0 if row_empty else margin

        if not row_empty and x + gap + scaled_width > canvas_width:
            y += row_height + margin
            x = margin
            row_height = 0
            gap = 0

        x += gap
        placements.append(
            CollagePlacement(index=i, x=x, y=y, width=scaled_width, height=scaled_height)
        )
        x += scaled_width
        row_height = max(row_height, scaled_height)

    return placements


def layout_collage(
    images: Sequence[Image.Image],
    scales: Sequence[float],
    recipe: LayoutRecipe = COLLAGE_A4,
) -> Image.Image:
    """Render a collage of ``images`` scaled by ``scales`` onto the recipe canvas.

    Raises:
        EmptyInputError: If no images are given
        ValueError: If images and scales differ in length
    """
    if not images:
        raise EmptyInputError(f"{recipe.name} needs at least one source image")

    placements = plan_collage(
        [img.size for img in images],
        scales,
        canvas_width=recipe.canvas_width,
        margin=recipe.margin,
    )

    canvas = new_canvas(recipe.canvas_width, recipe.canvas_height)
    for placement in placements:
        source = images[placement["index"]].convert("RGBA")
        if source.size != (placement["width"], placement["height"]):
            source = source.resize(
                (placement["width"], placement["height"]), Image.Resampling.LANCZOS
            )
        blit(canvas, source, placement["x"], placement["y"])

    overflow = sum(1 for p in placements if p["y"] + p["height"] > recipe.canvas_height)
    if overflow:
        logger.debug(f"{overflow} collage images extend past the canvas bottom and are clipped")
    return canvas
