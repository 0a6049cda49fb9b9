"""Recipe-driven composition of passport and ID document sheets.

This module handles:
- Validating the source images against a recipe's slots
- Rotating each source by the recipe's rotation
- Centering sources at native size inside each cell and blitting them
"""

import logging
from collections.abc import Sequence

from PIL import Image

from photosheet.canvas import blit, new_canvas, round_half_up
from photosheet.collage import layout_collage
from photosheet.errors import EmptyInputError
from photosheet.geometry import centered_rect, rotate
from photosheet.recipes import LayoutRecipe

logger = logging.getLogger(__name__)


def compose(recipe: LayoutRecipe, source_images: Sequence[Image.Image]) -> Image.Image:
    """Build the output sheet for a recipe.

    Args:
        recipe: Layout policy to apply
        source_images: One image per recipe slot, in slot order (front, back, ...)

    Returns:
        New RGBA canvas of recipe.canvas_width x recipe.canvas_height

    Raises:
        EmptyInputError: If no images, or fewer images than the recipe has slots
        ValueError: If more images than the recipe has slots

    Note:
        - Cell i receives slot ``i % image_slots``; single-slot recipes repeat
          the same image in every cell
        - Sources are rotated by recipe.rotation_degrees and centered in their
          cell at native size (no rescaling); the cropper is expected to have
          produced the right pixel dimensions
        - Auto-layout recipes (collage) delegate to layout_collage at scale 1.0
    """
    if not source_images:
        raise EmptyInputError(f"{recipe.name} needs at least one source image")

    if recipe.auto_layout:
        return layout_collage(source_images, [1.0] * len(source_images), recipe=recipe)

    if len(source_images) < recipe.image_slots:
        raise EmptyInputError(
            f"{recipe.name} needs {recipe.image_slots} source images, got {len(source_images)}"
        )
    if len(source_images) > recipe.image_slots:
        raise ValueError(
            f"{recipe.name} takes {recipe.image_slots} source images, got {len(source_images)}"
        )

    prepared = [rotate(img.convert("RGBA"), recipe.rotation_degrees) for img in source_images]

    canvas = new_canvas(recipe.canvas_width, recipe.canvas_height)
    for i, cell in enumerate(recipe.cell_positions):
        image = prepared[i % recipe.image_slots]
        target = centered_rect(cell, image.width, image.height)
        blit(canvas, image, round_half_up(target.left), round_half_up(target.top))

    logger.debug(
        f"Composed {recipe.name}: {len(recipe.cell_positions)} cells "
        f"on {recipe.canvas_width}x{recipe.canvas_height}"
    )
    return canvas
