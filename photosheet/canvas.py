"""Canvas allocation and the shared blitting primitive."""

import math

from PIL import Image

from photosheet.config import WHITE


def new_canvas(width: int, height: int, color: tuple[int, int, int, int] = WHITE) -> Image.Image:
    """Allocate an RGBA canvas filled with ``color`` (opaque white by default)."""
    return Image.new("RGBA", (width, height), color)


def round_half_up(value: float) -> int:
    """Round to the nearest integer; .5 goes up."""
    return math.floor(value + 0.5)


def blit(canvas: Image.Image, image: Image.Image, left: int, top: int) -> None:
    """Composite ``image`` onto ``canvas`` in place with its top-left at (left, top).

    Anything falling outside the canvas is silently clipped. Transparent
    source pixels leave the canvas untouched.
    """
    src_left = max(0, -left)
    src_top = max(0, -top)
    src_right = min(image.width, canvas.width - left)
    src_bottom = min(image.height, canvas.height - top)
    if src_right <= src_left or src_bottom <= src_top:
        return

    visible = image.crop((src_left, src_top, src_right, src_bottom))
    if visible.mode != "RGBA":
        visible = visible.convert("RGBA")
    canvas.alpha_composite(visible, dest=(left + src_left, top + src_top))
