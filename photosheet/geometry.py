"""Geometry primitives and pure placement helpers.

This module defines:
- Pydantic models for canvas rectangles and crop constraints
- Right-angle rotation of source images
- Helpers for centering, bounds checks and overlap (IoU) detection
"""

import math

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, model_validator

from photosheet.errors import InvalidAngleError


class Rect(BaseModel):
    """Rectangle in canvas pixel space (top-left origin)."""

    model_config = ConfigDict(frozen=True)

    left: float = Field(description="Left edge (px)")
    top: float = Field(description="Top edge (px)")
    right: float = Field(description="Right edge (px)")
    bottom: float = Field(description="Bottom edge (px)")

    @model_validator(mode="after")
    def check_extent(self) -> "Rect":
        """Reject rectangles whose right/bottom edge precedes left/top."""
        if self.right < self.left or self.bottom < self.top:
            raise ValueError(
                f"Rect must have non-negative size, got "
                f"({self.left}, {self.top}, {self.right}, {self.bottom})"
            )
        return self

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


class CropSpec(BaseModel):
    """Constraints handed to the external cropper for one source slot."""

    model_config = ConfigDict(frozen=True)

    aspect_width: float = Field(gt=0, description="Target aspect ratio, horizontal term")
    aspect_height: float = Field(gt=0, description="Target aspect ratio, vertical term")
    max_width: int = Field(gt=0, description="Maximum cropped width in pixels")
    max_height: int = Field(gt=0, description="Maximum cropped height in pixels")


def crop_rect(
    target_aspect_width: float,
    target_aspect_height: float,
    max_result_width: int,
    max_result_height: int,
) -> CropSpec:
    """Build the crop constraints for the external cropping flow.

    Args:
        target_aspect_width: Horizontal term of the aspect ratio (e.g. 3.5)
        target_aspect_height: Vertical term of the aspect ratio (e.g. 4.5)
        max_result_width: Largest width the cropper may return (px)
        max_result_height: Largest height the cropper may return (px)

    Returns:
        CropSpec describing the requested crop

    Raises:
        pydantic.ValidationError: If any term is not positive
    """
    return CropSpec(
        aspect_width=target_aspect_width,
        aspect_height=target_aspect_height,
        max_width=max_result_width,
        max_height=max_result_height,
    )


# Clockwise quarter turns -> PIL transpose (PIL rotates counter-clockwise)
_QUARTER_TURNS = {
    1: Image.Transpose.ROTATE_270,
    2: Image.Transpose.ROTATE_180,
    3: Image.Transpose.ROTATE_90,
}


def rotate(image: Image.Image, angle_degrees: float) -> Image.Image:
    """Rotate an image clockwise by a multiple of 90 degrees.

    Args:
        image: Source image (left untouched)
        angle_degrees: Clockwise rotation; negative values turn counter-clockwise

    Returns:
        New image; width and height are swapped for 90/270 degree turns

    Raises:
        InvalidAngleError: If the angle is not a finite multiple of 90
    """
    if not math.isfinite(angle_degrees) or angle_degrees % 90 != 0:
        raise InvalidAngleError(f"Unsupported rotation angle: {angle_degrees}")

    turns = int(angle_degrees // 90) % 4
    if turns == 0:
        return image.copy()
    return image.transpose(_QUARTER_TURNS[turns])


def centered_rect(cell: Rect, width: float, height: float) -> Rect:
    """Return a width x height rectangle centered inside ``cell``.

    The result may extend past the cell when the content is larger than it.
    """
    left = cell.left + (cell.width - width) / 2
    top = cell.top + (cell.height - height) / 2
    return Rect(left=left, top=top, right=left + width, bottom=top + height)


def check_rect_within_canvas(rect: Rect, canvas_width: float, canvas_height: float) -> bool:
    """Check if a rectangle lies fully inside a canvas of the given size."""
    return (
        rect.left >= 0
        and rect.top >= 0
        and rect.right <= canvas_width
        and rect.bottom <= canvas_height
    )


def calculate_iou(rect1: Rect, rect2: Rect) -> float:
    """Calculate Intersection over Union (IoU) between two rectangles.

    Returns:
        IoU score between 0 (disjoint or merely touching) and 1 (identical)
    """
    left = max(rect1.left, rect2.left)
    top = max(rect1.top, rect2.top)
    right = min(rect1.right, rect2.right)
    bottom = min(rect1.bottom, rect2.bottom)

    if right <= left or bottom <= top:
        return 0.0

    intersection_area = (right - left) * (bottom - top)
    union_area = rect1.width * rect1.height + rect2.width * rect2.height - intersection_area

    return intersection_area / union_area if union_area > 0 else 0.0
