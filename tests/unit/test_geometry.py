"""Unit tests for photosheet/geometry.py."""

import math

import pytest
from pydantic import ValidationError

from photosheet.errors import InvalidAngleError
from photosheet.geometry import (
    CropSpec,
    Rect,
    calculate_iou,
    centered_rect,
    check_rect_within_canvas,
    crop_rect,
    rotate,
)


class TestRect:
    """Tests for Rect model."""

    def test_width_and_height(self) -> None:
        """Test derived width/height."""
        rect = Rect(left=10, top=20, right=110, bottom=70)
        assert rect.width == 100
        assert rect.height == 50

    def test_zero_size_allowed(self) -> None:
        """Test that a degenerate rect is valid."""
        rect = Rect(left=5, top=5, right=5, bottom=5)
        assert rect.width == 0
        assert rect.height == 0

    def test_negative_width_raises(self) -> None:
        """Test that right < left raises ValidationError."""
        with pytest.raises(ValidationError, match="non-negative size"):
            Rect(left=10, top=0, right=5, bottom=10)

    def test_negative_height_raises(self) -> None:
        """Test that bottom < top raises ValidationError."""
        with pytest.raises(ValidationError, match="non-negative size"):
            Rect(left=0, top=10, right=10, bottom=5)

    def test_frozen(self) -> None:
        """Test that rects cannot be modified after creation."""
        rect = Rect(left=0, top=0, right=1, bottom=1)
        with pytest.raises(ValidationError):
            rect.left = 3  # type: ignore[misc]


class TestCropRect:
    """Tests for crop_rect."""

    def test_returns_constraints(self) -> None:
        """Test that the crop constraints carry the requested ratio and size."""
        spec = crop_rect(3.5, 4.5, 414, 530)
        assert spec == CropSpec(aspect_width=3.5, aspect_height=4.5, max_width=414, max_height=530)

    def test_zero_aspect_raises(self) -> None:
        """Test that a zero aspect term is rejected."""
        with pytest.raises(ValidationError, match="greater than 0"):
            crop_rect(0, 4.5, 414, 530)

    def test_zero_size_raises(self) -> None:
        """Test that a zero maximum size is rejected."""
        with pytest.raises(ValidationError, match="greater than 0"):
            crop_rect(1, 1, 0, 100)


class TestRotate:
    """Tests for rotate."""

    def test_quarter_turn_swaps_dimensions(self, gradient_image) -> None:
        """Test that 90 degrees swaps width and height."""
        img = gradient_image(40, 30)
        rotated = rotate(img, 90)
        assert rotated.size == (30, 40)

    def test_quarter_turn_is_clockwise(self, gradient_image) -> None:
        """Test that the top-left pixel ends up top-right."""
        img = gradient_image(40, 30)
        rotated = rotate(img, 90)
        assert rotated.getpixel((rotated.width - 1, 0)) == img.getpixel((0, 0))

    def test_half_turn_keeps_dimensions(self, gradient_image) -> None:
        """Test that 180 degrees keeps the size and flips corners."""
        img = gradient_image(40, 30)
        rotated = rotate(img, 180)
        assert rotated.size == (40, 30)
        assert rotated.getpixel((39, 29)) == img.getpixel((0, 0))

    def test_negative_quarter_turn(self, gradient_image) -> None:
        """Test that -90 equals 270."""
        img = gradient_image(40, 30)
        assert rotate(img, -90).tobytes() == rotate(img, 270).tobytes()

    def test_full_turn_is_identity(self, gradient_image) -> None:
        """Test that 360 degrees returns an identical copy."""
        img = gradient_image(40, 30)
        rotated = rotate(img, 360)
        assert rotated is not img
        assert rotated.tobytes() == img.tobytes()

    def test_input_not_modified(self, gradient_image) -> None:
        """Test that rotation leaves the source untouched."""
        img = gradient_image(40, 30)
        before = img.tobytes()
        rotate(img, 90)
        assert img.tobytes() == before

    @pytest.mark.parametrize("angle", [45, 1, 89.5, math.nan, math.inf])
    def test_unsupported_angle_raises(self, gradient_image, angle: float) -> None:
        """Test that non right angles raise InvalidAngleError."""
        with pytest.raises(InvalidAngleError, match="Unsupported rotation angle"):
            rotate(gradient_image(10, 10), angle)


class TestPlacementHelpers:
    """Tests for centering, bounds and overlap helpers."""

    def test_centered_rect_smaller_content(self) -> None:
        """Test centering content smaller than the cell."""
        cell = Rect(left=100, top=200, right=300, bottom=400)
        rect = centered_rect(cell, 100, 50)
        assert (rect.left, rect.top, rect.right, rect.bottom) == (150, 275, 250, 325)

    def test_centered_rect_larger_content(self) -> None:
        """Test that larger content spills evenly past the cell."""
        cell = Rect(left=80, top=50, right=550, bottom=440)
        rect = centered_rect(cell, 530, 414)
        assert rect.left == pytest.approx(50)
        assert rect.top == pytest.approx(38)

    def test_within_canvas(self) -> None:
        """Test bounds checks on and past the canvas edge."""
        assert check_rect_within_canvas(Rect(left=0, top=0, right=100, bottom=100), 100, 100)
        assert not check_rect_within_canvas(Rect(left=0, top=0, right=101, bottom=100), 100, 100)
        assert not check_rect_within_canvas(Rect(left=-1, top=0, right=10, bottom=10), 100, 100)

    def test_iou_identical(self) -> None:
        """Test that identical rects have IoU 1."""
        rect = Rect(left=0, top=0, right=10, bottom=10)
        assert calculate_iou(rect, rect) == pytest.approx(1.0)

    def test_iou_touching_edges(self) -> None:
        """Test that rects sharing an edge do not overlap."""
        a = Rect(left=0, top=0, right=10, bottom=10)
        b = Rect(left=10, top=0, right=20, bottom=10)
        assert calculate_iou(a, b) == 0.0

    def test_iou_partial(self) -> None:
        """Test a half-overlapping pair."""
        a = Rect(left=0, top=0, right=10, bottom=10)
        b = Rect(left=5, top=0, right=15, bottom=10)
        # Intersection 50, union 150
        assert calculate_iou(a, b) == pytest.approx(1 / 3)
