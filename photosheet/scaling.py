"""Per-image scale ranges and cross-image scale normalization for collages."""

from collections.abc import Sequence

from photosheet.config import (
    CROWDING_CAPS,
    MAX_SCALED_DIMENSION_PX,
    MAX_TOTAL_SCALE,
    MIN_SCALED_DIMENSION_PX,
)


def crowding_cap(image_count: int) -> float:
    """Largest scale factor allowed when ``image_count`` images share a canvas."""
    for min_count, cap in CROWDING_CAPS:
        if image_count >= min_count:
            return cap
    raise ValueError(f"Image count must be positive, got {image_count}")


def scale_range(image_count: int, image_width: int, image_height: int) -> tuple[float, float]:
    """Compute the slider range for one collage image.

    Args:
        image_count: Number of images sharing the canvas
        image_width: Native width in pixels
        image_height: Native height in pixels

    Returns:
        Tuple of (min_scale, max_scale) with min_scale <= max_scale

    Raises:
        ValueError: If the count or either dimension is not positive

    Note:
        - min_scale keeps both scaled sides at or above 100px
        - max_scale keeps both sides at or below 2000px and under the crowding cap
        - When the image is too large or too elongated for both bounds to hold,
          max_scale collapses onto min_scale; callers clamp for display
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {image_width}x{image_height}")

    cap = crowding_cap(image_count)
    min_scale = max(MIN_SCALED_DIMENSION_PX / image_width, MIN_SCALED_DIMENSION_PX / image_height)
    max_scale = min(
        MAX_SCALED_DIMENSION_PX / image_width,
        MAX_SCALED_DIMENSION_PX / image_height,
        cap,
    )
    return min_scale, max(min_scale, max_scale)


def clamp_scale(scale: float, bounds: tuple[float, float]) -> float:
    """Clamp a scale factor into a (min, max) range."""
    low, high = bounds
    return min(max(scale, low), high)


def normalize_scales(
    scales: Sequence[float],
    changed_index: int,
    new_value: float,
    max_total: float = MAX_TOTAL_SCALE,
) -> list[float]:
    """Apply one slider change and rebalance the other scale factors.

    Args:
        scales: Current scale factor per image (not modified)
        changed_index: Index of the slider that moved
        new_value: New value for that slider
        max_total: Upper bound on the sum of all scale factors

    Returns:
        New list of scale factors

    Raises:
        IndexError: If changed_index is out of range
        ValueError: If new_value is not positive

    Note:
        The rebalance is a single greedy pass: the excess is split evenly over
        the other images and each is floored at 0. Amounts that cannot be taken
        from images already at the floor are not redistributed, so the sum may
        stay above max_total.
    """
    if not 0 <= changed_index < len(scales):
        raise IndexError(f"Scale index {changed_index} out of range for {len(scales)} images")
    if new_value <= 0:
        raise ValueError(f"Scale factor must be positive, got {new_value}")

    updated = list(scales)
    updated[changed_index] = new_value

    excess = sum(updated) - max_total
    others = len(updated) - 1
    if excess <= 0 or others == 0:
        return updated

    share = excess / others
    for i, value in enumerate(updated):
        if i != changed_index:
            updated[i] = max(0.0, value - share)
    return updated
