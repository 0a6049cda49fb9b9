"""DPI conversion utilities (pixels -> millimeters, pixels -> PDF points)."""

from photosheet.config import PRINT_DPI


def px_to_mm(px: float, dpi: int = PRINT_DPI) -> float:
    """Convert pixels to millimeters.

    Args:
        px: Size in pixels
        dpi: Dots per inch (resolution)

    Returns:
        Size in millimeters

    Note:
        1 inch = 25.4 mm
    """
    return (px / dpi) * 25.4


def px_to_pt(px: float, dpi: int = PRINT_DPI) -> float:
    """Convert pixels to PDF points (1pt = 1/72 inch)."""
    return (px / dpi) * 72
