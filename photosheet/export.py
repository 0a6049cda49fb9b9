"""Persistence of finished sheets.

This module handles:
- Saving a composite as JPEG (flattened on white) or PNG (alpha kept)
- Generating print-ready single-page PDFs with ReportLab
- Timestamped default file names
"""

import logging
from datetime import datetime
from pathlib import Path

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from photosheet.config import JPEG_QUALITY, PRINT_DPI, WHITE
from photosheet.units import px_to_mm, px_to_pt

logger = logging.getLogger(__name__)

_JPEG_SUFFIXES = {".jpg", ".jpeg"}
_PNG_SUFFIXES = {".png"}


def flatten(image: Image.Image) -> Image.Image:
    """Composite an image over opaque white and drop the alpha channel."""
    background = Image.new("RGBA", image.size, WHITE)
    background.alpha_composite(image.convert("RGBA"))
    return background.convert("RGB")


def default_filename(recipe_name: str, now: datetime | None = None, suffix: str = ".jpg") -> str:
    """Build a timestamped output name, e.g. small-passport-12up_20241019_101500.jpg."""
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"{recipe_name}_{stamp}{suffix}"


def save_image(image: Image.Image, output_path: str | Path, quality: int = JPEG_QUALITY) -> Path:
    """Write a finished sheet to disk.

    Args:
        image: Sheet to save
        output_path: Destination; the suffix selects JPEG or PNG
        quality: JPEG quality (ignored for PNG)

    Returns:
        Path that was written

    Raises:
        ValueError: If the suffix is neither JPEG nor PNG
    """
    path = Path(output_path)
    suffix = path.suffix.lower()
    if suffix not in _JPEG_SUFFIXES | _PNG_SUFFIXES:
        raise ValueError(f"Unsupported output format: {path.suffix or '(none)'}")

    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix in _JPEG_SUFFIXES:
        flatten(image).save(path, "JPEG", quality=quality)
    else:
        image.save(path, "PNG")

    logger.info(f"Saved {image.width}x{image.height} sheet to {path}")
    return path


def render_pdf(image: Image.Image, output_path: str | Path, dpi: int = PRINT_DPI) -> Path:
    """Generate a single-page PDF sized to the sheet's physical dimensions.

    Args:
        image: Sheet to embed
        output_path: Where to save the PDF
        dpi: Resolution the sheet's pixel dimensions were designed for

    Returns:
        Path that was written

    Note:
        A 1181x1772 sheet at 300 DPI becomes a 100x150 mm page.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    page_width = px_to_pt(image.width, dpi)
    page_height = px_to_pt(image.height, dpi)

    c = canvas.Canvas(str(path), pagesize=(page_width, page_height))
    c.drawImage(
        ImageReader(flatten(image)),
        0,
        0,
        width=page_width,
        height=page_height,
        preserveAspectRatio=False,
    )
    c.showPage()
    c.save()

    logger.info(
        f"Rendered PDF {path} "
        f"({px_to_mm(image.width, dpi):.1f}x{px_to_mm(image.height, dpi):.1f} mm)"
    )
    return path
