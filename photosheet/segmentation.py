"""Background segmentation boundary.

This module provides:
- Abstract Segmenter interface for pluggable segmentation backends
- LuminanceSegmenter, a model-free backend based on Otsu thresholding
- Request/response wrapper returning a Future for the confidence buffer
- remove_background: segmentation -> mask -> optional border
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future, ThreadPoolExecutor

import cv2
import numpy as np
from PIL import Image

from photosheet.config import MASK_THRESHOLD
from photosheet.errors import SegmentationError
from photosheet.masking import add_border, apply_foreground_mask

logger = logging.getLogger(__name__)


class Segmenter(ABC):
    """Abstract base class for foreground segmentation."""

    @abstractmethod
    def segment(self, image: Image.Image) -> np.ndarray:
        """Estimate foreground likelihood for every pixel.

        Args:
            image: Source image

        Returns:
            Float buffer shaped (height, width) with values in [0, 1]
        """
        raise NotImplementedError


class LuminanceSegmenter(Segmenter):
    """Segmenter that separates subject from a plain backdrop by brightness.

    Pixels are split into two classes with an Otsu threshold on luminance;
    the class owning most of the image corners is treated as background.
    Suited to passport photos taken against a uniform wall.
    """

    def segment(self, image: Image.Image) -> np.ndarray:
        gray = np.array(image.convert("L"), dtype=np.uint8)
        _, threshold = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        bright = threshold > 0

        corners = [bright[0, 0], bright[0, -1], bright[-1, 0], bright[-1, -1]]
        background_is_bright = sum(bool(c) for c in corners) >= 2
        foreground = ~bright if background_is_bright else bright
        return foreground.astype(np.float32)


def _run_segmenter(segmenter: Segmenter, image: Image.Image) -> np.ndarray:
    try:
        return segmenter.segment(image)
    except SegmentationError:
        raise
    except Exception as e:
        raise SegmentationError(f"{type(segmenter).__name__} failed: {e}") from e


def request_segmentation(
    segmenter: Segmenter,
    image: Image.Image,
    executor: Executor | None = None,
) -> "Future[np.ndarray]":
    """Submit a segmentation request.

    Args:
        segmenter: Backend to run
        image: Image to segment
        executor: Executor to run on

    Returns:
        Future resolving to the confidence buffer, or raising SegmentationError

    Note:
        Without an executor the request runs on a single-use thread that is
        joined before returning, so the call blocks and the Future comes back
        already resolved. Pass an executor to run it in the background.
    """
    if executor is not None:
        return executor.submit(_run_segmenter, segmenter, image)

    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(_run_segmenter, segmenter, image)


def remove_background(
    image: Image.Image,
    segmenter: Segmenter,
    threshold: float = MASK_THRESHOLD,
    border: tuple[int, tuple[int, int, int, int]] | None = None,
    executor: Executor | None = None,
) -> Image.Image:
    """Cut the subject out of ``image`` and optionally stroke a border around it.

    Args:
        image: Source image (left untouched)
        segmenter: Backend producing the confidence buffer
        threshold: Mask threshold passed to apply_foreground_mask
        border: Optional (stroke_width_px, color_rgba) applied after masking
        executor: Executor for the segmentation request

    Returns:
        New RGBA image with a transparent background

    Raises:
        SegmentationError: If the backend fails (not retried)
        DimensionMismatchError: If the backend returns a buffer of the wrong shape
    """
    confidence = request_segmentation(segmenter, image, executor).result()
    logger.debug(f"Segmentation finished for {image.width}x{image.height} image")

    masked = apply_foreground_mask(image, confidence, threshold)
    if border is not None:
        stroke_width, color = border
        masked = add_border(masked, stroke_width, color)
    return masked
