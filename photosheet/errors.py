"""Error types raised by the compositing core.

Each error also derives from the closest builtin so callers that only know
about ``ValueError``/``KeyError`` keep working.
"""


class PhotoSheetError(Exception):
    """Base class for all photosheet failures."""


class EmptyInputError(PhotoSheetError, ValueError):
    """A recipe needs at least one source image per slot and got none."""


class DimensionMismatchError(PhotoSheetError, ValueError):
    """A confidence buffer does not match the image it should mask."""


class InvalidAngleError(PhotoSheetError, ValueError):
    """Rotation requested for an angle that is not supported."""


class InvalidRecipeError(PhotoSheetError, KeyError):
    """Unknown layout recipe identifier."""


class SegmentationError(PhotoSheetError, RuntimeError):
    """The segmentation backend failed to produce a confidence buffer."""
