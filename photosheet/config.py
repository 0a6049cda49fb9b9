"""Centralized configuration constants for photosheet."""

# DPI settings
PRINT_DPI = 300  # All recipe pixel dimensions assume this resolution

# Canvas
WHITE = (255, 255, 255, 255)

# Scaling policy
MIN_SCALED_DIMENSION_PX = 100  # Never scale a side below this
MAX_SCALED_DIMENSION_PX = 2000
MAX_TOTAL_SCALE = 7.0  # Upper bound on the sum of collage scale factors
CROWDING_CAPS = (  # (minimum image count, max scale)
    (5, 1.0),
    (3, 1.2),
    (2, 1.5),
    (1, 2.0),
)

# Collage (A4 @ 300 DPI)
COLLAGE_CANVAS_PX = (2480, 3508)
COLLAGE_MARGIN_PX = 70

# Background removal
MASK_THRESHOLD = 0.70  # Confidence above which a pixel is foreground
DEFAULT_BORDER_WIDTH_PX = 10
DEFAULT_BORDER_COLOR = (0, 0, 0, 255)

# Output
JPEG_QUALITY = 100
SUPPORTED_LANGUAGES = ("en", "hi")
DEFAULT_LANGUAGE = "en"
DEFAULT_OUTPUT_DIR = "output"
