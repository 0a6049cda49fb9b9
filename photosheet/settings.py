"""User settings and the service that owns them.

Settings are held by a single SettingsStore that the application builds
once and passes to whoever needs it. Changes are validated with Pydantic,
persisted as JSON and announced to subscribers.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from photosheet.config import (
    DEFAULT_BORDER_COLOR,
    DEFAULT_BORDER_WIDTH_PX,
    DEFAULT_LANGUAGE,
    DEFAULT_OUTPUT_DIR,
    JPEG_QUALITY,
    MASK_THRESHOLD,
    SUPPORTED_LANGUAGES,
)

logger = logging.getLogger(__name__)


class AppSettings(BaseModel):
    """Persisted user preferences."""

    model_config = ConfigDict(extra="forbid")

    language: str = Field(default=DEFAULT_LANGUAGE, description="UI language code")
    output_dir: str = Field(default=DEFAULT_OUTPUT_DIR, description="Where sheets are saved")
    jpeg_quality: int = Field(default=JPEG_QUALITY, ge=1, le=100, description="JPEG quality")
    mask_threshold: float = Field(default=MASK_THRESHOLD, ge=0, le=1, description="Foreground cutoff")
    border_width_px: int = Field(default=DEFAULT_BORDER_WIDTH_PX, ge=0, description="Border stroke")
    border_color: tuple[int, int, int, int] = Field(
        default=DEFAULT_BORDER_COLOR, description="Border colour as RGBA"
    )

    @field_validator("language")
    @classmethod
    def check_language(cls, v: str) -> str:
        """Validate the language is one the application ships."""
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language {v!r}, expected one of {SUPPORTED_LANGUAGES}")
        return v

    @field_validator("border_color")
    @classmethod
    def check_color(cls, v: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
        """Validate each colour channel is a byte."""
        if any(not 0 <= channel <= 255 for channel in v):
            raise ValueError(f"Colour channels must be 0-255, got {v}")
        return v


SettingsListener = Callable[[AppSettings], None]


class SettingsStore:
    """Owns the application settings and their JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._settings = self.load()
        self._listeners: list[SettingsListener] = []

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def load(self) -> AppSettings:
        """Read settings from disk.

        Returns:
            Stored settings, or defaults if the file is missing or invalid
        """
        if not self.path.exists():
            logger.debug(f"No settings file found: {self.path}")
            return AppSettings()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            settings = AppSettings(**data)
            logger.info(f"Loaded settings from: {self.path}")
            return settings
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Invalid settings file {self.path}: {e}")
            return AppSettings()

    def update(self, **changes: object) -> AppSettings:
        """Apply, persist and announce a change.

        Raises:
            pydantic.ValidationError: If the resulting settings are invalid
        """
        updated = AppSettings(**{**self._settings.model_dump(), **changes})

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(updated.model_dump_json(indent=2), encoding="utf-8")
        self._settings = updated
        logger.info(f"Saved settings to: {self.path}")

        for listener in self._listeners:
            listener(updated)
        return updated

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)
