"""Annotator configuration loaded from environment variables.

All configuration values have sensible defaults matching the viewer's
initial control state. ``from_env()`` raises ``ConfigValidationError``
if any value is out of range or not one of the offered options, so bad
configuration is caught before a figure is ever built.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from raster_annotator.core.constants import (
    COLORMAPS,
    DEFAULT_MAX_RESOLUTION,
    DEFAULT_UI_WIDTH,
    DRAW_COLORS,
    HEATMAP_SIZE_PX,
)
from raster_annotator.core.exceptions import AnnotatorError
from raster_annotator.utils.remap import REMAP_FUNCTIONS


class ConfigValidationError(AnnotatorError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class AnnotatorConfig:
    """Immutable annotator configuration.

    Attributes:
        max_resolution: Maximum heatmap size in pixels per side.
        ui_width: Width of the control column in pixels.
        draw_color: Initial color of the polygon overlays.
        colormap: Initial heatmap colormap.
        remap: Initial remap function name.
        log_level: Logging level name used by the command-line entry point.
    """

    max_resolution: int = DEFAULT_MAX_RESOLUTION
    ui_width: int = DEFAULT_UI_WIDTH
    draw_color: str = DRAW_COLORS[0]
    colormap: str = COLORMAPS[0]
    remap: str = "cbrt"
    log_level: str = "INFO"

    @property
    def figure_size_px(self) -> tuple[int, int]:
        """Figure size in pixels: heatmap area plus the control column."""
        width, height = HEATMAP_SIZE_PX
        return (width + self.ui_width, height)

    @classmethod
    def from_env(cls) -> AnnotatorConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or not an
                offered option.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``ANNOTATOR_UI_WIDTH=wide``).
        """
        config = cls(
            max_resolution=int(os.getenv("ANNOTATOR_MAX_RESOLUTION", str(DEFAULT_MAX_RESOLUTION))),
            ui_width=int(os.getenv("ANNOTATOR_UI_WIDTH", str(DEFAULT_UI_WIDTH))),
            draw_color=os.getenv("ANNOTATOR_DRAW_COLOR", DRAW_COLORS[0]),
            colormap=os.getenv("ANNOTATOR_COLORMAP", COLORMAPS[0]),
            remap=os.getenv("ANNOTATOR_REMAP", "cbrt"),
            log_level=os.getenv("ANNOTATOR_LOG_LEVEL", "INFO").upper(),
        )
        validate_config(config)
        return config


def validate_config(config: AnnotatorConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.max_resolution <= 0:
        raise ConfigValidationError(
            "ANNOTATOR_MAX_RESOLUTION",
            config.max_resolution,
            "must be > 0 (pixels)",
        )

    if config.ui_width <= 0:
        raise ConfigValidationError(
            "ANNOTATOR_UI_WIDTH",
            config.ui_width,
            "must be > 0 (pixels)",
        )

    if config.draw_color not in DRAW_COLORS:
        raise ConfigValidationError(
            "ANNOTATOR_DRAW_COLOR",
            config.draw_color,
            f"must be one of {', '.join(DRAW_COLORS)}",
        )

    if config.colormap not in COLORMAPS:
        raise ConfigValidationError(
            "ANNOTATOR_COLORMAP",
            config.colormap,
            f"must be one of {', '.join(COLORMAPS)}",
        )

    if config.remap not in REMAP_FUNCTIONS:
        raise ConfigValidationError(
            "ANNOTATOR_REMAP",
            config.remap,
            f"must be one of {', '.join(REMAP_FUNCTIONS)}",
        )

    if config.log_level not in logging.getLevelNamesMapping():
        raise ConfigValidationError(
            "ANNOTATOR_LOG_LEVEL",
            config.log_level,
            "must be a logging level name (e.g. INFO, DEBUG)",
        )
