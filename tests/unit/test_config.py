"""Tests for annotator configuration.

Covers:
- Default values match the viewer's initial control state
- Loading from environment variables
- Fail-fast validation of ranges and option names
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from raster_annotator.core.config import (
    AnnotatorConfig,
    ConfigValidationError,
    validate_config,
)


class TestAnnotatorConfigDefaults:
    """Verify default configuration values."""

    def test_defaults(self) -> None:
        cfg = AnnotatorConfig()
        assert cfg.max_resolution == 1000
        assert cfg.ui_width == 300
        assert cfg.draw_color == "white"
        assert cfg.colormap == "viridis"
        assert cfg.remap == "cbrt"
        assert cfg.log_level == "INFO"

    def test_figure_size_adds_control_column(self) -> None:
        assert AnnotatorConfig().figure_size_px == (1600, 1200)
        assert AnnotatorConfig(ui_width=200).figure_size_px == (1500, 1200)

    def test_frozen(self) -> None:
        cfg = AnnotatorConfig()
        with pytest.raises(AttributeError):
            cfg.ui_width = 10  # type: ignore[misc]

    def test_defaults_are_valid(self) -> None:
        validate_config(AnnotatorConfig())


class TestAnnotatorConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            "ANNOTATOR_MAX_RESOLUTION": "500",
            "ANNOTATOR_UI_WIDTH": "250",
            "ANNOTATOR_DRAW_COLOR": "red",
            "ANNOTATOR_COLORMAP": "magma",
            "ANNOTATOR_REMAP": "symlog10",
            "ANNOTATOR_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = AnnotatorConfig.from_env()

        assert cfg.max_resolution == 500
        assert cfg.ui_width == 250
        assert cfg.draw_color == "red"
        assert cfg.colormap == "magma"
        assert cfg.remap == "symlog10"
        assert cfg.log_level == "DEBUG"

    def test_defaults_when_env_missing(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = AnnotatorConfig.from_env()
        assert cfg == AnnotatorConfig()

    def test_unparseable_number(self) -> None:
        with (
            patch.dict(os.environ, {"ANNOTATOR_UI_WIDTH": "wide"}, clear=False),
            pytest.raises(ValueError, match="wide"),
        ):
            AnnotatorConfig.from_env()


class TestAnnotatorConfigValidation:
    """Fail-fast validation."""

    @pytest.mark.parametrize(
        ("env", "key"),
        [
            ({"ANNOTATOR_MAX_RESOLUTION": "0"}, "ANNOTATOR_MAX_RESOLUTION"),
            ({"ANNOTATOR_UI_WIDTH": "-5"}, "ANNOTATOR_UI_WIDTH"),
            ({"ANNOTATOR_DRAW_COLOR": "purple"}, "ANNOTATOR_DRAW_COLOR"),
            ({"ANNOTATOR_COLORMAP": "jet2"}, "ANNOTATOR_COLORMAP"),
            ({"ANNOTATOR_REMAP": "log2"}, "ANNOTATOR_REMAP"),
            ({"ANNOTATOR_LOG_LEVEL": "LOUD"}, "ANNOTATOR_LOG_LEVEL"),
        ],
    )
    def test_invalid_values_rejected(self, env: dict[str, str], key: str) -> None:
        with patch.dict(os.environ, env, clear=False), pytest.raises(ConfigValidationError) as info:
            AnnotatorConfig.from_env()
        assert info.value.key == key
        assert info.value.code == "CONFIG_VALIDATION_FAILED"
