"""Tests for the command-line entry point."""

from __future__ import annotations

import json
import os
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from raster_annotator.__main__ import build_parser, main
from raster_annotator.interaction.session import AnnotationSession
from raster_annotator.providers.array import ArrayRasterProvider
from raster_annotator.providers.base import RasterError

_ENV = {
    "ANNOTATOR_MAX_RESOLUTION": "500",
    "ANNOTATOR_COLORMAP": "gray",
    "ANNOTATOR_LOG_LEVEL": "warning",
}


class TestBuildParser:
    def test_positional_raster(self) -> None:
        args = build_parser().parse_args(["scene.tif"])
        assert args.raster == "scene.tif"
        assert args.band == 1

    def test_band_option(self) -> None:
        args = build_parser().parse_args(["scene.tif", "--band", "3"])
        assert args.band == 3

    def test_raster_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    def _annotator(self) -> MagicMock:
        session = AnnotationSession()
        for point in [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]:
            session.on_left_click(*point)
        session.request_commit("A", "north field")
        annotator = MagicMock()
        annotator.session = session
        return annotator

    def test_writes_geojson_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        raster = ArrayRasterProvider(np.zeros((4, 4)))
        with (
            patch.dict(os.environ, _ENV),
            patch("raster_annotator.providers.factory.open_raster", return_value=raster) as mock_open,
            patch(
                "raster_annotator.viewer.figure.draw_features", return_value=self._annotator()
            ) as mock_draw,
        ):
            code = main(["scene.tif", "--band", "2"])

        assert code == 0
        mock_open.assert_called_once_with("scene.tif", band=2)
        config = mock_draw.call_args.args[1]
        assert config.max_resolution == 500
        assert config.colormap == "gray"
        assert config.log_level == "WARNING"

        doc = json.loads(capsys.readouterr().out)
        assert doc["type"] == "FeatureCollection"
        assert doc["features"][0]["properties"] == {"label": "A", "notes": "north field"}

    def test_invalid_config_exits_2(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict(os.environ, {"ANNOTATOR_MAX_RESOLUTION": "0"}):
            code = main(["scene.tif"])
        assert code == 2
        assert "error:" in capsys.readouterr().err

    def test_unparseable_config_exits_2(self) -> None:
        with patch.dict(os.environ, {"ANNOTATOR_UI_WIDTH": "wide"}):
            assert main(["scene.tif"]) == 2

    def test_raster_error_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        error = RasterError("Cannot open raster 'missing.tif'", code="RASTER_OPEN_FAILED")
        with (
            patch.dict(os.environ, _ENV),
            patch("raster_annotator.providers.factory.open_raster", side_effect=error),
            patch("raster_annotator.viewer.figure.draw_features") as mock_draw,
        ):
            code = main(["missing.tif"])

        assert code == 1
        mock_draw.assert_not_called()
        assert capsys.readouterr().out == ""
