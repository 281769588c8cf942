"""Raster provider for files readable by rasterio (GeoTIFF and friends).

Only axis-aligned rasters are supported; a rotated geotransform is
rejected rather than silently resampled. The display copy is produced by
rasterio's decimated read (``out_shape``), so no full-resolution array is
ever materialised.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
import rasterio
from rasterio.enums import Resampling
from rasterio.errors import RasterioError

from raster_annotator.providers.base import RasterError, RasterExtent, RasterProvider

logger = logging.getLogger("raster_annotator.providers.rasterio_provider")


class RasterioRasterProvider(RasterProvider):
    """Read one band of a raster file.

    Args:
        path: Path to the raster file.
        band: One-based band index.

    Raises:
        RasterError: If the file cannot be opened, the band does not
            exist, or the geotransform is rotated.
    """

    def __init__(self, path: str | Path, band: int = 1) -> None:
        self._path = Path(path)
        self._band = band
        try:
            with rasterio.open(self._path) as src:
                if not 1 <= band <= src.count:
                    msg = f"{self._path.name}: band {band} out of range 1..{src.count}"
                    raise RasterError(msg, code="INVALID_BAND")
                transform = src.transform
                if transform.b != 0 or transform.d != 0:
                    msg = f"{self._path.name}: rotated rasters are not supported"
                    raise RasterError(msg, code="ROTATED_RASTER")
                bounds = src.bounds
                self._shape = (src.height, src.width)
                self._crs = src.crs.to_string() if src.crs else ""
        except RasterioError as exc:
            msg = f"Cannot open raster {self._path}: {exc}"
            raise RasterError(msg, code="RASTER_OPEN_FAILED") from exc

        self._extent = RasterExtent(bounds.left, bounds.right, bounds.bottom, bounds.top)
        logger.info(
            "Raster opened | path=%s | band=%d | shape=%s | crs=%s",
            self._path,
            band,
            self._shape,
            self._crs or "none",
        )

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def crs(self) -> str:
        """CRS string of the source (empty when the file has none)."""
        return self._crs

    @property
    def extent(self) -> RasterExtent:
        return self._extent

    @property
    def shape(self) -> tuple[int, int]:
        return self._shape

    def display_grid(self, max_resolution: int) -> np.ndarray:
        step = self.decimation_step(max_resolution)
        rows, cols = self._shape
        out_shape = (math.ceil(rows / step), math.ceil(cols / step))
        try:
            with rasterio.open(self._path) as src:
                data = src.read(
                    self._band,
                    out_shape=out_shape,
                    resampling=Resampling.nearest,
                    masked=True,
                )
        except RasterioError as exc:
            msg = f"Cannot read raster {self._path}: {exc}"
            raise RasterError(msg, code="RASTER_READ_FAILED") from exc
        logger.debug("Display grid read | path=%s | shape=%s", self._path, out_shape)
        return np.ma.filled(data.astype(float), np.nan)
