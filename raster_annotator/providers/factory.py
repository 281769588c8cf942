"""Raster factory: wraps whatever the caller passes in a ``RasterProvider``.

Usage::

    from raster_annotator.providers.factory import open_raster

    raster = open_raster("scene.tif")
    raster = open_raster(np.random.rand(50, 50), extent=(0, 5, 0, 5))

The rasterio-backed provider is imported lazily so that in-memory use
does not load GDAL.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import numpy as np

from raster_annotator.providers.array import ArrayRasterProvider
from raster_annotator.providers.base import RasterError, RasterExtent, RasterProvider

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def open_raster(
    source: RasterProvider | np.ndarray | str | Path,
    extent: RasterExtent | tuple[float, float, float, float] | None = None,
    *,
    band: int = 1,
) -> RasterProvider:
    """Return a provider for *source*.

    Args:
        source: An existing provider (returned unchanged), a 2-D array,
            or a path to a raster file.
        extent: ``(x_min, x_max, y_min, y_max)`` for array sources.
        band: One-based band index for file sources.

    Raises:
        RasterError: If *source* is of an unsupported type or cannot be opened.
    """
    if isinstance(source, RasterProvider):
        return source
    if isinstance(source, np.ndarray):
        return ArrayRasterProvider(source, extent)
    if isinstance(source, (str, os.PathLike)):
        from raster_annotator.providers.rasterio_provider import RasterioRasterProvider

        logger.info("Opening raster file: %s", source)
        return RasterioRasterProvider(source, band=band)
    msg = f"Unsupported raster source type: {type(source).__name__}"
    raise RasterError(msg, code="UNSUPPORTED_SOURCE")
