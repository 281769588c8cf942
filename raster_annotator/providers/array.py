"""In-memory raster provider backed by a 2-D numpy array."""

from __future__ import annotations

import numpy as np

from raster_annotator.providers.base import RasterError, RasterExtent, RasterProvider


class ArrayRasterProvider(RasterProvider):
    """Serve a 2-D array with explicit raster-space extents.

    Without an extent the array is placed in pixel coordinates:
    ``x`` in ``[0, cols]`` and ``y`` in ``[0, rows]``.
    """

    def __init__(
        self,
        values: np.ndarray,
        extent: RasterExtent | tuple[float, float, float, float] | None = None,
        *,
        name: str = "array",
    ) -> None:
        array = np.asarray(values, dtype=float)
        if array.ndim != 2 or 0 in array.shape:
            msg = f"Raster must be a non-empty 2-D array, got shape {array.shape}"
            raise RasterError(msg, code="INVALID_SHAPE")
        rows, cols = array.shape
        if extent is None:
            extent = RasterExtent(0.0, float(cols), 0.0, float(rows))
        elif not isinstance(extent, RasterExtent):
            extent = RasterExtent(*(float(v) for v in extent))
        self._values = array
        self._extent = extent
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def extent(self) -> RasterExtent:
        return self._extent

    @property
    def shape(self) -> tuple[int, int]:
        rows, cols = self._values.shape
        return (rows, cols)

    def display_grid(self, max_resolution: int) -> np.ndarray:
        step = self.decimation_step(max_resolution)
        return self._values[::step, ::step].copy()
