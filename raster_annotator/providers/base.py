"""RasterProvider abstract base class.

A raster provider supplies what the viewer needs from the underlying
grid: its coordinate extent in raster space and a display copy no larger
than a requested resolution. The annotation core never touches raster
values; only the widget surface does.

Concrete providers:

- ``ArrayRasterProvider``: an in-memory numpy array with explicit extents.
- ``RasterioRasterProvider``: a GeoTIFF (or any GDAL raster) read with rasterio.
"""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from raster_annotator.core.exceptions import AnnotatorError

if TYPE_CHECKING:
    import numpy as np


@dataclass(frozen=True, slots=True)
class RasterExtent:
    """Raster-space bounds of the grid's outer pixel edges.

    Attributes:
        x_min: Left edge.
        x_max: Right edge.
        y_min: Bottom edge.
        y_max: Top edge.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        values = (self.x_min, self.x_max, self.y_min, self.y_max)
        if not all(math.isfinite(v) for v in values):
            msg = f"Raster extent must be finite, got {values}"
            raise RasterError(msg, code="INVALID_EXTENT")
        if self.x_min >= self.x_max or self.y_min >= self.y_max:
            msg = f"Raster extent must have min < max on both axes, got {values}"
            raise RasterError(msg, code="INVALID_EXTENT")

    @property
    def top_left(self) -> tuple[float, float]:
        """``(x_min, y_max)``, where the pointer readout is anchored."""
        return (self.x_min, self.y_max)

    def as_imshow_extent(self) -> tuple[float, float, float, float]:
        """``(left, right, bottom, top)`` as expected by ``Axes.imshow``."""
        return (self.x_min, self.x_max, self.y_min, self.y_max)


class RasterProvider(abc.ABC):
    """Abstract base class for raster sources.

    Rows are ordered top to bottom: row 0 lies along ``extent.y_max``.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short description shown as the figure title."""

    @property
    @abc.abstractmethod
    def extent(self) -> RasterExtent:
        """Raster-space bounds of the full grid."""

    @property
    @abc.abstractmethod
    def shape(self) -> tuple[int, int]:
        """``(rows, cols)`` of the full-resolution grid."""

    @abc.abstractmethod
    def display_grid(self, max_resolution: int) -> np.ndarray:
        """Return a float copy of the grid with at most *max_resolution* pixels per side.

        Args:
            max_resolution: Upper bound on rows and columns of the result.

        Raises:
            RasterError: If *max_resolution* is not positive or the
                source cannot be read.
        """

    @property
    def top_left(self) -> tuple[float, float]:
        return self.extent.top_left

    def decimation_step(self, max_resolution: int) -> int:
        """Smallest integer stride keeping both axes within *max_resolution*."""
        if max_resolution <= 0:
            msg = f"max_resolution must be > 0, got {max_resolution}"
            raise RasterError(msg, code="INVALID_RESOLUTION")
        return max(1, math.ceil(max(self.shape) / max_resolution))


# ---------------------------------------------------------------------------
# Raster exceptions
# ---------------------------------------------------------------------------


class RasterError(AnnotatorError):
    """A raster source cannot be opened, read or described."""

    default_stage = "raster"
    default_code = "RASTER_ERROR"
