"""Raster sources for the annotation viewer.

- RasterProvider: Abstract base class defining the interface
- ArrayRasterProvider: In-memory numpy grid
- RasterioRasterProvider: Raster file read with rasterio (imported lazily)
"""

from raster_annotator.providers.array import ArrayRasterProvider
from raster_annotator.providers.base import RasterError, RasterExtent, RasterProvider
from raster_annotator.providers.factory import open_raster

__all__ = [
    "ArrayRasterProvider",
    "RasterError",
    "RasterExtent",
    "RasterProvider",
    "open_raster",
]
