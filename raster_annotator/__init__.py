"""Raster polygon annotator.

Interactive tool for outlining polygons on a geospatial raster heatmap,
labelling them with free-text notes, and exporting the collection as a
GeoJSON FeatureCollection.
"""

__version__ = "0.1.0"
