"""Matplotlib surface for drawing and reviewing polygons on a raster."""

from raster_annotator.viewer.figure import AnnotatorFigure, draw_features

__all__ = ["AnnotatorFigure", "draw_features"]
