"""Data models and schemas.

Defines the data structures used throughout the annotator:
- DraftVertices / ClosedRing: open click buffer vs. closed polygon ring
- Notes: opaque markdown notes payload
- PolygonFeature: labelled polygon with notes
- FeatureCollectionStore: ordered, observable label → feature mapping
"""

from raster_annotator.models.collection import FeatureCollectionStore, FeatureView
from raster_annotator.models.feature import PolygonFeature
from raster_annotator.models.geometry import ClosedRing, DraftVertices, Point, as_point
from raster_annotator.models.notes import Notes

__all__ = [
    "ClosedRing",
    "DraftVertices",
    "FeatureCollectionStore",
    "FeatureView",
    "Notes",
    "Point",
    "PolygonFeature",
    "as_point",
]
