"""GeoJSON export and import of annotated polygons."""

from raster_annotator.serialization.geojson import (
    geojson,
    parse_collection,
    parse_feature,
    prepare_collection,
    prepare_feature,
    serialize_collection,
    serialize_feature,
)

__all__ = [
    "geojson",
    "parse_collection",
    "parse_feature",
    "prepare_collection",
    "prepare_feature",
    "serialize_collection",
    "serialize_feature",
]
