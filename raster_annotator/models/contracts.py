"""GeoJSON payload contracts.

The nested-object forms produced by the serializer are defined here as
``TypedDict`` so that field names live in one place. Only the subset of
RFC 7946 the annotator writes is modelled: single-ring ``Polygon``
features with ``label`` and ``notes`` properties.
"""

from __future__ import annotations

from typing import Literal, TypedDict


class PolygonGeometryPayload(TypedDict):
    """``geometry`` member: exactly one closed ring, no holes."""

    type: Literal["Polygon"]
    coordinates: list[list[list[float]]]


class FeaturePropertiesPayload(TypedDict):
    """``properties`` member of an annotated feature."""

    label: str
    notes: str


class FeaturePayload(TypedDict):
    """A single GeoJSON ``Feature``; key order is ``type, geometry, properties``."""

    type: Literal["Feature"]
    geometry: PolygonGeometryPayload
    properties: FeaturePropertiesPayload


class FeatureCollectionPayload(TypedDict):
    """Top-level export unit."""

    type: Literal["FeatureCollection"]
    features: list[FeaturePayload]
