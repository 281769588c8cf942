"""Pydantic models for validating incoming GeoJSON.

Mirrors ``raster_annotator.models.contracts`` on the read side: only
single-ring ``Polygon`` features with ``label`` / ``notes`` properties are
accepted. Unknown extra members (``id``, ``bbox``, foreign properties)
are ignored.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PolygonGeometryModel(BaseModel):
    """``geometry`` member; ``coordinates`` is a list of rings of ``[x, y]`` pairs."""

    type: Literal["Polygon"]
    coordinates: list[list[tuple[float, float]]]


class FeaturePropertiesModel(BaseModel):
    label: str
    notes: str = ""


class FeatureModel(BaseModel):
    type: Literal["Feature"]
    geometry: PolygonGeometryModel
    properties: FeaturePropertiesModel


class FeatureCollectionModel(BaseModel):
    type: Literal["FeatureCollection"]
    features: list[FeatureModel] = Field(default_factory=list)
