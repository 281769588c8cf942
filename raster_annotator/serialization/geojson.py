"""GeoJSON serializer for polygon features (RFC 7946 subset).

Two levels, mirroring the export interface:

1. ``prepare_feature`` / ``prepare_collection`` build the nested-object
   form with a fixed key order (``type``, ``geometry``, ``properties``).
2. ``serialize_feature`` / ``serialize_collection`` encode that form to
   text with the standard-library ``json`` module.

Coordinates must be finite: NaN or infinity raise ``SerializationError``
instead of producing the non-standard ``NaN`` / ``Infinity`` tokens.

The reverse direction (``parse_feature`` / ``parse_collection``) validates
text with the pydantic models in ``raster_annotator.serialization.schema``
and rebuilds ``PolygonFeature`` objects.
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from raster_annotator.core.exceptions import AnnotatorError, SerializationError
from raster_annotator.models.collection import FeatureCollectionStore
from raster_annotator.models.feature import PolygonFeature
from raster_annotator.serialization.schema import FeatureCollectionModel, FeatureModel

if TYPE_CHECKING:
    from collections.abc import Iterable

    from raster_annotator.models.contracts import FeatureCollectionPayload, FeaturePayload

logger = logging.getLogger("raster_annotator.serialization.geojson")

_ModelT = TypeVar("_ModelT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def prepare_feature(feature: PolygonFeature) -> FeaturePayload:
    """Build the GeoJSON ``Feature`` object for *feature*.

    The ring is written exactly as stored (already closed) as the single
    ring of a ``Polygon``. Notes are rendered to plain text.

    Raises:
        SerializationError: If any coordinate is NaN or infinite.
    """
    for index, (x, y) in enumerate(feature.ring):
        if not (math.isfinite(x) and math.isfinite(y)):
            msg = (
                f"Polygon {feature.label!r} has a non-finite coordinate "
                f"at index {index}: ({x}, {y})"
            )
            raise SerializationError(msg, code="NON_FINITE_COORDINATE")

    return {
        "type": "Feature",
        "geometry": {
            "type": "Polygon",
            "coordinates": [feature.ring.to_list()],
        },
        "properties": {
            "label": feature.label,
            "notes": feature.notes.render_to_plain_text(),
        },
    }


def prepare_collection(
    features: FeatureCollectionStore | Iterable[PolygonFeature],
) -> FeatureCollectionPayload:
    """Build the GeoJSON ``FeatureCollection`` object, preserving store order.

    Raises:
        SerializationError: If any feature has a non-finite coordinate.
    """
    if isinstance(features, FeatureCollectionStore):
        ordered = [feature for _, feature in features.all()]
    else:
        ordered = list(features)
    return {
        "type": "FeatureCollection",
        "features": [prepare_feature(feature) for feature in ordered],
    }


def serialize_feature(feature: PolygonFeature) -> str:
    """Encode a single feature as GeoJSON text."""
    return _dumps(prepare_feature(feature))


def serialize_collection(features: FeatureCollectionStore | Iterable[PolygonFeature]) -> str:
    """Encode a whole collection as GeoJSON ``FeatureCollection`` text."""
    text = _dumps(prepare_collection(features))
    logger.debug("FeatureCollection serialized | chars=%d", len(text))
    return text


def geojson(obj: PolygonFeature | FeatureCollectionStore | Iterable[PolygonFeature]) -> str:
    """Encode a feature or a collection, whichever *obj* is."""
    if isinstance(obj, PolygonFeature):
        return serialize_feature(obj)
    return serialize_collection(obj)


def _dumps(payload: FeaturePayload | FeatureCollectionPayload) -> str:
    try:
        return json.dumps(payload, allow_nan=False, ensure_ascii=False)
    except ValueError as exc:
        raise SerializationError(str(exc), code="NON_FINITE_COORDINATE") from exc


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def parse_feature(text: str) -> PolygonFeature:
    """Rebuild a ``PolygonFeature`` from GeoJSON ``Feature`` text.

    Raises:
        SerializationError: If the text is not valid JSON, not a
            single-ring ``Polygon`` feature, or the ring is not closed.
    """
    model = _validate(FeatureModel, text)
    return _feature_from_model(model, index=0)


def parse_collection(text: str) -> list[PolygonFeature]:
    """Rebuild features, in document order, from ``FeatureCollection`` text.

    Raises:
        SerializationError: As ``parse_feature``, or if two features
            share a label.
    """
    model = _validate(FeatureCollectionModel, text)
    features: list[PolygonFeature] = []
    seen: set[str] = set()
    for index, feature_model in enumerate(model.features):
        feature = _feature_from_model(feature_model, index=index)
        if feature.label in seen:
            msg = f"Feature {index}: duplicate label {feature.label!r}"
            raise SerializationError(msg, stage="parse", code="DUPLICATE_LABEL")
        seen.add(feature.label)
        features.append(feature)
    logger.info("FeatureCollection parsed | features=%d", len(features))
    return features


def _validate(model_cls: type[_ModelT], text: str) -> _ModelT:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc}"
        raise SerializationError(msg, stage="parse", code="INVALID_JSON") from exc
    try:
        return model_cls.model_validate(raw)
    except PydanticValidationError as exc:
        msg = f"Not a supported GeoJSON {model_cls.__name__.removesuffix('Model')}: {exc}"
        raise SerializationError(msg, stage="parse", code="INVALID_GEOJSON") from exc


def _feature_from_model(model: FeatureModel, *, index: int) -> PolygonFeature:
    rings = model.geometry.coordinates
    if len(rings) != 1:
        msg = f"Feature {index}: expected exactly one ring, got {len(rings)} (holes are not supported)"
        raise SerializationError(msg, stage="parse", code="UNSUPPORTED_RINGS")
    for x, y in rings[0]:
        if not (math.isfinite(x) and math.isfinite(y)):
            msg = f"Feature {index}: non-finite coordinate ({x}, {y})"
            raise SerializationError(msg, stage="parse", code="NON_FINITE_COORDINATE")
    try:
        return PolygonFeature(model.properties.label, rings[0], model.properties.notes)
    except AnnotatorError as exc:
        msg = f"Feature {index}: {exc.message}"
        raise SerializationError(msg, stage="parse", code="INVALID_FEATURE") from exc
