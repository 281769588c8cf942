"""Shared pytest fixtures for the raster annotator test suite."""

import numpy as np
import pytest

from raster_annotator.interaction.session import AnnotationSession
from raster_annotator.models.collection import FeatureCollectionStore
from raster_annotator.models.feature import PolygonFeature

# ---------------------------------------------------------------------------
# Reference rings
# ---------------------------------------------------------------------------

TRIANGLE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]
SQUARE = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0)]


@pytest.fixture()
def triangle() -> PolygonFeature:
    """Feature "A": the triangle from clicking (0,0), (10,0), (10,10)."""
    return PolygonFeature("A", TRIANGLE)


@pytest.fixture()
def square() -> PolygonFeature:
    """Feature "B": a 4x4 square with notes."""
    return PolygonFeature("B", SQUARE, "Bare soil, **check** in spring")


@pytest.fixture()
def store(triangle: PolygonFeature, square: PolygonFeature) -> FeatureCollectionStore:
    """Store holding "A" then "B"."""
    return FeatureCollectionStore([triangle, square])


@pytest.fixture()
def session() -> AnnotationSession:
    """A fresh session with an empty store."""
    return AnnotationSession()


# ---------------------------------------------------------------------------
# Raster fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def raster_values() -> np.ndarray:
    """A 40 x 60 grid spanning negative and positive values."""
    rows, cols = np.mgrid[0:40, 0:60]
    return (rows * cols - 500).astype(float)
