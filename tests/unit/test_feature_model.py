"""Tests for PolygonFeature and Notes."""

from __future__ import annotations

import pytest

from raster_annotator.core.exceptions import ValidationError
from raster_annotator.models.feature import PolygonFeature
from raster_annotator.models.geometry import ClosedRing
from raster_annotator.models.notes import Notes

TRIANGLE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]
SQUARE = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0)]


class TestNotes:
    def test_default_is_empty(self) -> None:
        notes = Notes()
        assert notes.text == ""
        assert not notes
        assert notes.render_to_plain_text() == ""

    def test_render_keeps_markdown_source(self) -> None:
        notes = Notes("# Field 7\n\n- **wet** corner\n")
        assert notes.render_to_plain_text() == "# Field 7\n\n- **wet** corner"

    def test_whitespace_only_is_falsy(self) -> None:
        assert not Notes("  \n")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, Notes()), ("abc", Notes("abc")), (Notes("x"), Notes("x"))],
    )
    def test_coerce(self, value: object, expected: Notes) -> None:
        assert Notes.coerce(value) == expected  # type: ignore[arg-type]

    def test_coerce_rejects_other_types(self) -> None:
        with pytest.raises(TypeError, match="int"):
            Notes.coerce(5)  # type: ignore[arg-type]


class TestPolygonFeature:
    def test_construct_from_sequence(self) -> None:
        feature = PolygonFeature("A", TRIANGLE)
        assert feature.label == "A"
        assert feature.coordinates == TRIANGLE
        assert feature.vertex_count == 3
        assert feature.notes == Notes()

    def test_construct_from_ring(self) -> None:
        ring = ClosedRing.from_vertices([(0, 0), (1, 0), (1, 1)])
        assert PolygonFeature("r", ring).ring is ring

    def test_empty_label_rejected(self) -> None:
        with pytest.raises(ValidationError) as info:
            PolygonFeature("", TRIANGLE)
        assert info.value.code == "EMPTY_LABEL"

    def test_unclosed_coordinates_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PolygonFeature("A", TRIANGLE[:-1])

    def test_label_and_ring_are_read_only(self) -> None:
        feature = PolygonFeature("A", TRIANGLE)
        with pytest.raises(AttributeError):
            feature.label = "B"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            feature.ring = ClosedRing(tuple(SQUARE))  # type: ignore[misc]

    def test_notes_are_editable(self) -> None:
        feature = PolygonFeature("A", TRIANGLE)
        feature.notes = "revisit"
        assert feature.notes == Notes("revisit")

    def test_coordinates_returns_a_copy(self) -> None:
        feature = PolygonFeature("A", TRIANGLE)
        feature.coordinates.append((99.0, 99.0))
        assert feature.coordinates == TRIANGLE

    def test_equality(self) -> None:
        assert PolygonFeature("A", TRIANGLE) == PolygonFeature("A", TRIANGLE)
        assert PolygonFeature("A", TRIANGLE) != PolygonFeature("A", TRIANGLE, "n")
        assert PolygonFeature("A", TRIANGLE) != PolygonFeature("B", TRIANGLE)

    def test_repr(self) -> None:
        assert repr(PolygonFeature("A", TRIANGLE)) == "PolygonFeature(label='A', vertices=3, notes='')"
