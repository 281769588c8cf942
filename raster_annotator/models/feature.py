"""Data model for a single labelled polygon.

A ``PolygonFeature`` is created only when the user saves a drawn
polygon (or when one is loaded back from GeoJSON). It is fully formed
from construction on: the label is non-empty and the ring is closed.
Only ``notes`` may change afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from raster_annotator.core.exceptions import ValidationError
from raster_annotator.models.geometry import ClosedRing, Point
from raster_annotator.models.notes import Notes

if TYPE_CHECKING:
    from collections.abc import Sequence


class PolygonFeature:
    """A named polygon with free-text notes.

    Attributes:
        label: Identity key, unique within a ``FeatureCollectionStore``.
        ring: The closed exterior ring (no holes).
        notes: Markdown notes; the only mutable attribute.

    Raises:
        ValidationError: If *label* is empty or *coordinates* do not form
            a closed ring of at least 3 vertices.
    """

    __slots__ = ("_label", "_notes", "_ring")

    def __init__(
        self,
        label: str,
        coordinates: ClosedRing | Sequence[Sequence[float]],
        notes: Notes | str | None = None,
    ) -> None:
        if not isinstance(label, str) or not label:
            msg = "Polygon label must be a non-empty string"
            raise ValidationError(msg, code="EMPTY_LABEL")
        if not isinstance(coordinates, ClosedRing):
            coordinates = ClosedRing(tuple(coordinates))
        self._label = label
        self._ring = coordinates
        self._notes = Notes.coerce(notes)

    @property
    def label(self) -> str:
        return self._label

    @property
    def ring(self) -> ClosedRing:
        return self._ring

    @property
    def coordinates(self) -> list[Point]:
        """Ring points, closing point included."""
        return list(self._ring.points)

    @property
    def notes(self) -> Notes:
        return self._notes

    @notes.setter
    def notes(self, value: Notes | str | None) -> None:
        self._notes = Notes.coerce(value)

    @property
    def vertex_count(self) -> int:
        """Number of clicked vertices (closing point excluded)."""
        return self._ring.vertex_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolygonFeature):
            return NotImplemented
        return (
            self._label == other._label
            and self._ring == other._ring
            and self._notes == other._notes
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"PolygonFeature(label={self._label!r}, "
            f"vertices={self.vertex_count}, notes={self._notes.text!r})"
        )
