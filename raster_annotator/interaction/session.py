"""Annotation session, the interface between a widget surface and the core.

The session wires the external interfaces together:

- input events: ``on_hover``, ``on_left_click`` (raster coordinates);
- controls: ``request_clear``, ``request_commit``;
- queries: ``labels``, ``coordinates_of``, ``view_options``, ``preview``;
- export/import: ``serialize_all``, ``serialize_one``, ``import_geojson``.

It is also the error boundary: every ``AnnotatorError`` raised by the
core is reported in the status message before it reaches the caller, and
commit failures are returned as a ``CommitResult`` instead of raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from raster_annotator.core.constants import NO_SELECTION
from raster_annotator.core.exceptions import AnnotatorError, DuplicateKeyError
from raster_annotator.interaction.click_capture import (
    ClickCaptureStateMachine,
    Status,
    StatusLevel,
)
from raster_annotator.serialization.geojson import (
    parse_collection,
    serialize_collection,
    serialize_feature,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from raster_annotator.core.observable import Observable
    from raster_annotator.models.collection import FeatureCollectionStore
    from raster_annotator.models.geometry import Point
    from raster_annotator.models.notes import Notes

logger = logging.getLogger("raster_annotator.interaction.session")

_T = TypeVar("_T")


@dataclass(frozen=True, slots=True)
class CommitResult:
    """Outcome of ``AnnotationSession.request_commit``.

    Attributes:
        ok: Whether the polygon was saved.
        label: Label of the saved polygon (empty on failure).
        error: The rejection reason (``None`` on success).
    """

    ok: bool
    label: str = ""
    error: AnnotatorError | None = None


class AnnotationSession:
    """One user's annotation state for one raster."""

    def __init__(self, store: FeatureCollectionStore | None = None) -> None:
        self.capture = ClickCaptureStateMachine(store)

    @property
    def store(self) -> FeatureCollectionStore:
        return self.capture.store

    @property
    def status(self) -> Observable[Status]:
        return self.capture.status

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def on_hover(self, x: float, y: float) -> None:
        self.capture.hover((x, y))

    def on_left_click(self, x: float, y: float) -> None:
        self.capture.click((x, y))

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def request_clear(self) -> None:
        self.capture.clear()

    def request_commit(self, label: str, notes: Notes | str | None = None) -> CommitResult:
        """Commit the drawn polygon; failures are returned, not raised."""
        try:
            saved = self.capture.commit(label, notes)
        except AnnotatorError as exc:
            return CommitResult(ok=False, error=exc)
        return CommitResult(ok=True, label=saved)

    def set_notes(self, label: str, notes: Notes | str | None) -> None:
        """Replace the notes of a saved polygon.

        Raises:
            NotFoundError: If *label* is unknown.
        """
        self._guarded(lambda: self.store.set_notes(label, notes))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def labels(self) -> list[str]:
        """Saved labels in the order they were created."""
        return self.store.labels()

    def coordinates_of(self, label: str) -> list[Point]:
        """Closed ring of the saved polygon *label*.

        Raises:
            NotFoundError: If *label* is unknown.
        """
        return self.store.get(label).coordinates

    def view_options(self) -> list[str]:
        """Entries of the "view saved polygon" selector."""
        return [NO_SELECTION, *self.store.labels()]

    def preview(self, selection: str) -> list[Point]:
        """Coordinates to overlay for *selection*; empty for ``"none"``.

        Raises:
            NotFoundError: If *selection* is neither ``"none"`` nor a label.
        """
        if selection == NO_SELECTION:
            return []
        return self.coordinates_of(selection)

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------

    def serialize_all(self) -> str:
        """GeoJSON ``FeatureCollection`` text of every saved polygon.

        Raises:
            SerializationError: If a coordinate is not finite.
        """
        return self._guarded(lambda: serialize_collection(self.store))

    def serialize_one(self, label: str) -> str:
        """GeoJSON ``Feature`` text of the saved polygon *label*.

        Raises:
            NotFoundError: If *label* is unknown.
            SerializationError: If a coordinate is not finite.
        """
        return self._guarded(lambda: serialize_feature(self.store.get(label)))

    def import_geojson(self, text: str) -> list[str]:
        """Add every feature of a GeoJSON ``FeatureCollection`` to the store.

        Either all features are added or none are.

        Returns:
            Labels of the imported features, in document order.

        Raises:
            SerializationError: If *text* is not a supported collection.
            DuplicateKeyError: If a label is already in the store.
        """

        def _import() -> list[str]:
            features = parse_collection(text)
            for feature in features:
                if feature.label in self.store:
                    raise DuplicateKeyError(
                        feature.label,
                        f'Polygon label "{feature.label}" is already in use',
                        stage="import",
                    )
            for feature in features:
                self.store.add(feature)
            return [feature.label for feature in features]

        labels = self._guarded(_import)
        self.status.set(Status(f"Imported {len(labels)} polygon(s)", StatusLevel.SUCCESS))
        logger.info("GeoJSON imported | features=%d", len(labels))
        return labels

    def _guarded(self, action: Callable[[], _T]) -> _T:
        try:
            return action()
        except AnnotatorError as exc:
            self.capture.report_error(exc)
            raise
