"""Click capture state machine.

Turns pointer events on the heatmap into saved polygons::

    IDLE ──click──▶ DRAWING ──click──▶ DRAWING
      ▲                │
      └──commit/clear──┘

``hover`` only moves the observed pointer position. ``commit`` closes the
buffered vertices into a ring, stores a new ``PolygonFeature`` under the
given label and starts a fresh buffer. A rejected commit leaves both the
buffer and the store untouched so the user can correct the input.

Pointer position, buffered vertices and the status message are exposed
as ``Observable`` values for the widget surface to render.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from raster_annotator.core.exceptions import (
    AnnotatorError,
    DuplicateKeyError,
    ValidationError,
)
from raster_annotator.core.observable import Observable
from raster_annotator.models.collection import FeatureCollectionStore
from raster_annotator.models.feature import PolygonFeature
from raster_annotator.models.geometry import DraftVertices, Point, as_point

if TYPE_CHECKING:
    from collections.abc import Sequence

    from raster_annotator.models.notes import Notes

logger = logging.getLogger("raster_annotator.interaction.click_capture")


class CaptureState(enum.Enum):
    """Whether a polygon is currently being drawn."""

    IDLE = "idle"
    DRAWING = "drawing"


class StatusLevel(enum.Enum):
    """Severity of the status message shown under the Save control."""

    NONE = "none"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Status:
    """Human-readable status message.

    Attributes:
        text: Message text; empty when nothing is reported.
        level: Severity, used by the viewer to pick the text color.
    """

    text: str = ""
    level: StatusLevel = StatusLevel.NONE


class ClickCaptureStateMachine:
    """Accumulate clicked vertices and commit them as labelled polygons.

    Attributes:
        store: Collection that receives committed features.
        pointer: Last hovered raster-space position.
        vertices: Snapshot of the in-progress vertex buffer.
        status: Last status message.
    """

    def __init__(self, store: FeatureCollectionStore | None = None) -> None:
        self.store = store if store is not None else FeatureCollectionStore()
        self._buffer = DraftVertices()
        self.pointer: Observable[Point] = Observable((0.0, 0.0))
        self.vertices: Observable[tuple[Point, ...]] = Observable(())
        self.status: Observable[Status] = Observable(Status())

    @property
    def state(self) -> CaptureState:
        return CaptureState.DRAWING if self._buffer else CaptureState.IDLE

    @property
    def buffer(self) -> tuple[Point, ...]:
        """The clicked vertices not yet committed."""
        return self._buffer.points

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def hover(self, point: Sequence[float]) -> None:
        self.pointer.set(as_point(point))

    def click(self, point: Sequence[float]) -> None:
        self._buffer.append(point)
        logger.debug("Vertex added | point=%s | vertices=%d", point, len(self._buffer))
        self.vertices.set(self._buffer.points)

    def clear(self) -> None:
        """Drop the in-progress vertices and the status message."""
        self._buffer.clear()
        self.vertices.set(())
        self.status.set(Status())

    def commit(self, label: str, notes: Notes | str | None = None) -> str:
        """Save the buffered vertices as a closed polygon named *label*.

        Args:
            label: Unique, non-empty polygon label.
            notes: Optional markdown notes for the feature.

        Returns:
            The label of the stored feature.

        Raises:
            ValidationError: Fewer than 3 vertices are buffered, or
                *label* is empty.
            DuplicateKeyError: *label* is already in the store.
        """
        try:
            ring = self._buffer.close()
            if not label:
                msg = "Polygon label must not be empty"
                raise ValidationError(msg, code="EMPTY_LABEL")
            if label in self.store:
                raise DuplicateKeyError(label, f'Polygon label "{label}" is already in use')
            feature = PolygonFeature(label, ring, notes)
            self.store.insert(label, feature)
        except AnnotatorError as exc:
            self.report_error(exc)
            raise

        self._buffer.clear()
        self.vertices.set(())
        self.status.set(Status(f'Polygon Saved: "{label}"', StatusLevel.SUCCESS))
        logger.info(
            "Polygon saved | label=%s | vertices=%d | bounds=%s",
            label,
            feature.vertex_count,
            feature.ring.bounds,
        )
        return label

    # ------------------------------------------------------------------
    # Helpers for the widget surface
    # ------------------------------------------------------------------

    def is_label_available(self, label: str) -> bool:
        """Label-input validator: non-empty and not already used."""
        return bool(label) and label not in self.store

    def closing_segment(self) -> list[Point]:
        """``[first, last]`` of the buffer, drawn dashed as the closing edge."""
        return self._buffer.closing_segment()

    def report_error(self, exc: AnnotatorError) -> None:
        """Show *exc* as an error status and log it."""
        logger.warning("%s | code=%s | stage=%s", exc.message, exc.code, exc.stage)
        self.status.set(Status(exc.message, StatusLevel.ERROR))
