"""Vertex containers for polygon capture.

Two distinct types model the two phases of a polygon's life:

- ``DraftVertices``: the open, mutable buffer of clicked points while the
  user is still drawing.
- ``ClosedRing``: the immutable, closed ring of a saved polygon. The
  closure invariant (at least 3 distinct clicks plus a repeated first
  point) is checked at construction, so every ``ClosedRing`` is valid.

All coordinates are raster-space ``(x, y)`` pairs of Python floats.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from shapely.geometry import Polygon

from raster_annotator.core.constants import MIN_POLYGON_VERTICES
from raster_annotator.core.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

Point = tuple[float, float]


def as_point(value: Sequence[float]) -> Point:
    """Coerce an ``(x, y)`` pair (tuple, list, numpy row) to a ``Point``.

    Raises:
        ValidationError: If *value* does not hold exactly two numbers.
    """
    try:
        x, y = value
        return (float(x), float(y))
    except (TypeError, ValueError) as exc:
        msg = f"Point must be an (x, y) pair of numbers, got {value!r}"
        raise ValidationError(msg, stage="geometry", code="INVALID_POINT") from exc


class DraftVertices:
    """Ordered, mutable buffer of clicked vertices that is not yet a polygon."""

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Sequence[float]] = ()) -> None:
        self._points: list[Point] = [as_point(p) for p in points]

    def append(self, point: Sequence[float]) -> None:
        self._points.append(as_point(point))

    def clear(self) -> None:
        self._points.clear()

    @property
    def points(self) -> tuple[Point, ...]:
        """Snapshot of the buffered vertices."""
        return tuple(self._points)

    def closing_segment(self) -> list[Point]:
        """Return ``[first, last]``, the segment that would close the ring.

        Empty when no vertex has been clicked yet.
        """
        if not self._points:
            return []
        return [self._points[0], self._points[-1]]

    def close(self) -> ClosedRing:
        """Close the buffer into a ring by repeating the first vertex.

        The buffer itself is left untouched.

        Raises:
            ValidationError: If fewer than ``MIN_POLYGON_VERTICES`` are buffered.
        """
        if len(self._points) < MIN_POLYGON_VERTICES:
            msg = f"Polygon must have at least {MIN_POLYGON_VERTICES} vertices"
            raise ValidationError(msg, code="TOO_FEW_VERTICES")
        return ClosedRing.from_vertices(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(tuple(self._points))

    def __bool__(self) -> bool:
        return bool(self._points)

    def __repr__(self) -> str:
        return f"DraftVertices({self._points!r})"


@dataclass(frozen=True, slots=True)
class ClosedRing:
    """Immutable closed ring: ``points[0] == points[-1]``, at least 4 points.

    Attributes:
        points: Ring vertices including the repeated closing point.
    """

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        points = tuple(as_point(p) for p in self.points)
        if len(points) < MIN_POLYGON_VERTICES + 1:
            msg = (
                f"Ring must have at least {MIN_POLYGON_VERTICES + 1} points "
                f"({MIN_POLYGON_VERTICES} vertices plus closure), got {len(points)}"
            )
            raise ValidationError(msg, stage="geometry", code="RING_TOO_SHORT")
        if points[0] != points[-1]:
            msg = f"Ring is not closed: first {points[0]} != last {points[-1]}"
            raise ValidationError(msg, stage="geometry", code="RING_NOT_CLOSED")
        object.__setattr__(self, "points", points)

    @classmethod
    def from_vertices(cls, vertices: Iterable[Sequence[float]]) -> ClosedRing:
        """Build a ring from open vertices by appending the first one."""
        points = [as_point(v) for v in vertices]
        if not points:
            return cls(())
        return cls((*points, points[0]))

    @property
    def vertex_count(self) -> int:
        """Number of vertices, not counting the closing point."""
        return len(self.points) - 1

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Bounding box ``(min_x, min_y, max_x, max_y)``."""
        min_x, min_y, max_x, max_y = self.to_shapely().bounds
        return (float(min_x), float(min_y), float(max_x), float(max_y))

    @property
    def area(self) -> float:
        """Enclosed area; self-intersecting lobes of opposite winding cancel."""
        return float(self.to_shapely().area)

    def to_shapely(self) -> Polygon:
        """Return the ring as a shapely ``Polygon`` (no validity check)."""
        return Polygon(self.points)

    def to_list(self) -> list[list[float]]:
        """Return the ring as GeoJSON-style ``[[x, y], ...]``."""
        return [[x, y] for x, y in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)
