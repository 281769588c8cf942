"""Insertion-ordered, observable collection of polygon features.

The store is the single shared mutable entity of the annotator. Every
successful mutation publishes an immutable snapshot of the whole
collection to subscribers (for example the viewer's "view polygon"
selector), and is returned to the caller as well.

Example usage::

    store = FeatureCollectionStore()
    unsubscribe = store.subscribe(lambda snap: print(list(snap)))
    store.insert("A", feature)      # prints ['A']
    for label, feature in store.all():
        ...
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from raster_annotator.core.exceptions import DuplicateKeyError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

    from raster_annotator.models.feature import PolygonFeature
    from raster_annotator.models.notes import Notes

logger = logging.getLogger("raster_annotator.models.collection")


class FeatureView:
    """Live, restartable view over the ``(label, feature)`` pairs of a store.

    Each iteration reads the store's current contents; nothing is copied
    up front.
    """

    __slots__ = ("_features",)

    def __init__(self, features: dict[str, PolygonFeature]) -> None:
        self._features = features

    def __iter__(self) -> Iterator[tuple[str, PolygonFeature]]:
        yield from self._features.items()

    def __len__(self) -> int:
        return len(self._features)


class FeatureCollectionStore:
    """Mapping from label to ``PolygonFeature`` with unique, ordered keys."""

    def __init__(self, features: Iterable[PolygonFeature] = ()) -> None:
        self._features: dict[str, PolygonFeature] = {}
        self._observers: list[Callable[[Mapping[str, PolygonFeature]], None]] = []
        for feature in features:
            self._insert(feature.label, feature)

    # ------------------------------------------------------------------
    # Mutations (each publishes a snapshot)
    # ------------------------------------------------------------------

    def insert(self, label: str, feature: PolygonFeature) -> Mapping[str, PolygonFeature]:
        """Append *feature* under *label* and return the new snapshot.

        Raises:
            DuplicateKeyError: If *label* is already present. The existing
                entry is left untouched.
            ValidationError: If *label* differs from ``feature.label``.
        """
        self._insert(label, feature)
        logger.info("Feature inserted | label=%s | count=%d", label, len(self._features))
        return self._publish()

    def add(self, feature: PolygonFeature) -> Mapping[str, PolygonFeature]:
        """Insert *feature* under its own label."""
        return self.insert(feature.label, feature)

    def remove(self, label: str) -> Mapping[str, PolygonFeature]:
        """Delete the feature stored under *label* and return the new snapshot.

        Raises:
            NotFoundError: If *label* is not present.
        """
        if label not in self._features:
            raise NotFoundError(label, f"No polygon labelled {label!r}")
        del self._features[label]
        logger.info("Feature removed | label=%s | count=%d", label, len(self._features))
        return self._publish()

    def set_notes(self, label: str, notes: Notes | str | None) -> Mapping[str, PolygonFeature]:
        """Replace the notes of the feature under *label*.

        Raises:
            NotFoundError: If *label* is not present.
        """
        self.get(label).notes = notes
        return self._publish()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, label: str) -> PolygonFeature:
        """Return the feature stored under *label*.

        Raises:
            NotFoundError: If *label* is not present.
        """
        try:
            return self._features[label]
        except KeyError:
            raise NotFoundError(label, f"No polygon labelled {label!r}") from None

    def all(self) -> FeatureView:
        """Return a live view of ``(label, feature)`` pairs in insertion order."""
        return FeatureView(self._features)

    def labels(self) -> list[str]:
        """Return the labels in insertion order."""
        return list(self._features)

    def snapshot(self) -> Mapping[str, PolygonFeature]:
        """Return a read-only copy of the current label → feature mapping."""
        return MappingProxyType(dict(self._features))

    def __len__(self) -> int:
        return len(self._features)

    def __contains__(self, label: object) -> bool:
        return label in self._features

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._features))

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(
        self,
        observer: Callable[[Mapping[str, PolygonFeature]], None],
    ) -> Callable[[], None]:
        """Register *observer* for snapshots; return a callable that unregisters it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _insert(self, label: str, feature: PolygonFeature) -> None:
        if label != feature.label:
            msg = f"Key {label!r} does not match feature label {feature.label!r}"
            raise ValidationError(msg, stage="store", code="LABEL_MISMATCH")
        if label in self._features:
            raise DuplicateKeyError(label, f"Polygon label {label!r} is already in use")
        self._features[label] = feature

    def _publish(self) -> Mapping[str, PolygonFeature]:
        snapshot = self.snapshot()
        for observer in list(self._observers):
            observer(snapshot)
        return snapshot
