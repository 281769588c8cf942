"""Observable values: a minimal publish/subscribe channel.

The interaction layer exposes its mutable state (pointer position,
in-progress vertices, status message) through ``Observable`` instances.
Subscribers receive the new value on every ``set``; they never mutate
the publisher's state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable


T = TypeVar("T")


class Observable(Generic[T]):
    """Hold a value and notify subscribers whenever it is replaced.

    Example usage::

        status = Observable("")
        unsubscribe = status.subscribe(print)
        status.set("Polygon Saved")   # prints "Polygon Saved"
        unsubscribe()
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._observers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        """Return the current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify every subscriber in registration order."""
        self._value = value
        self.notify()

    def notify(self) -> None:
        """Re-publish the current value without changing it."""
        for observer in list(self._observers):
            observer(self._value)

    def subscribe(self, observer: Callable[[T], None]) -> Callable[[], None]:
        """Register *observer* and return a callable that unregisters it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    @property
    def subscriber_count(self) -> int:
        """Number of currently registered observers."""
        return len(self._observers)
