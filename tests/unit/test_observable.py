"""Tests for the Observable publish/subscribe value holder."""

from __future__ import annotations

from raster_annotator.core.observable import Observable


class TestObservable:
    def test_initial_value(self) -> None:
        assert Observable(3).value == 3

    def test_set_notifies_in_order(self) -> None:
        seen: list[tuple[str, int]] = []
        obs = Observable(0)
        obs.subscribe(lambda v: seen.append(("first", v)))
        obs.subscribe(lambda v: seen.append(("second", v)))
        obs.set(5)
        assert seen == [("first", 5), ("second", 5)]
        assert obs.value == 5

    def test_unsubscribe(self) -> None:
        seen: list[int] = []
        obs = Observable(0)
        unsubscribe = obs.subscribe(seen.append)
        obs.set(1)
        unsubscribe()
        obs.set(2)
        assert seen == [1]
        assert obs.subscriber_count == 0

    def test_unsubscribe_twice_is_harmless(self) -> None:
        obs = Observable("x")
        unsubscribe = obs.subscribe(lambda _v: None)
        unsubscribe()
        unsubscribe()
        assert obs.subscriber_count == 0

    def test_notify_republishes_current_value(self) -> None:
        seen: list[str] = []
        obs = Observable("status")
        obs.subscribe(seen.append)
        obs.notify()
        assert seen == ["status"]
