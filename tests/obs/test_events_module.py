"""Tests for :mod:`cascadegraph.obs.events`."""

from __future__ import annotations

from cascadegraph.obs.events import EventBus


def test_event_bus_emit_and_history():
    bus = EventBus()
    event = bus.emit(level="info", msg="Test", action="act", target_ids=[1], extras={"detail": 1})

    assert event.msg == "Test"
    assert list(bus.history()) == [event]
    assert event.to_payload()["target_ids"] == [1]


def test_history_filters_by_action_and_since_slices():
    bus = EventBus()
    bus.emit(level="info", msg="a", action="create_node")
    second = bus.emit(level="info", msg="b", action="delete_node")

    assert bus.history(action="delete_node") == (second,)
    assert bus.since(1) == [second]
    assert bus.since(2) == []
