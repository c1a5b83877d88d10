"""Tests for :mod:`cascadegraph.graph.ids`."""

from __future__ import annotations

import pytest

from cascadegraph.graph import ids


def test_allocator_counts_from_start():
    allocator = ids.IdAllocator(start=10)
    assert allocator.peek == 10
    assert [allocator.allocate(), allocator.allocate()] == [10, 11]


def test_reserve_only_moves_forward():
    allocator = ids.IdAllocator()
    allocator.reserve(5)
    assert allocator.allocate() == 6
    allocator.reserve(2)
    assert allocator.allocate() == 7


@pytest.mark.parametrize("value", ["1", 1.0, None, False])
def test_check_node_id_rejects_non_integers(value):
    with pytest.raises(TypeError):
        ids.check_node_id(value)


def test_utc_now_returns_iso_format():
    timestamp = ids.utc_now()
    assert "T" in timestamp and timestamp.endswith("+00:00")
