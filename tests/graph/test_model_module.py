"""Tests covering :mod:`cascadegraph.graph.model`."""

from __future__ import annotations

from cascadegraph.graph.model import (
    EDGE_MODEL,
    NODE_MODEL,
    NO_IDENTIFIER_REASON,
    EdgeKey,
    EdgePolicy,
    ModelIdentity,
)


def test_edge_key_behaves_like_a_pair():
    key = EdgeKey(1, 2)
    assert key == (1, 2)
    assert key.touches(2) and not key.touches(3)
    assert key.replace_endpoint(1, 5) == (5, 2)
    assert EdgeKey(1, 1).replace_endpoint(1, 4) == (4, 4)


def test_directed_policy_keeps_orientation():
    policy = EdgePolicy()
    assert policy.canonical(3, 1) == (3, 1)


def test_undirected_policy_orders_endpoints():
    policy = EdgePolicy(directed=False)
    assert policy.canonical(3, 1) == (1, 3)
    assert policy.canonical(1, 3) == (1, 3)


def test_policy_from_env(monkeypatch):
    monkeypatch.setenv("CASCADEGRAPH_DIRECTED", "false")
    monkeypatch.setenv("CASCADEGRAPH_ALLOW_SELF_LOOPS", "0")
    assert EdgePolicy.from_env() == EdgePolicy(directed=False, allow_self_loops=False)


def test_edge_table_has_no_usable_identifier():
    assert not EDGE_MODEL.has_usable_identifier
    assert EDGE_MODEL.ignored
    assert EDGE_MODEL.reason == NO_IDENTIFIER_REASON


def test_node_table_is_addressable():
    assert NODE_MODEL.has_usable_identifier
    assert not NODE_MODEL.ignored
    assert NODE_MODEL.reason is None


def test_unique_field_counts_as_identifier_and_explicit_ignore_wins():
    unique = ModelIdentity(name="t", scalar_fields=("a",), unique_fields=("a",))
    assert unique.has_usable_identifier and not unique.ignored

    explicit = ModelIdentity(name="t", scalar_fields=("id",), primary_key=("id",), explicit_ignore=True)
    assert explicit.ignored
    assert explicit.reason == "The table is explicitly ignored"


def test_table_without_fields_is_not_implicitly_ignored():
    empty = ModelIdentity(name="empty", scalar_fields=())
    assert not empty.ignored


def test_identity_payload():
    payload = EDGE_MODEL.to_payload()
    assert payload["scalar_fields"] == ["node_a", "node_b"]
    assert payload["has_usable_identifier"] is False
    assert payload["ignored"] is True
