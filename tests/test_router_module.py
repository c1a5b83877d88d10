"""Tests for :mod:`cascadegraph.router`."""

from __future__ import annotations

import pytest

from cascadegraph.api import CascadeGraphApp
from cascadegraph.graph.model import EdgePolicy
from cascadegraph.router import ActionRouter


def test_router_dispatches_registered_handler_to_real_store():
    app = CascadeGraphApp(policy=EdgePolicy())

    result = app.router.dispatch("create_node", {})

    assert result == {"node_id": 1}
    assert app.node_store.is_live(1)


def test_router_lists_default_actions():
    app = CascadeGraphApp(policy=EdgePolicy())
    assert app.router.actions() == (
        "add_edge",
        "create_node",
        "delete_node",
        "list_edges",
        "merge_node",
        "neighbors",
        "remove_edge",
        "rename_node",
        "row_identity",
    )


def test_router_dispatch_missing_action_raises():
    router = ActionRouter()
    with pytest.raises(KeyError, match="unknown_action"):
        router.dispatch("unknown_action", {})


def test_router_refuses_duplicate_registration():
    router = ActionRouter()
    router.register("noop", lambda params: {})
    with pytest.raises(ValueError):
        router.register("noop", lambda params: {})
