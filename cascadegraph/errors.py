"""Exceptions raised by the cascadegraph stores."""
from __future__ import annotations


class CascadeGraphError(Exception):
    """Base class for recoverable, caller-visible store errors."""


class NodeNotFound(CascadeGraphError, KeyError):
    """An operation referenced a node identifier that is not currently live."""

    def __init__(self, node_id: int) -> None:
        super().__init__(f"Node '{node_id}' does not exist")
        self.node_id = node_id


class NodeConflict(CascadeGraphError, ValueError):
    """A rename target is already in use by a live node."""

    def __init__(self, node_id: int) -> None:
        super().__init__(f"Node '{node_id}' already exists")
        self.node_id = node_id


class SelfLoopRejected(CascadeGraphError, ValueError):
    """The edge policy forbids an edge from a node to itself."""

    def __init__(self, node_id: int) -> None:
        super().__init__(f"Self-loop on node '{node_id}' is not permitted")
        self.node_id = node_id


class RowIdentityUnavailable(CascadeGraphError, LookupError):
    """Rows of a table without a usable unique identifier cannot be addressed."""


__all__ = [
    "CascadeGraphError",
    "NodeConflict",
    "NodeNotFound",
    "RowIdentityUnavailable",
    "SelfLoopRejected",
]
