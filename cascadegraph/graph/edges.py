"""Edge storage keyed by endpoint pairs, kept consistent by node cascades."""
from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, overload

import networkx as nx

from cascadegraph.errors import NodeNotFound, RowIdentityUnavailable, SelfLoopRejected
from cascadegraph.obs.events import EventBus

from .ids import NodeId, check_node_id
from .model import EDGE_MODEL, EdgeKey, EdgePolicy, ModelIdentity
from .nodes import NodeStore

LOGGER = logging.getLogger(__name__)


class EdgeSnapshot(Sequence):
    """Immutable, re-iterable view of the edges at the time it was taken."""

    __slots__ = ("_edges",)

    def __init__(self, edges: Tuple[EdgeKey, ...]) -> None:
        self._edges = edges

    @overload
    def __getitem__(self, index: int) -> EdgeKey: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[EdgeKey, ...]: ...

    def __getitem__(self, index):
        return self._edges[index]

    def __iter__(self) -> Iterator[EdgeKey]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EdgeSnapshot):
            return self._edges == other._edges
        if isinstance(other, (list, tuple)):
            return list(self._edges) == list(other)
        return NotImplemented

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"{self.__class__.__name__}({list(self._edges)!r})"


@dataclass(eq=False)
class EdgeStore:
    """Set of edges between live nodes, stored in a :class:`networkx.DiGraph`.

    An edge has no identifier of its own; the canonical ``(a, b)`` pair is its
    key. The store subscribes to ``node_store`` on construction and shares its
    lock, so node mutations and their cascades are a single critical section.
    Each edge carries a ``seq`` attribute recording insertion order.
    """

    node_store: NodeStore
    policy: EdgePolicy = field(default_factory=EdgePolicy)
    event_bus: Optional[EventBus] = None
    graph: nx.DiGraph = field(default_factory=nx.DiGraph, repr=False)

    def __post_init__(self) -> None:
        self._seq = itertools.count()
        self.node_store.subscribe(self)

    @property
    def lock(self):
        return self.node_store.lock

    # -- mutations ---------------------------------------------------------

    def add_edge(self, a: NodeId, b: NodeId) -> None:
        """Insert the edge ``(a, b)`` unless it is already present.

        Raises
        ------
        NodeNotFound
            If either endpoint is not a live node.
        SelfLoopRejected
            If ``a == b`` and the policy forbids self-loops.
        """

        check_node_id(a)
        check_node_id(b)
        with self.lock:
            for node_id in (a, b):
                if not self.node_store.is_live(node_id):
                    raise NodeNotFound(node_id)
            if a == b and not self.policy.allow_self_loops:
                raise SelfLoopRejected(a)
            key = self.policy.canonical(a, b)
            if self.graph.has_edge(*key):
                return
            self.graph.add_edge(key.a, key.b, seq=next(self._seq))
            LOGGER.debug("Added edge %s -> %s", key.a, key.b)
            self._emit("add_edge", f"Added edge ({key.a}, {key.b})", list(key))

    def remove_edge(self, a: NodeId, b: NodeId) -> bool:
        """Remove ``(a, b)`` if present and report whether it was."""

        with self.lock:
            key = self.policy.canonical(a, b)
            if not self.graph.has_edge(*key):
                return False
            self.graph.remove_edge(*key)
            LOGGER.debug("Removed edge %s -> %s", key.a, key.b)
            self._emit("remove_edge", f"Removed edge ({key.a}, {key.b})", list(key))
            return True

    # -- cascade hooks -----------------------------------------------------

    def on_node_deleted(self, node_id: NodeId) -> None:
        """Drop every edge that has ``node_id`` as either endpoint."""

        if node_id not in self.graph:
            return
        removed = len(self._incident(node_id))
        self.graph.remove_node(node_id)
        LOGGER.debug("Cascade delete of node %s removed %d edge(s)", node_id, removed)
        self._emit(
            "cascade_delete",
            f"Removed {removed} edge(s) referencing node {node_id}",
            [node_id],
            extras={"removed": removed},
        )

    def on_node_renamed(self, old: NodeId, new: NodeId) -> None:
        """Rewrite every endpoint equal to ``old`` to ``new``.

        Rewritten pairs that collide with an existing pair are merged; the
        surviving edge keeps the earlier insertion position. Under a policy
        without self-loops, an edge that would become a self-loop is dropped.
        """

        if old not in self.graph:
            return
        incident = sorted(self._incident(old), key=lambda item: item[1])
        self.graph.remove_node(old)
        merged = dropped = 0
        for key, seq in incident:
            new_key = self.policy.canonical(*key.replace_endpoint(old, new))
            if new_key.a == new_key.b and not self.policy.allow_self_loops:
                dropped += 1
                continue
            if self.graph.has_edge(*new_key):
                data = self.graph.edges[new_key]
                data["seq"] = min(data["seq"], seq)
                merged += 1
                continue
            self.graph.add_edge(new_key.a, new_key.b, seq=seq)
        LOGGER.debug(
            "Cascade rename %s -> %s rewrote %d edge(s), merged %d, dropped %d",
            old,
            new,
            len(incident),
            merged,
            dropped,
        )
        self._emit(
            "cascade_rename",
            f"Rewrote {len(incident)} edge(s) from node {old} to node {new}",
            [old, new],
            extras={"rewritten": len(incident), "merged": merged, "dropped": dropped},
        )

    # -- reads -------------------------------------------------------------

    def list_edges(self) -> EdgeSnapshot:
        """Return a snapshot of the current edges in insertion order."""

        with self.lock:
            ordered = sorted(self.graph.edges(data="seq"), key=lambda item: item[2])
            return EdgeSnapshot(tuple(EdgeKey(a, b) for a, b, _ in ordered))

    def has_edge(self, a: NodeId, b: NodeId) -> bool:
        return self.graph.has_edge(*self.policy.canonical(a, b))

    def edges_of(self, node_id: NodeId) -> List[EdgeKey]:
        """Return the edges touching ``node_id`` in insertion order."""

        with self.lock:
            if node_id not in self.graph:
                return []
            return [key for key, _ in sorted(self._incident(node_id), key=lambda item: item[1])]

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return self.has_edge(*pair)

    def __len__(self) -> int:
        return self.graph.number_of_edges()

    # -- row identity ------------------------------------------------------

    def row_identity(self) -> ModelIdentity:
        """Describe the edge table for client tooling: it has no usable key."""

        return EDGE_MODEL

    def row_id(self, a: NodeId, b: NodeId) -> NodeId:
        """Edges cannot be assigned a stable row identity; always raises."""

        raise RowIdentityUnavailable(f"{EDGE_MODEL.reason} (edge ({a}, {b}))")

    def check_integrity(self) -> None:
        """Assert that every stored edge references two live nodes."""

        with self.lock:
            for node_id in self.graph.nodes:
                assert self.node_store.is_live(node_id), f"dangling node reference {node_id}"
            for a, b in self.graph.edges:
                assert self.policy.canonical(a, b) == (a, b), f"non-canonical edge ({a}, {b})"
                if not self.policy.allow_self_loops:
                    assert a != b, f"forbidden self-loop on {a}"

    # -- internal helpers --------------------------------------------------

    def _incident(self, node_id: NodeId) -> List[Tuple[EdgeKey, int]]:
        found = {}
        for a, b, seq in self.graph.out_edges(node_id, data="seq"):
            found[EdgeKey(a, b)] = seq
        for a, b, seq in self.graph.in_edges(node_id, data="seq"):
            found[EdgeKey(a, b)] = seq
        return list(found.items())

    def _emit(self, action: str, msg: str, target_ids: List[NodeId], extras: dict | None = None) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(level="info", msg=msg, action=action, target_ids=target_ids, extras=extras)
