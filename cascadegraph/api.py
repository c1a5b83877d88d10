"""Public API surface for cascadegraph."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from cascadegraph.graph.edges import EdgeSnapshot, EdgeStore
from cascadegraph.graph.ids import NodeId
from cascadegraph.graph.model import EdgePolicy, ModelIdentity, NODE_MODEL
from cascadegraph.graph.nodes import NodeStore
from cascadegraph.graph.query import QueryService
from cascadegraph.obs.events import EventBus
from cascadegraph.router import ActionRouter


@dataclass
class CascadeGraphApp:
    """Container wiring the node store, edge store and event bus together."""

    policy: EdgePolicy = field(default_factory=EdgePolicy.from_env)
    event_bus: EventBus = field(default_factory=EventBus)
    node_store: Optional[NodeStore] = None
    edge_store: Optional[EdgeStore] = None
    router: ActionRouter = field(default_factory=ActionRouter)

    def __post_init__(self) -> None:
        if self.node_store is None:
            self.node_store = NodeStore(event_bus=self.event_bus)
        if self.edge_store is None:
            self.edge_store = EdgeStore(
                node_store=self.node_store,
                policy=self.policy,
                event_bus=self.event_bus,
            )
        elif self.edge_store.node_store is not self.node_store:
            raise ValueError("edge_store must be bound to the application's node_store")
        self.query_service = QueryService(self.edge_store)
        self._register_default_actions()

    def handle(self, payload: dict) -> dict:
        """Dispatch an API payload and return a canonical response."""

        action = payload.get("action")
        if not action:
            raise KeyError("payload must include 'action'")
        params = payload.get("params", {})
        mark = len(self.event_bus.events)
        result = self.router.dispatch(action, params)
        return {
            "ok": True,
            "result": result,
            "events": [event.to_payload() for event in self.event_bus.since(mark)],
        }

    # -- direct API --------------------------------------------------------

    def create_node(self) -> NodeId:
        return self.node_store.create_node()

    def delete_node(self, node_id: NodeId) -> None:
        self.node_store.delete_node(node_id)

    def rename_node(self, old: NodeId, new: NodeId) -> None:
        self.node_store.rename_node(old, new)

    def merge_node(self, old: NodeId, into: NodeId) -> None:
        self.node_store.merge_node(old, into)

    def add_edge(self, a: NodeId, b: NodeId) -> None:
        self.edge_store.add_edge(a, b)

    def remove_edge(self, a: NodeId, b: NodeId) -> bool:
        return self.edge_store.remove_edge(a, b)

    def list_edges(self) -> EdgeSnapshot:
        return self.edge_store.list_edges()

    def row_identity(self, table: str = "edges") -> ModelIdentity:
        """Return the identity description of ``"nodes"`` or ``"edges"``."""

        if table == "nodes":
            return NODE_MODEL
        if table == "edges":
            return self.edge_store.row_identity()
        raise ValueError(f"Unknown table: {table}")

    # -- action handlers ---------------------------------------------------

    def _register_default_actions(self) -> None:
        self.router.register("create_node", self._handle_create_node)
        self.router.register("delete_node", self._handle_delete_node)
        self.router.register("rename_node", self._handle_rename_node)
        self.router.register("merge_node", self._handle_merge_node)
        self.router.register("add_edge", self._handle_add_edge)
        self.router.register("remove_edge", self._handle_remove_edge)
        self.router.register("list_edges", self._handle_list_edges)
        self.router.register("neighbors", self._handle_neighbors)
        self.router.register("row_identity", self._handle_row_identity)

    def _handle_create_node(self, params: dict) -> dict:
        return {"node_id": self.create_node()}

    def _handle_delete_node(self, params: dict) -> dict:
        node_id = _require(params, "node_id")
        self.delete_node(node_id)
        return {"node_id": node_id}

    def _handle_rename_node(self, params: dict) -> dict:
        old = _require(params, "old")
        new = _require(params, "new")
        self.rename_node(old, new)
        return {"old": old, "new": new}

    def _handle_merge_node(self, params: dict) -> dict:
        old = _require(params, "old")
        into = _require(params, "into")
        self.merge_node(old, into)
        return {"old": old, "into": into}

    def _handle_add_edge(self, params: dict) -> dict:
        a, b = _require(params, "a"), _require(params, "b")
        self.add_edge(a, b)
        return {"edge": [a, b]}

    def _handle_remove_edge(self, params: dict) -> dict:
        a, b = _require(params, "a"), _require(params, "b")
        return {"removed": self.remove_edge(a, b)}

    def _handle_list_edges(self, params: dict) -> dict:
        return {"edges": _serialize_edges(self.list_edges())}

    def _handle_neighbors(self, params: dict) -> dict:
        node_id = _require(params, "node_id")
        hop = int(params.get("hop", 1))
        return {"items": list(self.query_service.neighbors(node_id, hop=hop))}

    def _handle_row_identity(self, params: dict) -> dict:
        return self.row_identity(params.get("table", "edges")).to_payload()


def _require(params: dict, key: str):
    if params.get(key) is None:
        raise KeyError(f"'{key}' is required")
    return params[key]


def _serialize_edges(snapshot: EdgeSnapshot) -> List[List[NodeId]]:
    return [[edge.a, edge.b] for edge in snapshot]


def cascadegraph_tool(payload: dict, *, app: CascadeGraphApp | None = None) -> dict:
    """Handle ``payload`` on ``app`` or on a fresh application instance."""

    return (app or CascadeGraphApp()).handle(payload)


__all__ = ["CascadeGraphApp", "cascadegraph_tool"]
