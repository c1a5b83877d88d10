"""Read-only neighbourhood queries over the edge set."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .edges import EdgeStore
from .ids import NodeId


@dataclass
class QueryService:
    """Provide adjacency lookups on top of the edge store's ``networkx`` graph.

    Under an undirected policy successors and predecessors coincide.
    """

    edge_store: EdgeStore

    @property
    def _directed(self) -> bool:
        return self.edge_store.policy.directed

    def successors(self, node_id: NodeId) -> List[NodeId]:
        graph = self.edge_store.graph
        if node_id not in graph:
            return []
        if not self._directed:
            return self._undirected_neighbors(node_id)
        return sorted(graph.successors(node_id))

    def predecessors(self, node_id: NodeId) -> List[NodeId]:
        graph = self.edge_store.graph
        if node_id not in graph:
            return []
        if not self._directed:
            return self._undirected_neighbors(node_id)
        return sorted(graph.predecessors(node_id))

    def degree(self, node_id: NodeId) -> int:
        """Number of stored edges touching ``node_id``; a self-loop counts once."""

        return len(self.edge_store.edges_of(node_id))

    def neighbors(self, node_id: NodeId, *, hop: int = 1) -> Iterable[NodeId]:
        """Yield nodes reachable from ``node_id`` in at most ``hop`` steps."""

        if node_id not in self.edge_store.graph:
            return
        visited = {node_id}
        frontier = [node_id]
        for _ in range(hop):
            next_frontier = []
            for current in frontier:
                for neighbor in self.successors(current):
                    if neighbor in visited:
                        continue
                    visited.add(neighbor)
                    next_frontier.append(neighbor)
                    yield neighbor
            frontier = next_frontier

    def _undirected_neighbors(self, node_id: NodeId) -> List[NodeId]:
        graph = self.edge_store.graph
        return sorted(set(graph.successors(node_id)) | set(graph.predecessors(node_id)))
