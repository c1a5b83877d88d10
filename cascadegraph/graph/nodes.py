"""Node lifecycle management with synchronous cascade notification."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Protocol

from cascadegraph.errors import NodeConflict, NodeNotFound
from cascadegraph.obs.events import EventBus

from .ids import IdAllocator, NodeId, check_node_id

LOGGER = logging.getLogger(__name__)


class CascadeListener(Protocol):
    """Receiver of node lifecycle events.

    Hooks are invoked while the node store's lock is held and must not raise.
    """

    def on_node_deleted(self, node_id: NodeId) -> None:  # pragma: no cover - interface
        ...

    def on_node_renamed(self, old: NodeId, new: NodeId) -> None:  # pragma: no cover - interface
        ...


@dataclass(eq=False)
class NodeStore:
    """Own the set of live node identifiers.

    Deletion and rename notify every subscribed :class:`CascadeListener`
    exactly once, before the mutating call returns. The store's re-entrant
    ``lock`` covers both the mutation and the cascade, so no observer sharing
    the lock can see one without the other.
    """

    allocator: IdAllocator = field(default_factory=IdAllocator)
    event_bus: Optional[EventBus] = None
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _live: Dict[NodeId, None] = field(default_factory=dict, init=False, repr=False)
    _listeners: List[CascadeListener] = field(default_factory=list, init=False, repr=False)

    def subscribe(self, listener: CascadeListener) -> None:
        """Register ``listener`` for delete and rename notifications."""

        with self.lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: CascadeListener) -> None:
        with self.lock:
            self._listeners.remove(listener)

    def create_node(self) -> NodeId:
        """Allocate a never-before-used identifier and mark it live."""

        with self.lock:
            node_id = self.allocator.allocate()
            self._live[node_id] = None
            LOGGER.debug("Created node %s", node_id)
            self._emit("create_node", f"Created node {node_id}", [node_id])
            return node_id

    def delete_node(self, node_id: NodeId) -> None:
        """Delete ``node_id`` and cascade the deletion to every listener.

        Raises
        ------
        NodeNotFound
            If ``node_id`` is not live.
        """

        check_node_id(node_id)
        with self.lock:
            if node_id not in self._live:
                raise NodeNotFound(node_id)
            del self._live[node_id]
            for listener in list(self._listeners):
                listener.on_node_deleted(node_id)
            LOGGER.debug("Deleted node %s", node_id)
            self._emit("delete_node", f"Deleted node {node_id}", [node_id])

    def rename_node(self, old: NodeId, new: NodeId) -> None:
        """Replace the identity ``old`` by ``new`` and cascade the change.

        The node keeps its position in creation order. The allocator is moved
        past ``new`` so that :meth:`create_node` never returns it.

        Raises
        ------
        NodeNotFound
            If ``old`` is not live.
        NodeConflict
            If ``new`` is already live.
        """

        check_node_id(old)
        check_node_id(new)
        with self.lock:
            if old not in self._live:
                raise NodeNotFound(old)
            if new in self._live:
                raise NodeConflict(new)
            self._live = {(new if key == old else key): None for key in self._live}
            self.allocator.reserve(new)
            for listener in list(self._listeners):
                listener.on_node_renamed(old, new)
            LOGGER.debug("Renamed node %s to %s", old, new)
            self._emit("rename_node", f"Renamed node {old} to {new}", [old, new])

    def merge_node(self, old: NodeId, into: NodeId) -> None:
        """Fold ``old`` into the live node ``into``.

        ``old`` is retired and listeners receive the same rename notification
        as :meth:`rename_node`, so edges referencing ``old`` are rewritten to
        ``into`` and collapse with any pair that already exists. Merging a
        node into itself is a no-op.
        """

        check_node_id(old)
        check_node_id(into)
        with self.lock:
            for node_id in (old, into):
                if node_id not in self._live:
                    raise NodeNotFound(node_id)
            if old == into:
                return
            del self._live[old]
            for listener in list(self._listeners):
                listener.on_node_renamed(old, into)
            LOGGER.debug("Merged node %s into %s", old, into)
            self._emit("merge_node", f"Merged node {old} into {into}", [old, into])

    def is_live(self, node_id: NodeId) -> bool:
        return node_id in self._live

    def nodes(self) -> tuple[NodeId, ...]:
        """Return the live identifiers in creation order."""

        with self.lock:
            return tuple(self._live)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._live

    def __len__(self) -> int:
        return len(self._live)

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self.nodes())

    def _emit(self, action: str, msg: str, target_ids: List[NodeId]) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(level="info", msg=msg, action=action, target_ids=target_ids)
