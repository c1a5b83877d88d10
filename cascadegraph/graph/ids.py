"""Identifier allocation and timestamp helpers."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field

NodeId = int


def check_node_id(value: object) -> NodeId:
    """Return ``value`` unchanged if it is a valid node identifier."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Node identifiers must be integers, got {type(value).__name__}")
    return value


@dataclass
class IdAllocator:
    """Monotonic identifier source with auto-increment semantics.

    Identifiers start at ``start`` and are never handed out twice. Calling
    :meth:`reserve` with an externally chosen identifier moves the counter
    past it so later allocations cannot collide.
    """

    start: int = 1
    _next: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._next = max(self._next, self.start)

    def allocate(self) -> NodeId:
        value = self._next
        self._next += 1
        return value

    def reserve(self, node_id: NodeId) -> None:
        if node_id >= self._next:
            self._next = node_id + 1

    @property
    def peek(self) -> NodeId:
        """The identifier the next :meth:`allocate` call will return."""

        return self._next


def utc_now() -> str:
    """Return the current UTC time formatted as an ISO 8601 string."""

    return _dt.datetime.now(_dt.timezone.utc).isoformat()
