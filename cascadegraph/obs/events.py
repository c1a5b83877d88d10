"""Append-only audit trail of store mutations."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable, List

from cascadegraph.graph.ids import utc_now


@dataclass
class Event:
    """A single recorded mutation."""

    ts: str
    level: str
    msg: str
    action: str | None = None
    target_ids: List[int] = field(default_factory=list)
    extras: dict | None = None

    def to_payload(self) -> dict:
        return asdict(self)


@dataclass
class EventBus:
    """In-memory event log shared by the node and edge stores."""

    events: List[Event] = field(default_factory=list)

    def emit(
        self,
        *,
        level: str,
        msg: str,
        action: str | None = None,
        target_ids: Iterable[int] | None = None,
        extras: dict | None = None,
    ) -> Event:
        """Create and store a new :class:`Event`."""

        event = Event(
            ts=utc_now(),
            level=level,
            msg=msg,
            action=action,
            target_ids=list(target_ids or []),
            extras=extras,
        )
        self.events.append(event)
        return event

    def history(self, *, action: str | None = None) -> Iterable[Event]:
        """Return the chronological history, optionally filtered by ``action``."""

        if action is None:
            return tuple(self.events)
        return tuple(event for event in self.events if event.action == action)

    def since(self, index: int) -> List[Event]:
        """Return events recorded after the first ``index`` entries."""

        return self.events[index:]
