"""Data model for the self-referential node/edge schema."""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Tuple

from cascadegraph.config import get_bool

from .ids import NodeId

NO_IDENTIFIER_REASON = (
    "The underlying table does not contain a valid unique identifier and can "
    "therefore currently not be handled"
)


class EdgeKey(NamedTuple):
    """Composite key of an edge row; the pair of endpoints is the identity."""

    a: NodeId
    b: NodeId

    def touches(self, node_id: NodeId) -> bool:
        return self.a == node_id or self.b == node_id

    def replace_endpoint(self, old: NodeId, new: NodeId) -> "EdgeKey":
        return EdgeKey(new if self.a == old else self.a, new if self.b == old else self.b)


@dataclass(frozen=True)
class EdgePolicy:
    """Rules governing which pairs form distinct, admissible edges."""

    directed: bool = True
    allow_self_loops: bool = True

    @classmethod
    def from_env(cls) -> "EdgePolicy":
        """Build a policy from ``CASCADEGRAPH_*`` environment settings."""

        return cls(
            directed=get_bool("CASCADEGRAPH_DIRECTED", True),
            allow_self_loops=get_bool("CASCADEGRAPH_ALLOW_SELF_LOOPS", True),
        )

    def canonical(self, a: NodeId, b: NodeId) -> EdgeKey:
        """Return the stored key for the pair ``(a, b)``.

        Directed edges are stored as given. Undirected edges are stored with
        the smaller identifier first so that both orientations collapse.
        """

        if self.directed or a <= b:
            return EdgeKey(a, b)
        return EdgeKey(b, a)


@dataclass(frozen=True)
class ModelIdentity:
    """Describe whether rows of a table can be addressed individually.

    A table is usable by external client tooling only when it has a primary
    key or at least one unique field. Tables lacking both, but carrying
    scalar columns, are implicitly ignored.
    """

    name: str
    scalar_fields: Tuple[str, ...]
    primary_key: Tuple[str, ...] = ()
    unique_fields: Tuple[str, ...] = ()
    explicit_ignore: bool = False

    @property
    def has_usable_identifier(self) -> bool:
        return bool(self.primary_key) or bool(self.unique_fields)

    @property
    def ignored(self) -> bool:
        implicit_ignore = not self.has_usable_identifier and len(self.scalar_fields) > 0
        return self.explicit_ignore or implicit_ignore

    @property
    def reason(self) -> str | None:
        if not self.ignored:
            return None
        if not self.has_usable_identifier:
            return NO_IDENTIFIER_REASON
        return "The table is explicitly ignored"

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "scalar_fields": list(self.scalar_fields),
            "primary_key": list(self.primary_key),
            "unique_fields": list(self.unique_fields),
            "has_usable_identifier": self.has_usable_identifier,
            "ignored": self.ignored,
            "reason": self.reason,
        }


NODE_MODEL = ModelIdentity(name="nodes", scalar_fields=("id",), primary_key=("id",))
EDGE_MODEL = ModelIdentity(name="_nodes", scalar_fields=("node_a", "node_b"))


__all__ = [
    "EDGE_MODEL",
    "EdgeKey",
    "EdgePolicy",
    "ModelIdentity",
    "NODE_MODEL",
    "NO_IDENTIFIER_REASON",
]
