"""Graph subpackage containing the node and edge stores."""

from .edges import EdgeSnapshot, EdgeStore
from .ids import IdAllocator, NodeId
from .model import EDGE_MODEL, NODE_MODEL, EdgeKey, EdgePolicy, ModelIdentity
from .nodes import CascadeListener, NodeStore
from .query import QueryService

__all__ = [
    "CascadeListener",
    "EDGE_MODEL",
    "EdgeKey",
    "EdgePolicy",
    "EdgeSnapshot",
    "EdgeStore",
    "IdAllocator",
    "ModelIdentity",
    "NODE_MODEL",
    "NodeId",
    "NodeStore",
    "QueryService",
]
