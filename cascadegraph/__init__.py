"""cascadegraph package initialization.

Exposes the application facade and the stores implementing a self-join of
nodes whose edges cascade on node deletion and rename.
"""

from .api import CascadeGraphApp, cascadegraph_tool
from .errors import CascadeGraphError, NodeConflict, NodeNotFound, RowIdentityUnavailable, SelfLoopRejected
from .graph import EdgePolicy, EdgeStore, NodeStore

__all__ = [
    "CascadeGraphApp",
    "CascadeGraphError",
    "EdgePolicy",
    "EdgeStore",
    "NodeConflict",
    "NodeNotFound",
    "NodeStore",
    "RowIdentityUnavailable",
    "SelfLoopRejected",
    "cascadegraph_tool",
]
