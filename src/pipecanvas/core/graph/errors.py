"""Structural errors raised by :class:`pipecanvas.core.graph.model.Graph`.

These are caller errors (duplicate ids, dangling references, unknown ids) and
surface immediately. They subclass :class:`ValueError`, so a route that lets
one escape gets an HTTP 400 from the app-wide ``ValueError`` handler.

Cycles and stale deletion requests are *not* errors here: the validator and
the deletion engine report them as data.
"""

from __future__ import annotations


class GraphStructureError(ValueError):
    """Base class for invalid graph mutations."""


class DuplicateIdError(GraphStructureError):
    """A node or edge id is already present in the graph."""

    def __init__(self, kind: str, item_id: str) -> None:
        super().__init__(f"{kind.capitalize()} with ID {item_id} already exists")
        self.kind = kind
        self.item_id = item_id


class DanglingReferenceError(GraphStructureError):
    """An edge endpoint names a node that does not exist."""

    def __init__(self, edge_id: str, missing: list[str]) -> None:
        super().__init__(f"Edge {edge_id} references missing node(s): {', '.join(missing)}")
        self.edge_id = edge_id
        self.missing = missing


class NotFoundError(GraphStructureError):
    """The requested node or edge id is absent."""

    def __init__(self, kind: str, item_id: str) -> None:
        super().__init__(f"{kind.capitalize()} with ID {item_id} not found")
        self.kind = kind
        self.item_id = item_id


class CycleError(GraphStructureError):
    """A topological order was requested for a graph that contains a cycle."""

    def __init__(self, unresolved: list[str]) -> None:
        super().__init__(f"Cycle detected among nodes: {', '.join(unresolved)}")
        self.unresolved = unresolved


__all__ = [
    "CycleError",
    "DanglingReferenceError",
    "DuplicateIdError",
    "GraphStructureError",
    "NotFoundError",
]
