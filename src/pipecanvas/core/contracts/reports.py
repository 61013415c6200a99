"""Report contracts returned by the topology engine.

Validation and deletion never raise for expected outcomes (cycles, stale ids);
they return one of these models instead so callers can branch on data.

- :class:`DAGValidation`      : verdict of the Kahn's-algorithm check.
- :class:`GraphStats`         : structural metrics (components, isolation, depth).
- :class:`DeletionCheck`      : advisory pre-deletion warnings.
- :class:`NodeDeletionResult` / :class:`EdgeDeletionResult` : outcome of a
  single removal, including the resulting collections.
- :class:`BatchDeletionResult`: outcome of a multi-id removal with the
  found / not-found partition.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pipecanvas.core.contracts.graph import Edge, Node

#: Error message reported when an edge endpoint names a missing node.
INVALID_EDGE_CONNECTION = "Invalid edge connection"
#: Error message reported when Kahn's algorithm cannot drain every node.
CYCLE_DETECTED = "Cycle detected in graph"


class DAGValidation(BaseModel):
    """Outcome of :func:`pipecanvas.core.graph.validation.validate_dag`."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error: str | None = None


class GraphStats(BaseModel):
    """Direction-independent structural metrics of a graph snapshot.

    ``max_depth`` is the longest path measured in edges. It is ``None`` when
    the graph is not a DAG (a cycle or a dangling edge makes depth undefined).
    On the wire the keys are camelCase (``connectedComponents``), matching
    :class:`~pipecanvas.core.contracts.submission.ParseResponse`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    node_count: int = Field(default=0, alias="nodeCount")
    edge_count: int = Field(default=0, alias="edgeCount")
    connected_components: int = Field(default=0, alias="connectedComponents")
    max_depth: int | None = Field(default=0, alias="maxDepth")
    has_isolated_nodes: bool = Field(default=False, alias="hasIsolatedNodes")


class DeletionCheck(BaseModel):
    """Advisory result of a pre-deletion check.

    ``can_delete`` is ``False`` only when the target id does not exist;
    warnings never block the deletion.
    """

    can_delete: bool
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
    node: Node | None = None
    edge: Edge | None = None
    source_node: Node | None = None
    target_node: Node | None = None
    incoming_edges: list[Edge] = Field(default_factory=list)
    outgoing_edges: list[Edge] = Field(default_factory=list)


class NodeDeletionResult(BaseModel):
    """Outcome of deleting one node together with its incident edges."""

    success: bool
    node_id: str
    error: str | None = None
    deleted_node: Node | None = None
    deleted_edges: list[Edge] = Field(default_factory=list)
    remaining_nodes: list[Node] = Field(default_factory=list)
    remaining_edges: list[Edge] = Field(default_factory=list)


class EdgeDeletionResult(BaseModel):
    """Outcome of deleting a single edge (or every edge between two nodes)."""

    success: bool
    edge_id: str | None = None
    error: str | None = None
    deleted_edges: list[Edge] = Field(default_factory=list)
    remaining_edges: list[Edge] = Field(default_factory=list)

    @property
    def deleted_edge(self) -> Edge | None:
        """Return the first removed edge, if any."""
        return self.deleted_edges[0] if self.deleted_edges else None


class BatchDeletionResult(BaseModel):
    """Outcome of a multi-id deletion.

    ``remaining_nodes`` is empty for edge-only batches, where nodes are not
    part of the operation.
    """

    success: bool
    error: str | None = None
    deleted_nodes: list[Node] = Field(default_factory=list)
    deleted_edges: list[Edge] = Field(default_factory=list)
    remaining_nodes: list[Node] = Field(default_factory=list)
    remaining_edges: list[Edge] = Field(default_factory=list)
    not_found_ids: list[str] = Field(default_factory=list)


__all__ = [
    "CYCLE_DETECTED",
    "INVALID_EDGE_CONNECTION",
    "BatchDeletionResult",
    "DAGValidation",
    "DeletionCheck",
    "EdgeDeletionResult",
    "GraphStats",
    "NodeDeletionResult",
]
