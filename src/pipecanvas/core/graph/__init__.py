"""Graph model and topology engine for pipeline canvases."""

from __future__ import annotations

from pipecanvas.core.graph.cycles import has_cycles
from pipecanvas.core.graph.deletion import (
    delete_all_edges_for_node,
    delete_edge_by_id,
    delete_edge_by_id_async,
    delete_edge_by_nodes,
    delete_multiple_edges,
    delete_multiple_nodes,
    delete_node_by_id,
    delete_node_by_id_async,
    validate_edge_deletion,
    validate_node_deletion,
)
from pipecanvas.core.graph.errors import (
    CycleError,
    DanglingReferenceError,
    DuplicateIdError,
    GraphStructureError,
    NotFoundError,
)
from pipecanvas.core.graph.ids import IdGenerator, SequentialIdGenerator, TimestampIdGenerator
from pipecanvas.core.graph.model import Graph
from pipecanvas.core.graph.stats import get_graph_stats
from pipecanvas.core.graph.validation import topological_order, validate_dag

__all__ = [
    "CycleError",
    "DanglingReferenceError",
    "DuplicateIdError",
    "Graph",
    "GraphStructureError",
    "IdGenerator",
    "NotFoundError",
    "SequentialIdGenerator",
    "TimestampIdGenerator",
    "delete_all_edges_for_node",
    "delete_edge_by_id",
    "delete_edge_by_id_async",
    "delete_edge_by_nodes",
    "delete_multiple_edges",
    "delete_multiple_nodes",
    "delete_node_by_id",
    "delete_node_by_id_async",
    "get_graph_stats",
    "has_cycles",
    "topological_order",
    "validate_dag",
    "validate_edge_deletion",
    "validate_node_deletion",
]
