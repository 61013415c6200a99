"""
Cascading deletion for canvas graphs.

Every function here takes the current node/edge collections and returns a
report carrying the resulting collections; nothing is mutated in place and
the caller decides where to store the result.

Responsibilities
----------------
- **Cascade**: removing a node removes every edge whose ``source`` or
  ``target`` is that node, so no edge is ever left pointing at a deleted id.
- **Advise**: ``validate_*_deletion`` report structurally significant
  consequences (breaking a path, disconnecting an input/output, isolating a
  node) as warnings. Warnings never block the deletion.
- **Degrade softly**: an unknown id is logged and reported with
  ``success=False``; the collections come back unchanged. Deletion requests
  can race with other canvas edits, so stale ids are expected.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from pipecanvas.core.contracts.graph import Edge, Node, NodeType
from pipecanvas.core.contracts.reports import (
    BatchDeletionResult,
    DeletionCheck,
    EdgeDeletionResult,
    NodeDeletionResult,
)
from pipecanvas.core.settings import get_logger

logger = get_logger(__name__)

R = TypeVar("R")


def _notify(callback: Callable[[R], None] | None, result: R) -> None:
    if callback is not None:
        callback(result)


# --------------------------------------------------------------------------- #
# Pre-deletion checks
# --------------------------------------------------------------------------- #


def validate_node_deletion(
    nodes: Sequence[Node], edges: Sequence[Edge], node_id: str
) -> DeletionCheck:
    """Report what deleting ``node_id`` would disconnect.

    ``can_delete`` is ``False`` only when the node does not exist.
    """
    node = next((n for n in nodes if n.id == node_id), None)
    if node is None:
        return DeletionCheck(can_delete=False, error="Node not found")

    incoming = [e for e in edges if e.target == node_id]
    outgoing = [e for e in edges if e.source == node_id]
    warnings: list[str] = []

    if incoming and outgoing:
        warnings.append(
            f"Node is part of a critical path with {len(incoming)} inputs "
            f"and {len(outgoing)} outputs"
        )
    if node.type == NodeType.INPUT and outgoing:
        warnings.append("Deleting an input node will remove all downstream connections")
    if node.type == NodeType.OUTPUT and incoming:
        warnings.append("Deleting an output node will remove all upstream connections")

    return DeletionCheck(
        can_delete=True,
        warnings=warnings,
        node=node,
        incoming_edges=incoming,
        outgoing_edges=outgoing,
    )


def validate_edge_deletion(
    nodes: Sequence[Node], edges: Sequence[Edge], edge_id: str
) -> DeletionCheck:
    """Report what deleting ``edge_id`` would disconnect.

    ``can_delete`` is ``False`` only when the edge does not exist.
    """
    edge = next((e for e in edges if e.id == edge_id), None)
    if edge is None:
        return DeletionCheck(can_delete=False, error="Edge not found")

    source_node = next((n for n in nodes if n.id == edge.source), None)
    target_node = next((n for n in nodes if n.id == edge.target), None)
    warnings: list[str] = []

    if target_node is not None and target_node.type == NodeType.OUTPUT:
        warnings.append("Deleting this edge will disconnect an output node")
    if source_node is not None and source_node.type == NodeType.INPUT:
        warnings.append("Deleting this edge will disconnect an input node")

    if target_node is not None and not any(
        e.target == edge.target and e.id != edge_id for e in edges
    ):
        warnings.append("Target node will become isolated after deletion")
    if source_node is not None and not any(
        e.source == edge.source and e.id != edge_id for e in edges
    ):
        warnings.append("Source node will become isolated after deletion")

    return DeletionCheck(
        can_delete=True,
        warnings=warnings,
        edge=edge,
        source_node=source_node,
        target_node=target_node,
    )


# --------------------------------------------------------------------------- #
# Node deletion
# --------------------------------------------------------------------------- #


def delete_node_by_id(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    node_id: str,
    callback: Callable[[NodeDeletionResult], None] | None = None,
) -> NodeDeletionResult:
    """Remove ``node_id`` and every edge incident to it.

    Parameters
    ----------
    nodes, edges:
        Current snapshot. Neither sequence is modified.
    node_id:
        Node to delete.
    callback:
        Called with the result after a successful deletion.

    Returns
    -------
    NodeDeletionResult
        On a miss, ``success`` is ``False`` and ``remaining_*`` equal the
        inputs.
    """
    logger.info("Deleting node with ID: %s", node_id)

    target = next((n for n in nodes if n.id == node_id), None)
    if target is None:
        logger.error("Node with ID %s not found", node_id)
        return NodeDeletionResult(
            success=False,
            node_id=node_id,
            error=f"Node with ID {node_id} not found",
            remaining_nodes=list(nodes),
            remaining_edges=list(edges),
        )

    cascaded = [e for e in edges if e.touches(node_id)]
    result = NodeDeletionResult(
        success=True,
        node_id=node_id,
        deleted_node=target,
        deleted_edges=cascaded,
        remaining_nodes=[n for n in nodes if n.id != node_id],
        remaining_edges=[e for e in edges if not e.touches(node_id)],
    )
    logger.info("Node %s and %d connected edges deleted", node_id, len(cascaded))

    _notify(callback, result)
    return result


def delete_multiple_nodes(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    node_ids: Iterable[str],
    callback: Callable[[BatchDeletionResult], None] | None = None,
) -> BatchDeletionResult:
    """Remove several nodes and every edge incident to any of them.

    Requested ids are partitioned into found (deleted) and ``not_found_ids``.
    An empty request, or one where no id matches, is a soft failure.
    """
    requested = list(node_ids)
    if not requested:
        logger.error("Valid node IDs are required for deletion")
        return BatchDeletionResult(
            success=False,
            error="Invalid node IDs array",
            remaining_nodes=list(nodes),
            remaining_edges=list(edges),
        )

    logger.info("Deleting %d nodes: %s", len(requested), ", ".join(requested))

    wanted = set(requested)
    doomed = [n for n in nodes if n.id in wanted]
    doomed_ids = {n.id for n in doomed}
    not_found = [i for i in requested if i not in doomed_ids]

    if not_found:
        logger.warning("Nodes with IDs %s not found", ", ".join(not_found))

    if not doomed:
        logger.error("No valid nodes found for deletion")
        return BatchDeletionResult(
            success=False,
            error="No valid nodes found",
            remaining_nodes=list(nodes),
            remaining_edges=list(edges),
            not_found_ids=not_found,
        )

    cascaded = [e for e in edges if e.source in doomed_ids or e.target in doomed_ids]
    result = BatchDeletionResult(
        success=True,
        deleted_nodes=doomed,
        deleted_edges=cascaded,
        remaining_nodes=[n for n in nodes if n.id not in doomed_ids],
        remaining_edges=[
            e for e in edges if e.source not in doomed_ids and e.target not in doomed_ids
        ],
        not_found_ids=not_found,
    )
    logger.info(
        "Successfully deleted %d nodes and %d connected edges", len(doomed), len(cascaded)
    )

    _notify(callback, result)
    return result


# --------------------------------------------------------------------------- #
# Edge deletion
# --------------------------------------------------------------------------- #


def delete_edge_by_id(
    edges: Sequence[Edge],
    edge_id: str,
    callback: Callable[[EdgeDeletionResult], None] | None = None,
) -> EdgeDeletionResult:
    """Remove a single edge by id. No cascading."""
    logger.info("Deleting edge with ID: %s", edge_id)

    if not edge_id:
        logger.error("Edge ID is required for deletion")
        return EdgeDeletionResult(
            success=False, error="Edge ID is required", remaining_edges=list(edges)
        )

    target = next((e for e in edges if e.id == edge_id), None)
    if target is None:
        logger.error("Edge with ID %s not found", edge_id)
        return EdgeDeletionResult(
            success=False,
            edge_id=edge_id,
            error=f"Edge with ID {edge_id} not found",
            remaining_edges=list(edges),
        )

    result = EdgeDeletionResult(
        success=True,
        edge_id=edge_id,
        deleted_edges=[target],
        remaining_edges=[e for e in edges if e.id != edge_id],
    )
    logger.info("Edge %s deleted successfully", edge_id)

    _notify(callback, result)
    return result


def delete_edge_by_nodes(
    edges: Sequence[Edge],
    source_id: str,
    target_id: str,
    callback: Callable[[EdgeDeletionResult], None] | None = None,
) -> EdgeDeletionResult:
    """Remove every edge running from ``source_id`` to ``target_id``.

    ``edge_id`` on the result is the first matching edge's id.
    """
    logger.info("Deleting edge from %s to %s", source_id, target_id)

    if not source_id or not target_id:
        logger.error("Source and target node IDs are required for deletion")
        return EdgeDeletionResult(
            success=False,
            error="Source and target node IDs are required",
            remaining_edges=list(edges),
        )

    matching = [e for e in edges if e.source == source_id and e.target == target_id]
    if not matching:
        logger.error("Edge from %s to %s not found", source_id, target_id)
        return EdgeDeletionResult(
            success=False,
            error=f"Edge from {source_id} to {target_id} not found",
            remaining_edges=list(edges),
        )

    result = EdgeDeletionResult(
        success=True,
        edge_id=matching[0].id,
        deleted_edges=matching,
        remaining_edges=[
            e for e in edges if not (e.source == source_id and e.target == target_id)
        ],
    )
    logger.info("Edge from %s to %s deleted successfully", source_id, target_id)

    _notify(callback, result)
    return result


def delete_all_edges_for_node(
    edges: Sequence[Edge],
    node_id: str,
    callback: Callable[[EdgeDeletionResult], None] | None = None,
) -> EdgeDeletionResult:
    """Remove every edge touching ``node_id`` while keeping the node.

    A node without edges is a successful no-op.
    """
    if not node_id:
        logger.error("Node ID is required for edge deletion")
        return EdgeDeletionResult(
            success=False, error="Node ID is required", remaining_edges=list(edges)
        )

    connected = [e for e in edges if e.touches(node_id)]
    if not connected:
        logger.info("No edges found connected to node %s", node_id)
        return EdgeDeletionResult(success=True, remaining_edges=list(edges))

    result = EdgeDeletionResult(
        success=True,
        deleted_edges=connected,
        remaining_edges=[e for e in edges if not e.touches(node_id)],
    )
    logger.info("Deleted %d edges connected to node %s", len(connected), node_id)

    _notify(callback, result)
    return result


def delete_multiple_edges(
    edges: Sequence[Edge],
    edge_ids: Iterable[str],
    callback: Callable[[BatchDeletionResult], None] | None = None,
) -> BatchDeletionResult:
    """Remove several edges by id, reporting ids that were not present."""
    requested = list(edge_ids)
    if not requested:
        logger.error("Valid edge IDs are required for deletion")
        return BatchDeletionResult(
            success=False, error="Invalid edge IDs array", remaining_edges=list(edges)
        )

    logger.info("Deleting %d edges: %s", len(requested), ", ".join(requested))

    wanted = set(requested)
    doomed = [e for e in edges if e.id in wanted]
    doomed_ids = {e.id for e in doomed}
    not_found = [i for i in requested if i not in doomed_ids]

    if not_found:
        logger.warning("Edges with IDs %s not found", ", ".join(not_found))

    if not doomed:
        logger.error("No valid edges found for deletion")
        return BatchDeletionResult(
            success=False,
            error="No valid edges found",
            remaining_edges=list(edges),
            not_found_ids=not_found,
        )

    result = BatchDeletionResult(
        success=True,
        deleted_edges=doomed,
        remaining_edges=[e for e in edges if e.id not in doomed_ids],
        not_found_ids=not_found,
    )
    logger.info("Successfully deleted %d edges", len(doomed))

    _notify(callback, result)
    return result


# --------------------------------------------------------------------------- #
# Async shims
# --------------------------------------------------------------------------- #


async def delete_node_by_id_async(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    node_id: str,
    callback: Callable[[NodeDeletionResult], None] | None = None,
) -> NodeDeletionResult:
    """Yield one scheduler tick, then run :func:`delete_node_by_id`."""
    await asyncio.sleep(0)
    return delete_node_by_id(nodes, edges, node_id, callback)


async def delete_edge_by_id_async(
    edges: Sequence[Edge],
    edge_id: str,
    callback: Callable[[EdgeDeletionResult], None] | None = None,
) -> EdgeDeletionResult:
    """Yield one scheduler tick, then run :func:`delete_edge_by_id`."""
    await asyncio.sleep(0)
    return delete_edge_by_id(edges, edge_id, callback)


__all__ = [
    "delete_all_edges_for_node",
    "delete_edge_by_id",
    "delete_edge_by_id_async",
    "delete_edge_by_nodes",
    "delete_multiple_edges",
    "delete_multiple_nodes",
    "delete_node_by_id",
    "delete_node_by_id_async",
    "validate_edge_deletion",
    "validate_node_deletion",
]
