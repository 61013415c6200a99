"""
DAG validation for canvas graphs (Kahn's algorithm).

:func:`validate_dag` is the authoritative validity check run on submit. It
never raises for topology problems; a cycle or an edge pointing at a missing
node is reported in the returned :class:`DAGValidation`.

:func:`topological_order` runs the same pass but returns the processing order
and raises on failure, for callers that need the order itself.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence

from pipecanvas.core.contracts.reports import (
    CYCLE_DETECTED,
    INVALID_EDGE_CONNECTION,
    DAGValidation,
)
from pipecanvas.core.graph.errors import CycleError, DanglingReferenceError
from pipecanvas.core.graph.views import EdgeLike, NodeLike, node_ids


def _kahn(
    ids: Sequence[str], edges: Iterable[EdgeLike]
) -> tuple[list[str], dict[str, int]] | EdgeLike:
    """Run Kahn's algorithm over ``ids``.

    Returns ``(order, in_degree)`` where ``in_degree`` holds the residual
    counts, or the first edge with a dangling endpoint.
    """
    adjacency: dict[str, list[str]] = {u: [] for u in ids}
    in_degree: dict[str, int] = {u: 0 for u in ids}

    for edge in edges:
        if edge.source not in adjacency or edge.target not in adjacency:
            # Stop before the malformed edge can reach the adjacency map.
            return edge
        adjacency[edge.source].append(edge.target)
        in_degree[edge.target] += 1

    queue: deque[str] = deque(u for u in adjacency if in_degree[u] == 0)
    order: list[str] = []

    while queue:
        u = queue.popleft()
        order.append(u)
        # One decrement per edge: parallel edges were counted once each above.
        for v in adjacency[u]:
            in_degree[v] -= 1
            if in_degree[v] == 0:
                queue.append(v)

    return order, in_degree


def validate_dag(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> DAGValidation:
    """Decide whether ``(nodes, edges)`` forms a directed acyclic graph.

    Parameters
    ----------
    nodes:
        Nodes (or bare node ids). Ids are assumed unique.
    edges:
        Directed edges; only ``source`` and ``target`` are read.

    Returns
    -------
    DAGValidation
        ``is_valid=True`` for an empty graph or any acyclic graph, including
        disconnected ones. Otherwise ``error`` is ``"Invalid edge connection"``
        when an endpoint is missing, or ``"Cycle detected in graph"``.
    """
    ids = node_ids(nodes)
    if not ids:
        return DAGValidation(is_valid=True, error=None)

    outcome = _kahn(ids, edges)
    if not isinstance(outcome, tuple):
        return DAGValidation(is_valid=False, error=INVALID_EDGE_CONNECTION)

    order, _ = outcome
    if len(order) == len(ids):
        return DAGValidation(is_valid=True, error=None)
    return DAGValidation(is_valid=False, error=CYCLE_DETECTED)


def topological_order(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> list[str]:
    """Return node ids in a topological (FIFO Kahn) order.

    Raises
    ------
    DanglingReferenceError
        If an edge references a node that is not in ``nodes``.
    CycleError
        If the graph contains a cycle; ``unresolved`` lists the nodes left
        with a positive in-degree.
    """
    ids = node_ids(nodes)
    outcome = _kahn(ids, edges)
    if not isinstance(outcome, tuple):
        known = set(ids)
        missing = [e for e in (outcome.source, outcome.target) if e not in known]
        edge_id = getattr(outcome, "id", f"{outcome.source}->{outcome.target}")
        raise DanglingReferenceError(str(edge_id), missing)

    order, in_degree = outcome
    if len(order) != len(ids):
        raise CycleError([u for u in ids if in_degree[u] > 0])
    return order


__all__ = ["topological_order", "validate_dag"]
