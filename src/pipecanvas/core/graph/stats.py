"""Structural statistics for canvas graphs.

Component membership ignores edge direction (weakly-connected components);
depth follows direction and is only defined for DAGs.
"""

from __future__ import annotations

from collections.abc import Iterable

from pipecanvas.core.contracts.reports import GraphStats
from pipecanvas.core.graph.errors import GraphStructureError
from pipecanvas.core.graph.validation import topological_order
from pipecanvas.core.graph.views import (
    EdgeLike,
    NodeLike,
    directed_adjacency,
    node_ids,
    undirected_adjacency,
)


def count_components(ids: list[str], edges: list[EdgeLike]) -> int:
    """Count weakly-connected components with an iterative DFS."""
    adjacency = undirected_adjacency(ids, edges)
    visited: set[str] = set()
    components = 0

    for root in ids:
        if root in visited:
            continue
        components += 1
        visited.add(root)
        stack = [root]
        while stack:
            current = stack.pop()
            for neighbour in adjacency[current]:
                if neighbour not in visited:
                    visited.add(neighbour)
                    stack.append(neighbour)

    return components


def longest_path(ids: list[str], edges: list[EdgeLike]) -> int | None:
    """Return the number of edges on the longest directed path.

    ``None`` when the graph has a cycle or a dangling edge.
    """
    try:
        order = topological_order(ids, edges)
    except GraphStructureError:
        return None

    adjacency = directed_adjacency(ids, edges)
    depth: dict[str, int] = dict.fromkeys(ids, 0)
    for u in order:
        for v in adjacency[u]:
            if depth[u] + 1 > depth[v]:
                depth[v] = depth[u] + 1
    return max(depth.values(), default=0)


def get_graph_stats(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> GraphStats:
    """Compute node/edge counts, components, isolation and depth.

    Parameters
    ----------
    nodes:
        Nodes or bare node ids.
    edges:
        Directed edges. Edges with a missing endpoint are counted in
        ``edge_count`` but do not join components or touch nodes.

    Returns
    -------
    GraphStats
        ``has_isolated_nodes`` is ``True`` when some node is not an endpoint
        of any edge. ``max_depth`` is ``None`` for cyclic graphs.
    """
    ids = node_ids(nodes)
    edge_list = list(edges)

    if not ids:
        return GraphStats(node_count=0, edge_count=len(edge_list))

    known = set(ids)
    touched = {
        endpoint
        for edge in edge_list
        for endpoint in (edge.source, edge.target)
        if endpoint in known
    }

    return GraphStats(
        node_count=len(ids),
        edge_count=len(edge_list),
        connected_components=count_components(ids, edge_list),
        max_depth=longest_path(ids, edge_list),
        has_isolated_nodes=len(touched) < len(known),
    )


__all__ = ["count_components", "get_graph_stats", "longest_path"]
