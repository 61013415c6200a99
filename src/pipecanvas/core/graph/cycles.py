"""Depth-first cycle detection.

:func:`has_cycles` answers only "is there a cycle?" and stops at the first
back edge. It walks an explicit stack, so very deep chains cannot exhaust the
interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterable

from pipecanvas.core.graph.views import EdgeLike, NodeLike, directed_adjacency, node_ids

_WHITE, _GRAY, _BLACK = 0, 1, 2


def has_cycles(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> bool:
    """Return ``True`` if the directed graph contains at least one cycle.

    Every node is tried as a DFS root so disconnected components are covered.
    A neighbour that is on the current path (gray) closes a cycle; a finished
    neighbour (black) is skipped. Edges to unknown targets are ignored since
    they cannot lead back into the graph.
    """
    ids = node_ids(nodes)
    adjacency = directed_adjacency(ids, edges)
    color: dict[str, int] = dict.fromkeys(adjacency, _WHITE)

    for root in ids:
        if color[root] != _WHITE:
            continue
        color[root] = _GRAY
        # Each frame is (node, index of the next neighbour to look at).
        stack: list[tuple[str, int]] = [(root, 0)]
        while stack:
            node, idx = stack[-1]
            neighbours = adjacency[node]
            if idx == len(neighbours):
                color[node] = _BLACK
                stack.pop()
                continue
            stack[-1] = (node, idx + 1)
            nxt = neighbours[idx]
            state = color.get(nxt)
            if state is None or state == _BLACK:
                continue
            if state == _GRAY:
                return True
            color[nxt] = _GRAY
            stack.append((nxt, 0))

    return False


__all__ = ["has_cycles"]
