"""Read-only views shared by the validator, cycle detector and statistics.

The engine accepts nodes either as :class:`~pipecanvas.core.contracts.graph.Node`
objects or as bare id strings (the parse service only receives ids), and
edges as anything exposing ``source`` / ``target``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeAlias

from pipecanvas.core.contracts.graph import Node

NodeLike: TypeAlias = Node | str


class EdgeLike(Protocol):
    """Structural type for edges: only the endpoints matter to topology."""

    @property
    def source(self) -> str: ...

    @property
    def target(self) -> str: ...


def node_ids(nodes: Iterable[NodeLike]) -> list[str]:
    """Return distinct node ids in first-seen order.

    A repeated id names the same node, so the validator, the cycle detector
    and the statistics all see one vertex for it.
    """
    return list(dict.fromkeys(n if isinstance(n, str) else n.id for n in nodes))


def directed_adjacency(ids: Iterable[str], edges: Iterable[EdgeLike]) -> dict[str, list[str]]:
    """Map every node id to its outgoing targets.

    Edges whose source is not a known node are skipped; parallel edges keep
    one entry each.
    """
    adjacency: dict[str, list[str]] = {node_id: [] for node_id in ids}
    for edge in edges:
        if edge.source in adjacency:
            adjacency[edge.source].append(edge.target)
    return adjacency


def undirected_adjacency(ids: Iterable[str], edges: Iterable[EdgeLike]) -> dict[str, list[str]]:
    """Map every node id to its neighbours ignoring direction.

    Edges with a missing endpoint are skipped.
    """
    adjacency: dict[str, list[str]] = {node_id: [] for node_id in ids}
    for edge in edges:
        if edge.source in adjacency and edge.target in adjacency:
            adjacency[edge.source].append(edge.target)
            adjacency[edge.target].append(edge.source)
    return adjacency


__all__ = ["EdgeLike", "NodeLike", "directed_adjacency", "node_ids", "undirected_adjacency"]
