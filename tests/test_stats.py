"""Tests for direction-independent graph statistics."""

from __future__ import annotations

from pipecanvas.core.contracts.graph import Edge, Node
from pipecanvas.core.graph.stats import get_graph_stats


def _nodes(*ids: str) -> list[Node]:
    return [Node(id=i) for i in ids]


def _edges(*pairs: tuple[str, str]) -> list[Edge]:
    return [Edge(id=f"e{n}", source=s, target=t) for n, (s, t) in enumerate(pairs, start=1)]


def test_empty_graph_stats() -> None:
    stats = get_graph_stats([], [])
    assert stats.node_count == 0
    assert stats.edge_count == 0
    assert stats.connected_components == 0
    assert stats.max_depth == 0
    assert stats.has_isolated_nodes is False


def test_chain_is_one_component() -> None:
    stats = get_graph_stats(_nodes("A", "B", "C"), _edges(("A", "B"), ("B", "C")))
    assert stats.connected_components == 1
    assert stats.max_depth == 2
    assert not stats.has_isolated_nodes


def test_two_disjoint_edges() -> None:
    stats = get_graph_stats(_nodes("A", "B", "C", "D"), _edges(("A", "B"), ("C", "D")))
    assert stats.node_count == 4
    assert stats.edge_count == 2
    assert stats.connected_components == 2
    assert stats.has_isolated_nodes is False
    assert stats.max_depth == 1


def test_nodes_without_edges_are_isolated_components() -> None:
    stats = get_graph_stats(_nodes("A", "B"), [])
    assert stats.has_isolated_nodes is True
    assert stats.connected_components == 2
    assert stats.max_depth == 0


def test_components_ignore_direction() -> None:
    """A -> C <- B is one weakly-connected component."""
    stats = get_graph_stats(_nodes("A", "B", "C"), _edges(("A", "C"), ("B", "C")))
    assert stats.connected_components == 1


def test_max_depth_takes_longest_branch() -> None:
    edges = _edges(("A", "B"), ("B", "C"), ("C", "D"), ("A", "D"))
    assert get_graph_stats(_nodes("A", "B", "C", "D"), edges).max_depth == 3


def test_max_depth_undefined_for_cycles() -> None:
    stats = get_graph_stats(_nodes("A", "B"), _edges(("A", "B"), ("B", "A")))
    assert stats.max_depth is None
    assert stats.connected_components == 1


def test_dangling_edges_counted_but_not_connected() -> None:
    stats = get_graph_stats(_nodes("A", "B"), _edges(("A", "ghost")))
    assert stats.edge_count == 1
    assert stats.connected_components == 2
    assert stats.has_isolated_nodes is True
    assert stats.max_depth is None


def test_self_loop_touches_its_node() -> None:
    stats = get_graph_stats(_nodes("A"), _edges(("A", "A")))
    assert stats.has_isolated_nodes is False
    assert stats.connected_components == 1
