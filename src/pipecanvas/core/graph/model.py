"""
Immutable graph snapshot with invariant-preserving mutations.

:class:`Graph` owns a canvas' node and edge collections. Each mutation returns
a new snapshot and leaves the receiver untouched, so a submission that already
captured a snapshot is never affected by later edits.

Invariants
----------
- Node ids are unique; edge ids are unique.
- Every edge endpoint names a node in the same snapshot.

Structural violations raise :class:`~pipecanvas.core.graph.errors.GraphStructureError`
subclasses. Removals are routed through :mod:`pipecanvas.core.graph.deletion`
and report a stale id as data instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pipecanvas.core.contracts.graph import (
    NODE_DEFAULTS,
    Edge,
    Node,
    NodeType,
    Position,
)
from pipecanvas.core.contracts.reports import (
    DAGValidation,
    EdgeDeletionResult,
    GraphStats,
    NodeDeletionResult,
)
from pipecanvas.core.contracts.submission import ParseRequest
from pipecanvas.core.graph.cycles import has_cycles
from pipecanvas.core.graph.deletion import delete_edge_by_id, delete_node_by_id
from pipecanvas.core.graph.errors import DanglingReferenceError, DuplicateIdError, NotFoundError
from pipecanvas.core.graph.ids import IdGenerator
from pipecanvas.core.graph.stats import get_graph_stats
from pipecanvas.core.graph.validation import validate_dag

#: Id of the input node every new canvas starts with.
INITIAL_NODE_ID = "1"


@dataclass(frozen=True, slots=True)
class Graph:
    """A canvas graph: ordered nodes plus ordered edges.

    Every construction path, the plain constructor included, checks the
    invariants, so no snapshot can hold a duplicate id or a dangling edge.
    """

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    _index: dict[str, Node] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Index the nodes and enforce both invariants.

        Raises
        ------
        DuplicateIdError
            If two nodes or two edges share an id.
        DanglingReferenceError
            If an edge endpoint names a missing node.
        """
        index: dict[str, Node] = {}
        for node in self.nodes:
            if node.id in index:
                raise DuplicateIdError("node", node.id)
            index[node.id] = node

        edge_ids: set[str] = set()
        for edge in self.edges:
            missing = [n for n in (edge.source, edge.target) if n not in index]
            if missing:
                raise DanglingReferenceError(edge.id, missing)
            if edge.id in edge_ids:
                raise DuplicateIdError("edge", edge.id)
            edge_ids.add(edge.id)

        object.__setattr__(self, "_index", index)

    # ------------------------------------------------------------------ #
    # Constructors
    # ------------------------------------------------------------------ #

    @classmethod
    def initial(cls) -> Graph:
        """Return the starting canvas: a single input node and no edges."""
        start = Node(
            id=INITIAL_NODE_ID,
            type=NodeType.INPUT.value,
            position=Position(x=100, y=100),
            data={"label": "Input Node"},
        )
        return cls(nodes=(start,))

    @classmethod
    def from_parts(cls, nodes: Iterable[Node], edges: Iterable[Edge] = ()) -> Graph:
        """Build a snapshot from raw collections, enforcing both invariants.

        Raises
        ------
        DuplicateIdError
            If two nodes or two edges share an id.
        DanglingReferenceError
            If an edge endpoint names a missing node.
        """
        return cls(nodes=tuple(nodes), edges=tuple(edges))

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: str) -> Node:
        """Return the node with ``node_id``; raise :class:`NotFoundError` if absent."""
        try:
            return self._index[node_id]
        except KeyError:
            raise NotFoundError("node", node_id) from None

    def edge(self, edge_id: str) -> Edge:
        """Return the edge with ``edge_id``; raise :class:`NotFoundError` if absent."""
        for e in self.edges:
            if e.id == edge_id:
                return e
        raise NotFoundError("edge", edge_id)

    def incoming(self, node_id: str) -> list[Edge]:
        return [e for e in self.edges if e.target == node_id]

    def outgoing(self, node_id: str) -> list[Edge]:
        return [e for e in self.edges if e.source == node_id]

    def edges_for_node(self, node_id: str) -> list[Edge]:
        return [e for e in self.edges if e.touches(node_id)]

    def connected_node_ids(self) -> set[str]:
        """Ids of nodes that are an endpoint of at least one edge."""
        return {endpoint for e in self.edges for endpoint in (e.source, e.target)}

    # ------------------------------------------------------------------ #
    # Mutations (each returns a new snapshot)
    # ------------------------------------------------------------------ #

    def add_node(self, node: Node) -> Graph:
        """Append ``node``; raise :class:`DuplicateIdError` if its id exists."""
        if node.id in self._index:
            raise DuplicateIdError("node", node.id)
        return Graph(nodes=(*self.nodes, node), edges=self.edges)

    def create_node(
        self,
        node_type: str,
        ids: IdGenerator,
        position: Position | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> tuple[Graph, Node]:
        """Create a node id'd ``"{type}-{n}"`` with the type's default data.

        ``data`` overrides the defaults key by key.
        """
        payload: dict[str, Any] = {"label": f"{node_type} node"}
        payload.update(NODE_DEFAULTS.get(node_type, {}))
        payload.update(data or {})
        node = Node(
            id=f"{node_type}-{ids.next()}",
            type=node_type,
            position=position or Position(),
            data=payload,
        )
        return self.add_node(node), node

    def add_edge(self, edge: Edge) -> Graph:
        """Append ``edge`` after checking both endpoints exist.

        Raises
        ------
        DanglingReferenceError
            If ``source`` or ``target`` is not a node of this graph.
        DuplicateIdError
            If an edge with the same id exists. Parallel edges with distinct
            ids are allowed.
        """
        missing = [n for n in (edge.source, edge.target) if n not in self._index]
        if missing:
            raise DanglingReferenceError(edge.id, missing)
        if any(e.id == edge.id for e in self.edges):
            raise DuplicateIdError("edge", edge.id)
        return Graph(nodes=self.nodes, edges=(*self.edges, edge))

    def connect(
        self,
        source: str,
        target: str,
        ids: IdGenerator,
        *,
        source_handle: str | None = None,
        target_handle: str | None = None,
    ) -> tuple[Graph, Edge]:
        """Create an edge ``source -> target`` with a generated id."""
        edge = Edge(
            id=f"edge-{ids.next()}",
            source=source,
            target=target,
            source_handle=source_handle,
            target_handle=target_handle,
        )
        return self.add_edge(edge), edge

    def update_node(self, node_id: str, patch: Mapping[str, Any]) -> Graph:
        """Merge ``patch`` into a node.

        ``patch["data"]`` is merged key by key into ``data``; ``patch["position"]``
        (a :class:`Position` or ``{"x", "y"}`` mapping) replaces the position.
        Other keys are ignored: id and type are fixed for a node's lifetime.

        Raises
        ------
        NotFoundError
            If ``node_id`` is absent.
        """
        current = self.node(node_id)
        changes: dict[str, Any] = {}
        if "data" in patch:
            changes["data"] = {**current.data, **dict(patch["data"])}
        if "position" in patch:
            pos = patch["position"]
            changes["position"] = pos if isinstance(pos, Position) else Position(**pos)
        if not changes:
            return self

        updated = current.model_copy(update=changes)
        return Graph(
            nodes=tuple(updated if n.id == node_id else n for n in self.nodes),
            edges=self.edges,
        )

    def remove_node(self, node_id: str) -> tuple[Graph, NodeDeletionResult]:
        """Delete a node and its incident edges.

        A missing id is reported in the result and ``self`` is returned.
        """
        result = delete_node_by_id(self.nodes, self.edges, node_id)
        if not result.success:
            return self, result
        return Graph(tuple(result.remaining_nodes), tuple(result.remaining_edges)), result

    def remove_edge(self, edge_id: str) -> tuple[Graph, EdgeDeletionResult]:
        """Delete a single edge. A missing id returns ``self`` unchanged."""
        result = delete_edge_by_id(self.edges, edge_id)
        if not result.success:
            return self, result
        return Graph(self.nodes, tuple(result.remaining_edges)), result

    # ------------------------------------------------------------------ #
    # Analysis
    # ------------------------------------------------------------------ #

    def validate(self) -> DAGValidation:
        return validate_dag(self.nodes, self.edges)

    def has_cycles(self) -> bool:
        return has_cycles(self.nodes, self.edges)

    def stats(self) -> GraphStats:
        return get_graph_stats(self.nodes, self.edges)

    def to_submission(self) -> ParseRequest:
        """Topology-only payload for ``POST /pipelines/parse``."""
        return ParseRequest.model_validate(
            {
                "nodes": [n.id for n in self.nodes],
                "edges": [{"source": e.source, "target": e.target} for e in self.edges],
            }
        )


__all__ = ["INITIAL_NODE_ID", "Graph"]
