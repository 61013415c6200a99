"""Wire contracts for the ``POST /pipelines/parse`` round trip.

The canvas submits topology only: node ids and ``{source, target}`` pairs.
Handles, positions and per-node configuration stay on the client.

Response field names are camelCase on the wire (``nodeCount``, ``isValidDAG``)
to match what the canvas renders; Python code uses the snake_case attributes.

Request bodies must name each node once. A repeated id is rejected while the
body is parsed (HTTP 422), before any verdict is computed.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pipecanvas.core.contracts.graph import Edge, EdgeRef, Node
from pipecanvas.core.contracts.reports import GraphStats


def _reject_repeated(ids: Iterable[str]) -> None:
    repeated = sorted(i for i, n in Counter(ids).items() if n > 1)
    if repeated:
        raise ValueError(f"Duplicate node ids: {', '.join(repeated)}")


class ParseRequest(BaseModel):
    """Body of ``POST /pipelines/parse``."""

    nodes: list[str] = Field(default_factory=list, description="Unique node ids.")
    edges: list[EdgeRef] = Field(default_factory=list, description="Directed node pairs.")

    @field_validator("nodes")
    @classmethod
    def _unique_nodes(cls, value: list[str]) -> list[str]:
        _reject_repeated(value)
        return value


class ParseResponse(BaseModel):
    """Body returned by ``POST /pipelines/parse``."""

    model_config = ConfigDict(populate_by_name=True)

    node_count: int = Field(alias="nodeCount")
    edge_count: int = Field(alias="edgeCount")
    is_valid_dag: bool = Field(alias="isValidDAG")
    error: str | None = None


class AnalyzeRequest(BaseModel):
    """Body of ``POST /pipelines/analyze``: the full canvas graph."""

    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    @field_validator("nodes")
    @classmethod
    def _unique_nodes(cls, value: list[Node]) -> list[Node]:
        _reject_repeated(n.id for n in value)
        return value


class AnalyzeResponse(ParseResponse):
    """Parse verdict extended with structural statistics."""

    has_cycles: bool = Field(alias="hasCycles")
    stats: GraphStats


__all__ = ["AnalyzeRequest", "AnalyzeResponse", "ParseRequest", "ParseResponse"]
