"""Canvas graph contracts: nodes, edges and their positions.

This module defines the Pydantic v2 models the canvas exchanges with the core:

- :class:`Node` : a typed processing step placed on the canvas.
- :class:`Edge` : a directed connection between two nodes (optionally between
  named handles, e.g. a condition node's ``true``/``false`` outputs).

Notes
-----
- Both models are frozen. Mutation goes through :class:`pipecanvas.core.graph.Graph`,
  which returns updated copies instead of editing in place.
- ``Node.data`` is opaque per-type configuration. The topology engine never
  inspects it.
- Edge handles use the canvas' camelCase names on the wire (``sourceHandle``,
  ``targetHandle``) and snake_case attributes in Python.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeType(StrEnum):
    """Node kinds offered by the canvas palette."""

    INPUT = "input"
    OUTPUT = "output"
    TEXT = "text"
    LLM = "llm"
    EMAIL = "email"
    LOGGER = "logger"
    MATH = "math"
    DELAY = "delay"
    CONDITION = "condition"


#: Default ``data`` fields for freshly dropped nodes, keyed by node type.
NODE_DEFAULTS: MappingProxyType[str, dict[str, Any]] = MappingProxyType(
    {
        NodeType.INPUT: {"fieldName": "user_input", "inputType": "text"},
        NodeType.MATH: {"operation": "add", "precision": "2"},
        NodeType.LOGGER: {"level": "info", "message": ""},
        NodeType.EMAIL: {"to": "", "subject": ""},
        NodeType.DELAY: {"duration": "5", "unit": "seconds"},
        NodeType.CONDITION: {"operator": "equals", "value": ""},
        NodeType.LLM: {
            "systemInstructions": "Answer the question based on context",
            "prompt": "Question :\n\nContext :",
            "model": "gpt-4.1",
            "usePersonalKey": False,
        },
        NodeType.TEXT: {"text": ""},
        NodeType.OUTPUT: {"text": ""},
    }
)


def is_known_type(node_type: str) -> bool:
    """Return ``True`` if ``node_type`` is one of the palette's node kinds."""
    return node_type in NodeType._value2member_map_


class Position(BaseModel):
    """Canvas coordinate of a node. Purely presentational."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


class Node(BaseModel):
    """A processing node on the canvas.

    Parameters
    ----------
    id:
        Unique, stable identifier (caller supplied or ``"{type}-{n}"``).
    type:
        One of :class:`NodeType`. Unknown strings are kept as-is; they render
        with a fallback style but are ordinary topology participants.
    position:
        Canvas coordinate; irrelevant to validation.
    data:
        Opaque per-type configuration (prompt text, email subject, ...).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Unique node identifier.")
    type: str = Field(default=NodeType.TEXT.value, description="Node kind.")
    position: Position = Field(default_factory=Position)
    data: dict[str, Any] = Field(default_factory=dict, description="Per-type configuration.")

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Node id cannot be blank")
        return stripped


class Edge(BaseModel):
    """A directed connection ``source -> target`` between two nodes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Unique edge identifier.")
    source: str = Field(description="Id of the upstream node.")
    target: str = Field(description="Id of the downstream node.")
    source_handle: str | None = Field(default=None, alias="sourceHandle")
    target_handle: str | None = Field(default=None, alias="targetHandle")

    @field_validator("source", "target")
    @classmethod
    def _strip_endpoint(cls, value: str) -> str:
        # Same normalisation as Node.id.
        return value.strip()

    def touches(self, node_id: str) -> bool:
        """Return ``True`` if either endpoint is ``node_id``."""
        return self.source == node_id or self.target == node_id


class EdgeRef(BaseModel):
    """Topology-only view of an edge, as submitted to the parse service."""

    source: str
    target: str


__all__ = [
    "NODE_DEFAULTS",
    "Edge",
    "EdgeRef",
    "Node",
    "NodeType",
    "Position",
    "is_known_type",
]
