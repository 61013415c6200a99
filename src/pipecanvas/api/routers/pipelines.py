"""
API Routes for Pipeline Topology Checks.

Endpoints
---------
- `POST /pipelines/parse`: Count nodes/edges and decide DAG validity from a
  topology-only payload (node ids + source/target pairs).
- `POST /pipelines/analyze`: Same verdict for a full canvas graph, plus
  cycle flag and structural statistics.

Design Decisions
----------------
- **Verdicts are data**: cycles and dangling edges come back as
  ``isValidDAG: false`` with an ``error`` string and HTTP 200. Only a payload
  that does not match the request schema is rejected (422).
- **Stateless**: each request is evaluated on its own snapshot; nothing is
  stored between calls.
"""

from __future__ import annotations

from fastapi import APIRouter

from pipecanvas.core.contracts.submission import (
    AnalyzeRequest,
    AnalyzeResponse,
    ParseRequest,
    ParseResponse,
)
from pipecanvas.core.graph.cycles import has_cycles
from pipecanvas.core.graph.stats import get_graph_stats
from pipecanvas.core.graph.validation import validate_dag
from pipecanvas.core.settings import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/pipelines", tags=["Pipelines"])


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Validate a pipeline topology as a DAG",
)
async def parse_pipeline(request: ParseRequest) -> ParseResponse:
    """
    Validate the submitted topology.

    Node ids are taken as given; an edge naming an id outside ``nodes`` makes
    the pipeline invalid with ``"Invalid edge connection"``.
    """
    verdict = validate_dag(request.nodes, request.edges)
    logger.info(
        "Parsed pipeline: %d nodes, %d edges, valid=%s",
        len(request.nodes),
        len(request.edges),
        verdict.is_valid,
    )
    return ParseResponse(
        node_count=len(request.nodes),
        edge_count=len(request.edges),
        is_valid_dag=verdict.is_valid,
        error=verdict.error,
    )


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Validate a full canvas graph and report structural statistics",
)
async def analyze_pipeline(request: AnalyzeRequest) -> AnalyzeResponse:
    """Run the validator, the cycle detector and the statistics on one snapshot."""
    verdict = validate_dag(request.nodes, request.edges)
    return AnalyzeResponse(
        node_count=len(request.nodes),
        edge_count=len(request.edges),
        is_valid_dag=verdict.is_valid,
        error=verdict.error,
        has_cycles=has_cycles(request.nodes, request.edges),
        stats=get_graph_stats(request.nodes, request.edges),
    )


__all__ = ["router"]
