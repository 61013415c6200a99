# -----------------------------------------------------------------------------
# This module provides a small, synchronous client for the pipeline parse
# service that the canvas submits to on "Submit":
#   - reads the service base URL and timeout from settings
#   - reduces a graph snapshot to its topology (node ids + source/target pairs)
#   - POSTs it to /pipelines/parse and decodes the verdict
#
# The implementation uses only `urllib.request`, so the client adds no HTTP
# dependency of its own.
# Unit tests mock the internal `_post()` method so that no real HTTP calls are
# made during CI.
#
# Failure semantics
# -----------------
# Any transport problem (connection refused, timeout, non-2xx status, body
# that is not JSON or does not match the response contract) is reported as
# `None`: the caller shows "backend unreachable". Nothing is retried or cached.
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
import json
import urllib.error
import urllib.request
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from pipecanvas.core.contracts.submission import ParseRequest, ParseResponse
from pipecanvas.core.graph.model import Graph
from pipecanvas.core.graph.views import EdgeLike, NodeLike, node_ids
from pipecanvas.core.settings import get_logger, load_settings

logger = get_logger(__name__)

PARSE_PATH = "/pipelines/parse"


def build_payload(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> ParseRequest:
    """Reduce nodes and edges to the topology-only submission payload."""
    return ParseRequest.model_validate(
        {
            "nodes": node_ids(nodes),
            "edges": [{"source": e.source, "target": e.target} for e in edges],
        }
    )


@dataclass(slots=True)
class PipelineClient:
    """Submit canvas graphs to a parse service for DAG validation.

    Parameters
    ----------
    base_url:
        Service root, e.g. ``"http://127.0.0.1:8000"``. ``/pipelines/parse``
        is appended.
    timeout_seconds:
        Network timeout for a single submission.
    """

    base_url: str
    timeout_seconds: float = 10.0

    # --------------------------------------------------------------------- #
    # Constructors
    # --------------------------------------------------------------------- #
    @classmethod
    def from_settings(cls) -> PipelineClient:
        """Construct a client from ``PIPECANVAS_SERVICE_URL`` / ``PIPECANVAS_TIMEOUT_SECONDS``."""
        current = load_settings()
        return cls(base_url=current.service_url, timeout_seconds=current.timeout_seconds)

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    @property
    def parse_url(self) -> str:
        return self.base_url.rstrip("/") + PARSE_PATH

    def submit(
        self,
        graph: Graph | Iterable[NodeLike],
        edges: Iterable[EdgeLike] | None = None,
    ) -> ParseResponse | None:
        """Submit a graph snapshot and return the service's verdict.

        Parameters
        ----------
        graph:
            A :class:`Graph`, or a node collection when ``edges`` is given
            separately.
        edges:
            Edge collection; ignored when ``graph`` is a :class:`Graph`.

        Returns
        -------
        ParseResponse | None
            The decoded verdict, or ``None`` if the service could not be
            reached or answered with something unusable.

        Notes
        -----
        The payload is built before any I/O, so edits made to the canvas
        while the request is in flight do not affect this submission.
        """
        if isinstance(graph, Graph):
            payload = build_payload(graph.nodes, graph.edges)
        else:
            payload = build_payload(graph, edges or ())

        body = payload.model_dump(mode="json")
        logger.debug("Sending to backend: %s", body)

        try:
            raw = self._post(
                url=self.parse_url,
                headers={"Content-Type": "application/json"},
                payload=body,
            )
        except RuntimeError as exc:
            logger.warning("Submission failed: %s", exc)
            return None

        try:
            result = ParseResponse.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Backend returned an unexpected payload: %s", exc)
            return None

        logger.debug("Backend returned: %s", result.model_dump(by_alias=True))
        return result

    async def submit_async(
        self,
        graph: Graph | Iterable[NodeLike],
        edges: Iterable[EdgeLike] | None = None,
    ) -> ParseResponse | None:
        """Run :meth:`submit` in a worker thread.

        The snapshot is taken here, on the caller's side, before the thread
        starts.
        """
        if isinstance(graph, Graph):
            snapshot_nodes, snapshot_edges = list(graph.nodes), list(graph.edges)
        else:
            snapshot_nodes, snapshot_edges = list(graph), list(edges or ())
        return await asyncio.to_thread(self.submit, snapshot_nodes, snapshot_edges)

    # --------------------------------------------------------------------- #
    # Internal helpers (test seams)
    # --------------------------------------------------------------------- #
    def _post(
        self,
        *,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Perform an HTTP POST request and decode the JSON response.

        This is the seam unit tests patch to return stubbed responses.

        Raises
        ------
        RuntimeError
            If the request fails, the status is not 2xx, or the body cannot
            be decoded as a JSON object.
        """
        body = json.dumps(payload).encode("utf-8")
        request = urllib.request.Request(
            url=url,
            data=body,
            headers=dict(headers),
            method="POST",
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore")
            raise RuntimeError(
                f"Parse service HTTP error {exc.code}: {exc.reason}; body={detail!r}"
            ) from exc
        except urllib.error.URLError as exc:
            raise RuntimeError(f"Parse service network error: {exc}") from exc
        except OSError as exc:
            raise RuntimeError(f"Parse service connection failed: {exc}") from exc

        try:
            decoded = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise RuntimeError("Failed to decode parse service response as JSON") from exc

        if not isinstance(decoded, dict):
            raise RuntimeError("Parse service response is not a JSON object")
        return decoded


def submit_pipeline(
    graph: Graph | Iterable[NodeLike],
    edges: Iterable[EdgeLike] | None = None,
) -> ParseResponse | None:
    """Submit with a client built from the current settings."""
    return PipelineClient.from_settings().submit(graph, edges)


__all__ = ["PARSE_PATH", "PipelineClient", "build_payload", "submit_pipeline"]
