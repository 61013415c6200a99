"""
Integration tests for the pipeline routes.

Scenarios
---------
1. **Parse**: counts and DAG verdict for valid, cyclic and dangling payloads.
2. **Contract**: camelCase response fields; 422 for malformed bodies and
   repeated node ids; 400 for graph structure errors.
3. **Analyze**: full canvas graph with cycle flag and statistics.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from pipecanvas.api.app import create_app
from pipecanvas.core.graph.errors import DuplicateIdError


@pytest.fixture  # type: ignore[misc]
def client() -> Generator[TestClient, None, None]:
    """A fresh application per test."""
    with TestClient(create_app()) as c:
        yield c


def _parse(client: TestClient, body: dict[str, Any]) -> dict[str, Any]:
    response = client.post("/pipelines/parse", json=body)
    assert response.status_code == 200, response.text
    data: dict[str, Any] = response.json()
    return data


def test_parse_valid_pipeline(client: TestClient) -> None:
    data = _parse(
        client,
        {
            "nodes": ["1", "llm-2", "output-3"],
            "edges": [
                {"source": "1", "target": "llm-2"},
                {"source": "llm-2", "target": "output-3"},
            ],
        },
    )

    assert data == {"nodeCount": 3, "edgeCount": 2, "isValidDAG": True, "error": None}


def test_parse_empty_pipeline_is_valid(client: TestClient) -> None:
    data = _parse(client, {"nodes": [], "edges": []})
    assert data["isValidDAG"] is True
    assert data["nodeCount"] == 0


def test_parse_reports_cycle(client: TestClient) -> None:
    data = _parse(
        client,
        {
            "nodes": ["A", "B"],
            "edges": [{"source": "A", "target": "B"}, {"source": "B", "target": "A"}],
        },
    )

    assert data["isValidDAG"] is False
    assert data["error"] == "Cycle detected in graph"


def test_parse_reports_self_loop(client: TestClient) -> None:
    data = _parse(client, {"nodes": ["A"], "edges": [{"source": "A", "target": "A"}]})
    assert data["isValidDAG"] is False


def test_parse_reports_dangling_edge(client: TestClient) -> None:
    data = _parse(client, {"nodes": ["A"], "edges": [{"source": "A", "target": "ghost"}]})

    assert data["isValidDAG"] is False
    assert data["error"] == "Invalid edge connection"
    assert data["edgeCount"] == 1


def test_parse_rejects_malformed_body(client: TestClient) -> None:
    response = client.post("/pipelines/parse", json={"nodes": "A", "edges": [{"source": "A"}]})
    assert response.status_code == 422


def test_analyze_returns_statistics(client: TestClient) -> None:
    body = {
        "nodes": [
            {"id": "1", "type": "input", "position": {"x": 0, "y": 0}, "data": {}},
            {"id": "2", "type": "llm"},
            {"id": "3", "type": "output"},
            {"id": "4", "type": "text"},
        ],
        "edges": [
            {"id": "e1", "source": "1", "target": "2", "sourceHandle": "value"},
            {"id": "e2", "source": "2", "target": "3"},
        ],
    }
    response = client.post("/pipelines/analyze", json=body)

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["isValidDAG"] is True
    assert data["hasCycles"] is False
    assert data["stats"] == {
        "nodeCount": 4,
        "edgeCount": 2,
        "connectedComponents": 2,
        "maxDepth": 2,
        "hasIsolatedNodes": True,
    }


def test_analyze_cyclic_graph(client: TestClient) -> None:
    body = {
        "nodes": [{"id": "A"}, {"id": "B"}],
        "edges": [
            {"id": "e1", "source": "A", "target": "B"},
            {"id": "e2", "source": "B", "target": "A"},
        ],
    }
    data = client.post("/pipelines/analyze", json=body).json()

    assert data["isValidDAG"] is False
    assert data["hasCycles"] is True
    assert data["stats"]["maxDepth"] is None


def test_parse_rejects_repeated_node_ids(client: TestClient) -> None:
    """A repeated id would collapse into one vertex; the body is refused instead."""
    response = client.post("/pipelines/parse", json={"nodes": ["A", "A"], "edges": []})

    assert response.status_code == 422
    assert "Duplicate node ids: A" in response.text


def test_analyze_rejects_repeated_node_ids(client: TestClient) -> None:
    body = {
        "nodes": [{"id": "A"}, {"id": "B"}, {"id": "A", "type": "output"}],
        "edges": [{"id": "e1", "source": "A", "target": "B"}],
    }
    response = client.post("/pipelines/analyze", json=body)

    assert response.status_code == 422
    assert "Duplicate node ids: A" in response.text


def test_analyze_verdict_agrees_with_cycle_flag(client: TestClient) -> None:
    body = {
        "nodes": [{"id": "A"}, {"id": "B"}, {"id": "C"}],
        "edges": [{"id": "e1", "source": "A", "target": "B"}],
    }
    data = client.post("/pipelines/analyze", json=body).json()

    assert data["isValidDAG"] is True
    assert data["hasCycles"] is False


def test_graph_structure_errors_map_to_400() -> None:
    """A structure error escaping a route is answered by the ValueError handler."""
    app = create_app()

    @app.get("/boom")
    async def boom() -> None:
        raise DuplicateIdError("node", "A")

    with TestClient(app) as c:
        response = c.get("/boom")

    assert response.status_code == 400
    assert response.json() == {
        "error": "Bad Request",
        "detail": "Node with ID A already exists",
    }
