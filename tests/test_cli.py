# tests/test_cli.py
"""
Tests for the pipecanvas command-line interface (CLI).

Scope
-----
1.  **Command Registration**: `--help` lists the commands.
2.  **Argument Validation**: Typer's `exists=True` check on graph files.
3.  **Exit Codes**: 0 for a valid DAG, 1 for an invalid one or an unreachable
    backend, 2 for unreadable files.

We use `typer.testing.CliRunner` to invoke the app in-process.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from pipecanvas.cli import app
from pipecanvas.core.contracts.submission import ParseResponse


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """A fresh CliRunner for each test."""
    return CliRunner()


def _write_graph(path: Path, edges: list[dict[str, Any]]) -> Path:
    graph = {
        "nodes": [{"id": "A", "type": "input"}, {"id": "B"}, {"id": "C", "type": "output"}],
        "edges": edges,
    }
    path.write_text(json.dumps(graph), encoding="utf-8")
    return path


def test_cli_help_shows_usage(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, result.output
    assert "validate" in result.output
    assert "submit" in result.output


def test_validate_fails_on_missing_file(runner: CliRunner) -> None:
    result = runner.invoke(app, ["validate", "ghost.json"])
    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_validate_valid_graph(runner: CliRunner, tmp_path: Path) -> None:
    path = _write_graph(
        tmp_path / "ok.json",
        [
            {"id": "e1", "source": "A", "target": "B"},
            {"id": "e2", "source": "B", "target": "C"},
        ],
    )
    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 0, result.output
    assert "Valid" in result.output
    assert "Max Depth" in result.output


def test_validate_cyclic_graph_exits_1(runner: CliRunner, tmp_path: Path) -> None:
    path = _write_graph(
        tmp_path / "cycle.json",
        [
            {"id": "e1", "source": "A", "target": "B"},
            {"id": "e2", "source": "B", "target": "A"},
        ],
    )
    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Cycle detected in graph" in result.output


def test_validate_unreadable_file_exits_2(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 2
    assert "Could not read graph" in result.output


def test_submit_renders_backend_verdict(runner: CliRunner, tmp_path: Path) -> None:
    path = _write_graph(tmp_path / "ok.json", [{"id": "e1", "source": "A", "target": "B"}])
    verdict = ParseResponse(node_count=3, edge_count=1, is_valid_dag=True)

    with patch("pipecanvas.cli.PipelineClient.submit", return_value=verdict) as mock_submit:
        result = runner.invoke(app, ["submit", str(path), "--url", "http://backend.test"])

    assert result.exit_code == 0, result.output
    assert "Pipeline Validation Results" in result.output
    mock_submit.assert_called_once()


def test_submit_unreachable_backend_exits_1(runner: CliRunner, tmp_path: Path) -> None:
    path = _write_graph(tmp_path / "ok.json", [])

    with patch("pipecanvas.cli.PipelineClient.submit", return_value=None):
        result = runner.invoke(app, ["submit", str(path), "-u", "http://backend.test"])

    assert result.exit_code == 1
    assert "Backend not reachable" in result.output
