# src/pipecanvas/cli.py
"""
pipecanvas Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`.

Features
--------
- **Local validation**: Run the DAG check, cycle detector and statistics on a
  saved canvas graph without any service.
- **Submission**: Send the graph's topology to a parse service and render its
  verdict (the same round trip the canvas' Submit button performs).
- **Serve**: Start the reference parse service.

Graph files are JSON objects in canvas form:
    {"nodes": [{"id": "1", "type": "input", ...}], "edges": [{"id": "e1", "source": "1", "target": "2"}]}

Usage
-----
    $ pipecanvas validate pipeline.json
    $ pipecanvas submit pipeline.json --url http://127.0.0.1:8000
    $ pipecanvas serve --port 8000
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pipecanvas.client.pipeline import PipelineClient
from pipecanvas.core.contracts.graph import Edge, Node
from pipecanvas.core.contracts.submission import AnalyzeRequest, ParseResponse
from pipecanvas.core.graph.cycles import has_cycles
from pipecanvas.core.graph.stats import get_graph_stats
from pipecanvas.core.graph.validation import validate_dag
from pipecanvas.core.settings import load_settings

# Ensure env vars (like PIPECANVAS_SERVICE_URL) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="pipecanvas: validate pipeline canvas graphs as DAGs.",
    rich_markup_mode="markdown",
)
console = Console()

GraphFile = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Path to a canvas graph JSON file.",
    ),
]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _load_graph(path: Path) -> tuple[list[Node], list[Edge]]:
    """
    Helper: Read a canvas graph file.

    Only the file's shape is checked here; dangling edges and cycles are left
    for the validator to report.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    parsed = AnalyzeRequest.model_validate(data)
    return parsed.nodes, parsed.edges


def _render_verdict(title: str, result: ParseResponse) -> None:
    """Helper: Show node/edge counts and the DAG verdict, like the canvas alert."""
    table = Table(title=title, show_header=False, title_style="bold")
    table.add_row("Total Nodes", str(result.node_count))
    table.add_row("Total Edges", str(result.edge_count))
    status = "[green]Valid[/green]" if result.is_valid_dag else "[red]Invalid[/red]"
    table.add_row("DAG Status", status)
    if result.error:
        table.add_row("Error", f"[red]{result.error}[/red]")
    console.print(table)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def validate(file: GraphFile) -> None:
    """
    Validate a graph locally and print its structural statistics.

    Exits with code 1 when the graph is not a valid DAG.
    """
    try:
        nodes, edges = _load_graph(file)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        console.print(f"[bold red]❌ Could not read graph:[/bold red] {e}")
        raise typer.Exit(code=2) from e

    verdict = validate_dag(nodes, edges)
    stats = get_graph_stats(nodes, edges)

    _render_verdict(
        f"Pipeline Validation: {file.name}",
        ParseResponse(
            node_count=len(nodes),
            edge_count=len(edges),
            is_valid_dag=verdict.is_valid,
            error=verdict.error,
        ),
    )

    details = Table(title="Structure", show_header=False)
    details.add_row("Has Cycles", str(has_cycles(nodes, edges)))
    details.add_row("Connected Components", str(stats.connected_components))
    details.add_row("Isolated Nodes", str(stats.has_isolated_nodes))
    details.add_row("Max Depth", "n/a" if stats.max_depth is None else str(stats.max_depth))
    console.print(details)

    if not verdict.is_valid:
        raise typer.Exit(code=1)


@app.command()  # type: ignore[misc]
def submit(
    file: GraphFile,
    url: Annotated[
        str | None,
        typer.Option(
            "--url",
            "-u",
            help="Parse service base URL (defaults to PIPECANVAS_SERVICE_URL).",
        ),
    ] = None,
) -> None:
    """
    Submit a graph's topology to the parse service and show the verdict.

    Exits with code 1 when the backend cannot be reached.
    """
    try:
        nodes, edges = _load_graph(file)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        console.print(f"[bold red]❌ Could not read graph:[/bold red] {e}")
        raise typer.Exit(code=2) from e

    client = PipelineClient.from_settings()
    if url:
        client = PipelineClient(base_url=url, timeout_seconds=client.timeout_seconds)

    result = client.submit(nodes, edges)
    if result is None:
        console.print(
            Panel(
                f"Backend not reachable at {client.parse_url}",
                title="Submit",
                border_style="red",
            )
        )
        raise typer.Exit(code=1)

    _render_verdict("Pipeline Validation Results", result)


@app.command()  # type: ignore[misc]
def serve(
    host: Annotated[str, typer.Option("--host", help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on.")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on code changes.")] = False,
) -> None:
    """Run the reference parse service with uvicorn."""
    from pipecanvas.api.server import main as run_server

    console.print(
        f"[bold cyan]pipecanvas API[/bold cyan] on http://{host}:{port} "
        f"([dim]{load_settings().environment}[/dim])"
    )
    run_server(host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
