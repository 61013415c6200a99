# scripts/smoke.py
"""
Smoke Test Script for the pipecanvas graph engine.

Builds a small canvas the way the editor does (create nodes, connect them,
delete one), validates it locally and optionally submits it to a running
parse service.

Usage
-----
1. Local checks only:
    $ uv run python scripts/smoke.py

2. Also submit to a running service:
    $ uv run pipecanvas serve &
    $ uv run python scripts/smoke.py --submit --url http://127.0.0.1:8000
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from pipecanvas.client import PipelineClient
from pipecanvas.core.graph import Graph, SequentialIdGenerator

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)


def build_canvas() -> Graph:
    """input -> llm -> output, with a text node feeding the llm."""
    ids = SequentialIdGenerator(start=2)
    graph = Graph.initial()
    graph, text = graph.create_node("text", ids, data={"text": "Summarise {{ topic }}"})
    graph, llm = graph.create_node("llm", ids)
    graph, out = graph.create_node("output", ids)
    graph, _ = graph.connect("1", llm.id, ids)
    graph, _ = graph.connect(text.id, llm.id, ids)
    graph, _ = graph.connect(llm.id, out.id, ids)
    return graph


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run pipecanvas Smoke Test")
    parser.add_argument("--submit", action="store_true", help="POST the graph to the service")
    parser.add_argument("--url", "-u", type=str, help="Parse service base URL")
    args = parser.parse_args()

    # 1. Build
    graph = build_canvas()
    print(f"\n🧩 Built canvas with {len(graph.nodes)} nodes and {len(graph.edges)} edges")

    # 2. Local validation
    verdict = graph.validate()
    stats = graph.stats()
    print(f"  - DAG: {verdict.is_valid} ({verdict.error or 'no error'})")
    print(f"  - Components: {stats.connected_components}, max depth: {stats.max_depth}")

    # 3. Cascade deletion
    trimmed, result = graph.remove_node("llm-3")
    print(
        f"\n🗑️  Deleted {result.node_id}: {len(result.deleted_edges)} edges cascaded, "
        f"{len(trimmed.edges)} left"
    )
    print(f"  - Isolated nodes after deletion: {trimmed.stats().has_isolated_nodes}")

    # 4. Optional round trip
    if not args.submit:
        return

    client = PipelineClient.from_settings()
    if args.url:
        client = PipelineClient(base_url=args.url, timeout_seconds=client.timeout_seconds)

    print(f"\n📡 Submitting to {client.parse_url} ...")
    response = client.submit(graph)
    if response is None:
        print("❌ Backend not reachable")
        return

    print("\n" + "=" * 60)
    print("✅ Pipeline Validation Results")
    print("=" * 60)
    print(f"  Total Nodes: {response.node_count}")
    print(f"  Total Edges: {response.edge_count}")
    print(f"  DAG Status: {'Valid' if response.is_valid_dag else 'Invalid'}")
    if response.error:
        print(f"  Error: {response.error}")


if __name__ == "__main__":
    main()
