from __future__ import annotations

from .pipeline import PARSE_PATH, PipelineClient, build_payload, submit_pipeline

__all__ = [
    "PARSE_PATH",
    "PipelineClient",
    "build_payload",
    "submit_pipeline",
]
