"""Core package initializer for pipecanvas.

Downstream code imports from the submodules directly:
    from pipecanvas.core.settings import settings, load_settings, Settings, get_logger
    from pipecanvas.core.graph import Graph, validate_dag, has_cycles
"""

from __future__ import annotations

__all__ = ["__doc__"]
