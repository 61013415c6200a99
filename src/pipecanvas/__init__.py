"""pipecanvas: graph model and topology validation for visual pipeline canvases.

The canvas UI assembles typed nodes and directed edges; this package owns the
snapshot model those operations mutate, the cascading deletion engine, and the
DAG/cycle/statistics checks run on submit.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
