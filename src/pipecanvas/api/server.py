"""
ASGI Entry Point for the pipecanvas API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` before the application factory
reads settings.

Usage
-----
Run via the module entry point:
    $ python -m pipecanvas.api.server

Or via uvicorn directly:
    $ uvicorn pipecanvas.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from pipecanvas.api.app import create_app
from pipecanvas.core.settings import load_settings

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #

# Load .env BEFORE the settings cache is rebuilt for the factory.
load_dotenv(dotenv_path=Path(".env"))
load_settings.cache_clear()

# Factory invocation
app = create_app()


def main(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the API server locally."""
    uvicorn.run(
        "pipecanvas.api.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level=load_settings().log_level.lower(),
    )


if __name__ == "__main__":
    main(reload=True)
