"""
App assembly entry point.

Builds the process-wide FastAPI ``app`` from environment settings, e.g.
``uvicorn resource_service.app:app``.
"""

from resource_service.api.main import create_app

app = create_app()
