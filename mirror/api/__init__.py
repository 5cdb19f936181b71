"""HTTP surface of the mirror (FastAPI).

``uvicorn mirror.api:app`` serves the same instance as ``mirror.api.app:app``.
"""

from mirror.api.app import app, create_app

__all__ = ["app", "create_app"]
