"""FastAPI dependencies shared by the routers.

Tests swap the pipeline with ``app.dependency_overrides[get_pipeline]``.
"""

from __future__ import annotations

from mirror.pipeline import MirrorPipeline


def get_pipeline() -> MirrorPipeline:
    """Return a fresh pipeline per request; nothing is shared between requests."""
    return MirrorPipeline()
