"""Asset proxy endpoint.

Routes
------
GET /api/proxy?url=<url>   Upstream body, CSS rewritten

Only allow-listed hosts are served, so the endpoint cannot be used as an open
proxy.  Upstream error statuses are passed through unchanged.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from mirror.api.deps import get_pipeline
from mirror.errors import UpstreamError
from mirror.pipeline import MirrorPipeline

router = APIRouter()

CACHE_CONTROL = "public, s-maxage=3600, stale-while-revalidate=86400"


@router.get("/proxy")
def proxy_endpoint(
    url: Optional[str] = None,
    pipeline: MirrorPipeline = Depends(get_pipeline),
) -> Response:
    """Re-serve an allow-listed asset from the mirror's origin."""
    try:
        asset = pipeline.proxy_asset(url)
    except UpstreamError as exc:
        return PlainTextResponse(f"Remote error: {exc.status}", status_code=exc.status)
    return Response(
        content=asset.content,
        status_code=asset.status_code,
        media_type=asset.content_type,
        headers={"Cache-Control": CACHE_CONTROL},
    )
