"""Reader-mode and links-fallback endpoints.

Routes
------
GET /api/reader?url=<url>&lang=<lang>   {title, sourceUrl, contentHtml}
GET /api/links?url=<url>                {sourceUrl, links: [{title, url}]}
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request

from mirror.api.cancel import run_until_disconnect
from mirror.api.deps import get_pipeline
from mirror.api.schemas import LinksResponse, ReaderResponse
from mirror.pipeline import MirrorPipeline

router = APIRouter()


@router.get("/reader", response_model=ReaderResponse)
async def reader_endpoint(
    request: Request,
    url: Optional[str] = None,
    lang: Optional[str] = None,
    pipeline: MirrorPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    """Return the translated, sanitized main content of *url*."""
    result = await run_until_disconnect(request, pipeline.reader, url, lang)
    return {
        "title": result.title,
        "sourceUrl": result.source_url,
        "contentHtml": result.content_html,
    }


@router.get("/links", response_model=LinksResponse)
def links_endpoint(
    url: Optional[str] = None,
    pipeline: MirrorPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    """Return ranked same-site links; an empty list is a valid answer."""
    result = pipeline.links(url)
    return {
        "sourceUrl": result.source_url,
        "links": [{"title": link.title, "url": link.url} for link in result.links],
    }
