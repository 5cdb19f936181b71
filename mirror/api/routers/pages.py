"""Full-page mode endpoints.

Routes
------
GET /api/translate?url=<url>&lang=<lang>   Rewritten, translated HTML
GET /view?url=<url>                        Same, default language
GET /{lang}?url=<url>                      Same, language from the path

Rewritten navigation links point at ``/view`` or ``/{lang}`` so readers keep
browsing through the mirror.  Work stops early if the client disconnects.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from mirror.api.cancel import run_until_disconnect
from mirror.api.deps import get_pipeline
from mirror.pipeline import MirrorPipeline

router = APIRouter()

_HTML_MEDIA_TYPE = "text/html; charset=utf-8"


async def _render(
    request: Request, pipeline: MirrorPipeline, url: Optional[str], lang: Optional[str]
) -> HTMLResponse:
    html = await run_until_disconnect(request, pipeline.translate_page, url, lang)
    return HTMLResponse(content=html, media_type=_HTML_MEDIA_TYPE)


@router.get("/api/translate", response_class=HTMLResponse)
async def translate_endpoint(
    request: Request,
    url: Optional[str] = None,
    lang: Optional[str] = None,
    pipeline: MirrorPipeline = Depends(get_pipeline),
) -> HTMLResponse:
    """Fetch *url*, rewrite its references and translate its body text."""
    return await _render(request, pipeline, url, lang)


@router.get("/view", response_class=HTMLResponse)
async def view_endpoint(
    request: Request,
    url: Optional[str] = None,
    pipeline: MirrorPipeline = Depends(get_pipeline),
) -> HTMLResponse:
    return await _render(request, pipeline, url, None)


@router.get("/{lang}", response_class=HTMLResponse)
async def lang_endpoint(
    request: Request,
    lang: str,
    url: Optional[str] = None,
    pipeline: MirrorPipeline = Depends(get_pipeline),
) -> HTMLResponse:
    return await _render(request, pipeline, url, lang)
