"""PDF endpoints.

Routes
------
GET /api/pdf-text?url=<url>   {text, truncated, bytes}
GET /api/resolve?url=<url>    {mode: "pdf" | "html"}
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends

from mirror.api.deps import get_pipeline
from mirror.api.schemas import PdfTextResponse, ResolveResponse
from mirror.pipeline import MirrorPipeline

router = APIRouter()


@router.get("/pdf-text", response_model=PdfTextResponse)
def pdf_text_endpoint(
    url: Optional[str] = None,
    pipeline: MirrorPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    """Download a remote PDF and return its plain text.

    An empty ``text`` means the PDF has no extractable text layer.
    """
    result = pipeline.pdf_text(url)
    return {"text": result.text, "truncated": result.truncated, "bytes": result.bytes}


@router.get("/resolve", response_model=ResolveResponse)
def resolve_endpoint(
    url: Optional[str] = None,
    pipeline: MirrorPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    """Tell the client whether to open *url* as a PDF or as a page."""
    return {"mode": pipeline.resolve_mode(url)}
