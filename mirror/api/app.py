"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging.  No state is shared between requests:
each request builds its own pipeline through :func:`mirror.api.deps.get_pipeline`.

Routers
-------
    /api/translate, /view, /{lang}   full-page mode (HTML)
    /api/reader, /api/links          reader mode and links fallback (JSON)
    /api/pdf-text, /api/resolve      PDF text extraction (JSON)
    /api/proxy                       allow-listed asset passthrough

Errors
------
Every :class:`~mirror.errors.MirrorError` is rendered as a short plain-text
body with the status code the error carries.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from mirror import __version__
from mirror.config import configure_logging
from mirror.errors import MirrorError

from mirror.api.routers import pages as pages_router
from mirror.api.routers import pdf as pdf_router
from mirror.api.routers import proxy as proxy_router
from mirror.api.routers import reader as reader_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup."""
    configure_logging()
    yield


async def mirror_error_handler(request: Request, exc: MirrorError) -> PlainTextResponse:
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Translated Mirror API",
        description=(
            "Fetches remote pages, rewrites them so they can be re-served from "
            "this origin, and replaces their visible text with translations. "
            "Also offers reader mode, PDF text extraction and an asset proxy."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MirrorError, mirror_error_handler)  # type: ignore[arg-type]

    app.include_router(reader_router.router, prefix="/api", tags=["reader"])
    app.include_router(pdf_router.router, prefix="/api", tags=["pdf"])
    app.include_router(proxy_router.router, prefix="/api", tags=["proxy"])
    # Registered last: "/{lang}" would otherwise shadow single-segment paths.
    app.include_router(pages_router.router, tags=["pages"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn mirror.api.app:app --reload
app = create_app()
