"""translated-mirror CLI: entry-point for every serving mode.

Usage:
    python cli/main.py --help

Commands:
    translate  → full-page mode (rewritten, translated HTML)
    reader     → reader mode (title + sanitized HTML)
    links      → ranked same-site links
    pdf        → PDF text extraction
    serve      → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from mirror.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import NoReturn, Optional

import typer

from mirror.config import configure_logging
from mirror.errors import MirrorError
from mirror.pipeline import MirrorPipeline

app = typer.Typer(
    name="mirror",
    help="translated-mirror CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL."),
) -> None:
    configure_logging(log_level)


def _fail(exc: MirrorError) -> NoReturn:
    typer.echo(f"❌ {exc.message}", err=True)
    raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Full page
# ---------------------------------------------------------------------------
@app.command("translate")
def translate(
    url: str = typer.Option(..., help="Page to translate."),
    lang: Optional[str] = typer.Option(None, help="Target language (es | pt | fr)."),
    output: Optional[Path] = typer.Option(None, help="Write the HTML here instead of stdout."),
) -> None:
    """Fetch a page, rewrite its links and assets, and translate its text."""
    typer.echo(f"[translate] Fetching {url!r} …", err=True)
    try:
        html = MirrorPipeline().translate_page(url, lang)
    except MirrorError as exc:
        _fail(exc)

    if output is None:
        typer.echo(html)
        return
    output.write_text(html, encoding="utf-8")
    typer.echo(f"[translate] Wrote {len(html)} chars to {output}", err=True)


# ---------------------------------------------------------------------------
# Reader mode
# ---------------------------------------------------------------------------
@app.command("reader")
def reader(
    url: str = typer.Option(..., help="Page to read."),
    lang: Optional[str] = typer.Option(None, help="Target language (es | pt | fr)."),
) -> None:
    """Print the translated main content of a page."""
    typer.echo(f"[reader] Extracting {url!r} …", err=True)
    try:
        result = MirrorPipeline().reader(url, lang)
    except MirrorError as exc:
        _fail(exc)

    typer.echo(f"[reader] Title  : {result.title or '(none)'}")
    typer.echo(f"[reader] Source : {result.source_url}")
    typer.echo("")
    typer.echo(result.content_html)


# ---------------------------------------------------------------------------
# Links fallback
# ---------------------------------------------------------------------------
@app.command("links")
def links(
    url: str = typer.Option(..., help="Page to scan for article links."),
) -> None:
    """List the most relevant same-site links of a page."""
    try:
        result = MirrorPipeline().links(url)
    except MirrorError as exc:
        _fail(exc)

    if not result.links:
        typer.echo("[links] No relevant links found.")
        return
    for link in result.links:
        typer.echo(f"  {link.score:>4}  {link.title}\n        {link.url}")


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------
@app.command("pdf")
def pdf(
    url: str = typer.Option(..., help="Remote PDF URL."),
) -> None:
    """Print the text of a remote PDF."""
    try:
        result = MirrorPipeline().pdf_text(url)
    except MirrorError as exc:
        _fail(exc)

    typer.echo(f"[pdf] Bytes     : {result.bytes}")
    typer.echo(f"[pdf] Truncated : {result.truncated}")
    typer.echo("")
    typer.echo(result.text or "[pdf] No extractable text (scanned document?).")


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8000, help="Bind port."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn  # noqa: PLC0415

    uvicorn.run("mirror.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
