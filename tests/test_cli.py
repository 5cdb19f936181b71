"""Tests for the ``mirror`` CLI.

``MirrorPipeline`` is patched inside ``cli.main`` so commands are exercised
without network access; the pipeline itself is covered by ``test_api``.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from cli.main import app
from mirror.errors import HostBlocked
from mirror.scraper.models import LinkCandidate, LinksResult, PdfResult, ReaderResult

runner = CliRunner()


def _pipeline(**methods) -> MagicMock:
    pipeline = MagicMock()
    for name, value in methods.items():
        getattr(pipeline, name).return_value = value
    return pipeline


def test_translate_prints_html():
    pipeline = _pipeline(translate_page="<html><body>[ES] Hola</body></html>")
    with patch("cli.main.MirrorPipeline", return_value=pipeline):
        result = runner.invoke(app, ["translate", "--url", "https://example.com", "--lang", "es"])

    assert result.exit_code == 0
    assert "[ES] Hola" in result.stdout
    pipeline.translate_page.assert_called_once_with("https://example.com", "es")


def test_translate_writes_output_file(tmp_path):
    out = tmp_path / "page.html"
    pipeline = _pipeline(translate_page="<p>[FR] Salut</p>")
    with patch("cli.main.MirrorPipeline", return_value=pipeline):
        result = runner.invoke(
            app, ["translate", "--url", "https://example.com", "--output", str(out)]
        )

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "<p>[FR] Salut</p>"
    pipeline.translate_page.assert_called_once_with("https://example.com", None)


def test_translate_blocked_host():
    pipeline = MagicMock()
    pipeline.translate_page.side_effect = HostBlocked("127.0.0.1")
    with patch("cli.main.MirrorPipeline", return_value=pipeline):
        result = runner.invoke(app, ["translate", "--url", "http://127.0.0.1/"])

    assert result.exit_code == 1
    assert "Host blocked" in result.output


def test_reader():
    pipeline = _pipeline(
        reader=ReaderResult(
            title="[ES] Titular",
            source_url="https://example.com/a",
            content_html="<p>[ES] Cuerpo</p>",
        )
    )
    with patch("cli.main.MirrorPipeline", return_value=pipeline):
        result = runner.invoke(app, ["reader", "--url", "https://example.com/a"])

    assert result.exit_code == 0
    assert "[reader] Title  : [ES] Titular" in result.stdout
    assert "[reader] Source : https://example.com/a" in result.stdout
    assert "<p>[ES] Cuerpo</p>" in result.stdout


def test_links_lists_candidates():
    pipeline = _pipeline(
        links=LinksResult(
            source_url="https://example.com/",
            links=[LinkCandidate(title="A long headline", url="https://example.com/s", score=120)],
        )
    )
    with patch("cli.main.MirrorPipeline", return_value=pipeline):
        result = runner.invoke(app, ["links", "--url", "https://example.com/"])

    assert result.exit_code == 0
    assert "A long headline" in result.stdout
    assert "https://example.com/s" in result.stdout
    assert "120" in result.stdout


def test_links_empty():
    pipeline = _pipeline(links=LinksResult(source_url="https://example.com/"))
    with patch("cli.main.MirrorPipeline", return_value=pipeline):
        result = runner.invoke(app, ["links", "--url", "https://example.com/"])

    assert result.exit_code == 0
    assert "No relevant links found" in result.stdout


def test_pdf_without_text_layer():
    pipeline = _pipeline(pdf_text=PdfResult(text="", truncated=False, bytes=5242880))
    with patch("cli.main.MirrorPipeline", return_value=pipeline):
        result = runner.invoke(app, ["pdf", "--url", "https://example.com/scan.pdf"])

    assert result.exit_code == 0
    assert "[pdf] Bytes     : 5242880" in result.stdout
    assert "[pdf] Truncated : False" in result.stdout
    assert "No extractable text" in result.stdout


def test_serve_runs_uvicorn():
    with patch("uvicorn.run") as run:
        result = runner.invoke(app, ["serve", "--port", "9001"])

    assert result.exit_code == 0
    run.assert_called_once_with("mirror.api.app:app", host="127.0.0.1", port=9001, reload=False)
