"""Tests for the reader-mode HTML sanitizer."""

from __future__ import annotations

import pytest

from mirror.scraper.sanitizer import ReaderSanitizer, SanitizerPolicy


@pytest.fixture()
def sanitizer() -> ReaderSanitizer:
    return ReaderSanitizer()


class TestSanitize:
    def test_drops_dangerous_elements_with_content(self, sanitizer: ReaderSanitizer) -> None:
        html = (
            "<p>Keep</p><script>alert('x')</script><style>p{}</style>"
            '<iframe src="https://evil.test"></iframe><form><input name="q"></form>'
        )
        assert sanitizer.sanitize(html) == "<p>Keep</p>"

    def test_unwraps_unknown_elements(self, sanitizer: ReaderSanitizer) -> None:
        html = "<div><section><p>Hi <font>there</font></p></section></div>"
        assert sanitizer.sanitize(html) == "<p>Hi there</p>"

    def test_strips_event_handlers_and_unknown_attributes(self, sanitizer: ReaderSanitizer) -> None:
        html = (
            '<p class="lead" onclick="steal()">Read '
            '<a href="/next" target="_blank" onmouseover="x()">more</a></p>'
        )
        assert sanitizer.sanitize(html) == '<p>Read <a href="/next">more</a></p>'

    @pytest.mark.parametrize(
        "value", ["javascript:alert(1)", " JaVaScRiPt:alert(1)", "java\nscript:alert(1)"]
    )
    def test_removes_javascript_urls(self, sanitizer: ReaderSanitizer, value: str) -> None:
        result = sanitizer.sanitize(f'<a href="{value}" title="t">x</a><img src="{value}" alt="a">')
        assert "javascript" not in result.lower()
        assert 'title="t"' in result
        assert 'alt="a"' in result

    def test_keeps_media_attributes(self, sanitizer: ReaderSanitizer) -> None:
        html = '<img src="/api/proxy?url=x" srcset="/api/proxy?url=y 2x" alt="pic" width="10">'
        result = sanitizer.sanitize(html)
        assert 'srcset="/api/proxy?url=y 2x"' in result
        assert 'width="10"' in result

    def test_removes_comments(self, sanitizer: ReaderSanitizer) -> None:
        assert sanitizer.sanitize("<p>a<!-- secret -->b</p>") == "<p>ab</p>"

    def test_is_idempotent(self, sanitizer: ReaderSanitizer) -> None:
        messy = (
            '<div onclick="x()"><h2 id="t">Title</h2><!-- c --><script>bad()</script>'
            '<p style="color:red">Text <span data-x="1">inline</span> '
            '<a href="javascript:void(0)">link</a></p><custom-tag>kept text</custom-tag></div>'
        )
        once = sanitizer.sanitize(messy)
        assert sanitizer.sanitize(once) == once

    def test_custom_policy(self) -> None:
        sanitizer = ReaderSanitizer(SanitizerPolicy(allowed_tags=frozenset({"p"})))
        assert sanitizer.sanitize("<p><em>only</em> paragraphs</p>") == "<p>only paragraphs</p>"
