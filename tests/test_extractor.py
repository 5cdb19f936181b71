"""Tests for reader-mode content extraction."""

from __future__ import annotations

from mirror.scraper.extractor import (
    EMPTY_PLACEHOLDER,
    MAX_BODY_CHARS,
    MAX_PARAGRAPHS,
    extract_reader_content,
)

_ORIGIN = "https://news.example.com/story"


class TestSelectorStrategy:
    def test_picks_longest_matching_container(self) -> None:
        html = """\
<html><head><title> Big   Story </title></head><body>
  <article><p>Teaser.</p></article>
  <div class="content"><p>The full body of the story, which is considerably longer
  than the teaser above and should therefore win.</p></div>
</body></html>
"""
        result = extract_reader_content(html, _ORIGIN)

        assert result.strategy == "selectors"
        assert result.title == "Big Story"
        assert "considerably longer" in result.content_html
        assert "Teaser" not in result.content_html

    def test_role_main(self) -> None:
        html = '<body><div role="main"><h1>Heading</h1><p>Body text</p></div></body>'
        result = extract_reader_content(html, _ORIGIN)

        assert result.strategy == "selectors"
        assert result.content_html.startswith('<div role="main">')


class TestParagraphStrategy:
    def test_skips_boilerplate_and_empty_paragraphs(self) -> None:
        html = """\
<html><body>
  <nav><p>Home | World | Sport</p></nav>
  <div class="sidebar-widget"><p>Trending now</p></div>
  <div><p>First paragraph.</p><p>   </p><p>Fish &amp; chips <b>today</b>.</p></div>
  <footer><p>Copyright</p></footer>
</body></html>
"""
        result = extract_reader_content(html, _ORIGIN)

        assert result.strategy == "paragraphs"
        assert result.content_html == (
            "<p>First paragraph.</p>\n<p>Fish &amp; chips today .</p>"
        )

    def test_caps_paragraph_count(self) -> None:
        paragraphs = "".join(f"<p>Paragraph {i}</p>" for i in range(MAX_PARAGRAPHS + 10))
        result = extract_reader_content(f"<body><div>{paragraphs}</div></body>", _ORIGIN)

        assert result.content_html.count("<p>") == MAX_PARAGRAPHS
        assert f"Paragraph {MAX_PARAGRAPHS}<" not in result.content_html


class TestBodyStrategy:
    def test_body_text_without_paragraphs(self) -> None:
        html = "<html><head><title>Loose</title></head><body><div>Just some loose text</div></body></html>"
        result = extract_reader_content(html, _ORIGIN)

        assert result.strategy == "body"
        assert result.content_html == "<p>Just some loose text</p>"
        assert result.content_html != EMPTY_PLACEHOLDER

    def test_long_body_is_truncated(self) -> None:
        result = extract_reader_content(f"<body><div>{'a' * 20000}</div></body>", _ORIGIN)

        assert result.content_html == f"<p>{'a' * MAX_BODY_CHARS}</p>"

    def test_empty_body_yields_placeholder(self) -> None:
        result = extract_reader_content("<html><body><script>x()</script></body></html>", _ORIGIN)

        assert result.content_html == EMPTY_PLACEHOLDER

    def test_document_without_body_element(self) -> None:
        result = extract_reader_content("<title>T</title>Bare text & more", _ORIGIN)

        assert result.content_html == "<p>Bare text &amp; more</p>"
        assert result.title == "T"


class TestTitle:
    def test_falls_back_to_hostname(self) -> None:
        result = extract_reader_content("<body><article>x</article></body>", _ORIGIN)
        assert result.title == "news.example.com"


class TestBaseUrl:
    def test_defaults_to_origin(self) -> None:
        result = extract_reader_content("<body><article>x</article></body>", _ORIGIN)
        assert result.base_url == _ORIGIN

    def test_honours_base_href(self) -> None:
        html = (
            '<html><head><base href="/archive/2024/"></head>'
            "<body><article>x</article></body></html>"
        )
        result = extract_reader_content(html, _ORIGIN)
        assert result.base_url == "https://news.example.com/archive/2024/"

    def test_base_survives_body_fallback(self) -> None:
        html = '<base href="https://cdn.example.com/">Loose words only'
        result = extract_reader_content(html, _ORIGIN)

        assert result.strategy == "body"
        assert result.base_url == "https://cdn.example.com/"
