"""Reader-mode extraction: pick the subtree most likely to be the article body.

Strategies, first success wins:

1. ``selectors``: among all matches of a fixed list of article-like
   selectors, keep the one with the most visible text.
2. ``paragraphs``: strip navigation/sidebar/footer/script subtrees from the
   body and rebuild markup from up to 50 non-empty paragraphs.
3. ``body``: the first 15 000 characters of body text as one
   paragraph, or a placeholder paragraph when the body is empty.

Visible-text length is a crude relevance proxy (a long comment section can
outscore a short article); that trade-off is accepted.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from html import escape
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

from mirror.rewrite.html import effective_base_url

logger = logging.getLogger(__name__)

CONTENT_SELECTORS = (
    "article",
    "main",
    "[role=main]",
    "#content",
    "#main-content",
    ".content",
    ".article",
    ".article-body",
    ".post-content",
    ".entry-content",
    ".story-body",
)
_BOILERPLATE_TAGS = ["nav", "aside", "footer", "header", "script", "style", "noscript", "form", "iframe"]
_BOILERPLATE_SELECTORS = (
    "[role=navigation]",
    "[role=complementary]",
    "[class*=sidebar]",
    "[id*=sidebar]",
    "[class*=footer]",
    "[class*=menu]",
)
MAX_PARAGRAPHS = 50
MAX_BODY_CHARS = 15_000
EMPTY_PLACEHOLDER = "<p>No readable content found on this page.</p>"

_WS_RE = re.compile(r"\s+")


@dataclass
class ExtractedContent:
    title: str
    content_html: str
    strategy: str
    base_url: str


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def visible_text(node: Tag) -> str:
    return collapse_whitespace(node.get_text(" "))


def extract_title(soup: BeautifulSoup, origin_url: str) -> str:
    """Return the ``<title>`` text, or the origin hostname if there is none."""
    tag = soup.find("title")
    title = collapse_whitespace(tag.get_text()) if isinstance(tag, Tag) else ""
    return title or (urlsplit(origin_url).hostname or "")


def _best_selector_match(soup: BeautifulSoup) -> Tag | None:
    best: Tag | None = None
    best_len = 0
    for selector in CONTENT_SELECTORS:
        for node in soup.select(selector):
            length = len(visible_text(node))
            if length > best_len:
                best, best_len = node, length
    return best


def _strip_boilerplate(body: Tag) -> None:
    for node in body.find_all(_BOILERPLATE_TAGS):
        if not node.decomposed:
            node.decompose()
    for selector in _BOILERPLATE_SELECTORS:
        for node in body.select(selector):
            if not node.decomposed:
                node.decompose()


def _paragraph_fallback(body: Tag) -> str:
    paragraphs = []
    for p in body.find_all("p"):
        text = visible_text(p)
        if text:
            paragraphs.append(f"<p>{escape(text)}</p>")
        if len(paragraphs) >= MAX_PARAGRAPHS:
            break
    return "\n".join(paragraphs)


def extract_reader_content(html: str, origin_url: str) -> ExtractedContent:
    """Extract the title, the main-content HTML and the base URL of *html*.

    ``base_url`` honours a document ``<base href>``; relative references in
    ``content_html`` resolve against it, not against *origin_url*.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = extract_title(soup, origin_url)
    base_url = effective_base_url(soup, origin_url)

    best = _best_selector_match(soup)
    if best is not None:
        logger.debug("Reader content for %s from selector match", origin_url)
        return ExtractedContent(
            title=title, content_html=str(best), strategy="selectors", base_url=base_url
        )

    body = soup.body
    if body is None:
        for node in soup.find_all(["head", "title"]):
            if not node.decomposed:
                node.decompose()
        body = soup
    _strip_boilerplate(body)
    paragraphs = _paragraph_fallback(body)
    if paragraphs:
        logger.debug("Reader content for %s from paragraph fallback", origin_url)
        return ExtractedContent(
            title=title, content_html=paragraphs, strategy="paragraphs", base_url=base_url
        )

    text = visible_text(body)[:MAX_BODY_CHARS]
    logger.debug("Reader content for %s from body text (%d chars)", origin_url, len(text))
    content = f"<p>{escape(text)}</p>" if text else EMPTY_PLACEHOLDER
    return ExtractedContent(
        title=title, content_html=content, strategy="body", base_url=base_url
    )
