"""Rank same-site article links for pages that cannot be shown in reader mode."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup, Tag

from mirror.rewrite.urls import is_same_site
from mirror.scraper.extractor import collapse_whitespace
from mirror.scraper.models import LinkCandidate

_EXCLUDED_TOKENS = (
    "login",
    "suscrib",
    "subscribe",
    "facebook",
    "twitter",
    "instagram",
    "share",
    "whatsapp",
    "terms",
    "privacy",
    "cookies",
)
_TITLE_CASE_RE = re.compile(r"[A-ZÁÉÍÓÚÑ][^.!?]{20,}")
_CONTENT_CONTAINER_CLASSES = frozenset({"content", "article"})


@dataclass(frozen=True)
class LinkPolicy:
    excluded_tokens: tuple[str, ...] = _EXCLUDED_TOKENS
    min_title_length: int = 25
    max_length_score: int = 180
    max_links: int = 15


def _normalize_url(absolute: str) -> str:
    parts = urlsplit(absolute)
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))


def _context_bonus(anchor: Tag) -> int:
    bonus = 0
    if anchor.find_parent("article") is not None:
        bonus += 45
    if anchor.find_parent("main") is not None:
        bonus += 35
    if anchor.find_parent(["h1", "h2", "h3"]) is not None:
        bonus += 50
    for node in (anchor, *anchor.parents):
        classes = set(node.get("class") or [])
        if node.get("id") == "content" or classes & _CONTENT_CONTAINER_CLASSES:
            bonus += 40
            break
    return bonus


class LinkScorer:
    """Extract, score and de-duplicate same-site anchor candidates."""

    def __init__(self, policy: LinkPolicy | None = None) -> None:
        self._policy = policy or LinkPolicy()

    def has_excluded_token(self, text: str) -> bool:
        lowered = text.lower()
        return any(token in lowered for token in self._policy.excluded_tokens)

    def score(self, anchor: Tag, title: str) -> int:
        length_score = min(len(title), self._policy.max_length_score)
        title_case_bonus = 25 if _TITLE_CASE_RE.search(title) else 0
        return length_score + title_case_bonus + _context_bonus(anchor)

    def rank(self, html: str, base_url: str) -> list[LinkCandidate]:
        """Return at most ``max_links`` candidates, best first."""
        soup = BeautifulSoup(html, "html.parser")
        base_host = urlsplit(base_url).hostname or ""
        by_url: dict[str, LinkCandidate] = {}

        for anchor in soup.find_all("a", href=True):
            raw_href = str(anchor["href"]).strip()
            if not raw_href or raw_href.startswith("#"):
                continue
            if raw_href.lower().startswith(("mailto:", "tel:", "javascript:")):
                continue
            try:
                absolute = urljoin(base_url, raw_href)
                parts = urlsplit(absolute)
                host = parts.hostname or ""
            except ValueError:
                continue
            if parts.scheme not in ("http", "https") or not host:
                continue
            if not is_same_site(host, base_host):
                continue

            title = collapse_whitespace(anchor.get_text(" "))
            if len(title) < self._policy.min_title_length:
                continue
            if self.has_excluded_token(title) or self.has_excluded_token(absolute):
                continue

            url = _normalize_url(absolute)
            score = self.score(anchor, title)
            existing = by_url.get(url)
            if existing is None or score > existing.score:
                by_url[url] = LinkCandidate(title=title, url=url, score=score)

        ranked = sorted(by_url.values(), key=lambda c: c.score, reverse=True)
        return ranked[: self._policy.max_links]
