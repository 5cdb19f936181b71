"""Rewrite navigation and asset references inside a parsed HTML tree.

The tree is mutated in place; callers serialise the same object afterwards.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from mirror.rewrite.css import rewrite_css
from mirror.rewrite.urls import (
    rewrite_srcset,
    to_absolute,
    to_asset_proxy_url,
    to_navigation_url,
)

logger = logging.getLogger(__name__)

# (tag names, attribute) pairs whose value is fetched by the browser as an asset.
_ASSET_ATTRS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("img", "script", "source", "video", "audio", "track", "embed", "input"), "src"),
    (("video",), "poster"),
    (("link",), "href"),
)
_NAV_TAGS = ("a", "area")
_SRCSET_TAGS = ("img", "source")


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def effective_base_url(soup: BeautifulSoup, fallback: str) -> str:
    """Honour a document ``<base href>`` when it resolves to an http(s) URL."""
    tag = soup.find("base", href=True)
    if isinstance(tag, Tag):
        candidate = to_absolute(fallback, str(tag["href"]))
        if candidate:
            return candidate
    return fallback


def rewrite_navigation(root: Tag, base_url: str, lang: str | None) -> int:
    """Point every anchor at the mirror's page endpoint; returns the count rewritten.

    Fragment-only links are kept as-is so in-page jumps still work; links
    that cannot be resolved to http(s) are left untouched.
    """
    count = 0
    for node in root.find_all(_NAV_TAGS, href=True):
        href = str(node["href"]).strip()
        if href.startswith("#"):
            continue
        absolute = to_absolute(base_url, href)
        if not absolute:
            continue
        node["href"] = to_navigation_url(lang, absolute)
        count += 1
    return count


def rewrite_assets(root: Tag, base_url: str) -> int:
    """Route every asset reference under *root* through the asset proxy."""
    count = 0
    for names, attr in _ASSET_ATTRS:
        for node in root.find_all(names, attrs={attr: True}):
            absolute = to_absolute(base_url, str(node[attr]))
            if absolute:
                node[attr] = to_asset_proxy_url(absolute)
                count += 1

    for node in root.find_all(_SRCSET_TAGS, srcset=True):
        node["srcset"] = rewrite_srcset(base_url, str(node["srcset"]))
        count += 1

    for node in root.find_all(style=True):
        node["style"] = rewrite_css(str(node["style"]), base_url)

    for node in root.find_all("style"):
        if node.string:
            node.string = rewrite_css(str(node.string), base_url)
    return count


def rewrite_document(soup: BeautifulSoup, origin_url: str, lang: str | None) -> None:
    """Rewrite a full page so it can be re-served from the mirror's origin."""
    base_url = effective_base_url(soup, origin_url)
    for base in soup.find_all("base"):
        base.decompose()

    assets = rewrite_assets(soup, base_url)
    links = rewrite_navigation(soup, base_url, lang)
    logger.debug("Rewrote %d asset(s) and %d link(s) for %s", assets, links, origin_url)

