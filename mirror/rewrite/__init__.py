"""Rewriting of URLs, CSS and HTML trees onto the mirror's own origin."""

from mirror.rewrite.css import rewrite_css
from mirror.rewrite.html import rewrite_assets, rewrite_document, rewrite_navigation
from mirror.rewrite.urls import (
    rewrite_srcset,
    to_absolute,
    to_asset_proxy_url,
    to_navigation_url,
)

__all__ = [
    "rewrite_assets",
    "rewrite_css",
    "rewrite_document",
    "rewrite_navigation",
    "rewrite_srcset",
    "to_absolute",
    "to_asset_proxy_url",
    "to_navigation_url",
]
