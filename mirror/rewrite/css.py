"""Rewrite ``url(...)`` and ``@import`` references inside CSS."""

from __future__ import annotations

import re

from mirror.rewrite.urls import to_absolute, to_asset_proxy_url

# ``@import "x"`` / ``@import 'x'``; the ``@import url(x)`` form is covered by
# the url() branch, so both forms come out as ``url('<proxied>')``.
_CSS_REF_RE = re.compile(
    r"""url\(\s*([^)]*?)\s*\)|@import\s+(['"])(.*?)\2""",
    re.IGNORECASE,
)


def _unquote(ref: str) -> str:
    ref = ref.strip()
    if len(ref) >= 2 and ref[0] == ref[-1] and ref[0] in "'\"":
        return ref[1:-1].strip()
    return ref.strip("'\"").strip()


def rewrite_css(css: str, base_url: str) -> str:
    """Return *css* with every fetchable reference routed through the asset proxy.

    ``data:`` URIs, fragment-only references and anything that fails to
    resolve are left exactly as they were.
    """

    def replace(match: re.Match[str]) -> str:
        if match.group(1) is not None:
            ref = _unquote(match.group(1))
            if not ref or ref.lower().startswith("data:") or ref.startswith("#"):
                return match.group(0)
            absolute = to_absolute(base_url, ref)
            if not absolute:
                return match.group(0)
            return f"url('{to_asset_proxy_url(absolute)}')"

        ref = match.group(3).strip()
        absolute = to_absolute(base_url, ref) if ref else None
        if not absolute:
            return match.group(0)
        return f"@import url('{to_asset_proxy_url(absolute)}')"

    return _CSS_REF_RE.sub(replace, css)
