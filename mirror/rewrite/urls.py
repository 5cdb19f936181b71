"""URL resolution and mapping onto the mirror's own endpoints."""

from __future__ import annotations

import re
from urllib.parse import quote, urljoin, urlsplit

ASSET_PROXY_PATH = "/api/proxy"
DEFAULT_VIEW_PATH = "/view"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z\d+.-]*:")
_SKIPPED_PREFIXES = ("mailto:", "tel:", "javascript:")
_WS_RE = re.compile(r"\s+")


def to_absolute(base: str, raw: str | None) -> str | None:
    """Resolve *raw* against *base*, or return ``None`` if it must not be fetched.

    Empty values, fragment-only references and ``mailto:``/``tel:``/
    ``javascript:`` links yield ``None``, as does any scheme other than
    http(s).  Protocol-relative references (``//host/path``) resolve to https.
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value or value.startswith("#"):
        return None
    if value.lower().startswith(_SKIPPED_PREFIXES):
        return None
    if value.startswith("//"):
        return f"https:{value}"
    if _SCHEME_RE.match(value) and not value.lower().startswith(("http:", "https:")):
        return None
    try:
        absolute = urljoin(base, value)
    except ValueError:
        return None
    if urlsplit(absolute).scheme not in ("http", "https"):
        return None
    return absolute


def to_asset_proxy_url(absolute: str) -> str:
    return f"{ASSET_PROXY_PATH}?url={quote(absolute, safe='')}"


def to_navigation_url(lang: str | None, absolute: str) -> str:
    """Map *absolute* to the mirror's page endpoint, namespaced by *lang* if given."""
    path = f"/{lang}" if lang else DEFAULT_VIEW_PATH
    return f"{path}?url={quote(absolute, safe='')}"


def rewrite_srcset(base: str, srcset: str) -> str:
    """Proxy every URL in a ``srcset`` list, keeping width/density descriptors.

    Candidates that do not resolve are passed through unchanged so the list
    stays well-formed.
    """
    entries = []
    for entry in srcset.split(","):
        part = entry.strip()
        if not part:
            continue
        url_part, *descriptors = _WS_RE.split(part)
        absolute = to_absolute(base, url_part)
        next_url = to_asset_proxy_url(absolute) if absolute else url_part
        entries.append(" ".join([next_url, *descriptors]).strip())
    return ", ".join(entries)


def normalize_host(hostname: str) -> str:
    hostname = hostname.lower()
    return hostname[4:] if hostname.startswith("www.") else hostname


def is_same_site(candidate_host: str, source_host: str) -> bool:
    """Exact host match, or either host is a subdomain of the other (``www.`` ignored)."""
    candidate = normalize_host(candidate_host)
    source = normalize_host(source_host)
    return (
        candidate == source
        or candidate.endswith(f".{source}")
        or source.endswith(f".{candidate}")
    )
