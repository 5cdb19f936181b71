"""Host classification for outbound requests (SSRF mitigation).

Classification is purely lexical: the hostname is matched against literal
loopback names and private address patterns.  No DNS resolution happens, so a
public name that resolves to a private address is *not* caught, and redirect
hops are not re-checked by the fetcher.  Treat this as defence in depth, not
as a complete SSRF fix.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx

from mirror.config import Settings
from mirror.errors import HostBlocked, HostNotAllowed, InvalidInput

logger = logging.getLogger(__name__)

_PRIVATE_HOSTS = frozenset({"localhost", "::1", "[::1]"})
_PRIVATE_IPV4_PATTERNS = (
    r"^127\.",
    r"^10\.",
    r"^192\.168\.",
    r"^172\.(1[6-9]|2\d|3[0-1])\.",
    r"^169\.254\.",
    r"^0\.",
)
# Unique-local (fc00::/7) and link-local (fe80::/10) prefixes.
_PRIVATE_IPV6_PATTERNS = (r"^fc", r"^fd", r"^fe[89ab]")
_WHITESPACE_RE = re.compile(r"\s")


@dataclass(frozen=True)
class HostPolicy:
    """Block-list and asset-proxy allow-list used by :class:`HostGuard`."""

    private_hosts: frozenset[str] = _PRIVATE_HOSTS
    private_ipv4_patterns: tuple[str, ...] = _PRIVATE_IPV4_PATTERNS
    private_ipv6_patterns: tuple[str, ...] = _PRIVATE_IPV6_PATTERNS
    allowed_hosts: frozenset[str] = frozenset({"example.com"})
    allowed_suffixes: tuple[str, ...] = (".wikipedia.org", ".wikimedia.org", ".bbc.com")

    @classmethod
    def from_settings(cls, settings: Settings) -> HostPolicy:
        return cls(
            allowed_hosts=frozenset(settings.proxy_allowed_hosts),
            allowed_suffixes=tuple(settings.proxy_allowed_suffixes),
        )


class HostGuard:
    """Decide whether a hostname may be contacted on a user's behalf."""

    def __init__(self, policy: HostPolicy | None = None) -> None:
        self._policy = policy or HostPolicy()
        self._ipv4 = [re.compile(p) for p in self._policy.private_ipv4_patterns]
        self._ipv6 = [re.compile(p, re.IGNORECASE) for p in self._policy.private_ipv6_patterns]

    def is_blocked(self, hostname: str) -> bool:
        """Return ``True`` for loopback, private, link-local and unique-local literals."""
        normalized = hostname.strip().lower()
        if not normalized:
            return True
        if normalized in self._policy.private_hosts:
            return True
        if any(p.search(normalized) for p in self._ipv4):
            return True
        # Only IPv6 literals carry colons; plain names such as "fcbarcelona.com"
        # must not trip the fc/fd prefixes.
        if ":" in normalized:
            compact = normalized.replace("[", "").replace("]", "").replace(":", "")
            return any(p.search(compact) for p in self._ipv6)
        return False

    def is_allowed(self, hostname: str) -> bool:
        """Return ``True`` if *hostname* is on the asset-proxy allow-list."""
        normalized = hostname.strip().lower()
        if normalized in self._policy.allowed_hosts:
            return True
        return any(normalized.endswith(suffix) for suffix in self._policy.allowed_suffixes)

    # ------------------------------------------------------------------
    # Request-level validation
    # ------------------------------------------------------------------

    def check_url(self, raw_url: str | None, *, require_allow_list: bool = False) -> str:
        """Validate a user-supplied target URL and return it unchanged.

        Raises:
            InvalidInput: Missing, unparseable, or non-http(s) URL, including a
                bad port or a host the HTTP client would refuse.
            HostBlocked: Host matches the private/loopback block-list.
            HostNotAllowed: *require_allow_list* is set and the host is not
                allow-listed.
        """
        if not raw_url or not raw_url.strip():
            raise InvalidInput("Missing url parameter.")
        url = raw_url.strip()
        try:
            parts = urlsplit(url)
            hostname = parts.hostname or ""
            port = parts.port
        except ValueError as exc:
            raise InvalidInput("Invalid URL.") from exc
        if parts.scheme.lower() not in ("http", "https"):
            raise InvalidInput("Only http/https URLs are allowed.")
        if not hostname or port == 0 or _WHITESPACE_RE.search(hostname):
            raise InvalidInput("Invalid URL.")
        try:
            httpx.URL(url)
        except (ValueError, httpx.InvalidURL) as exc:
            raise InvalidInput("Invalid URL.") from exc
        if self.is_blocked(hostname):
            logger.warning("Rejected blocked host %r", hostname)
            raise HostBlocked(hostname)
        if require_allow_list and not self.is_allowed(hostname):
            logger.warning("Rejected host %r: not on the proxy allow-list", hostname)
            raise HostNotAllowed(hostname)
        return url
