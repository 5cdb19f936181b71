"""Data models for the fetch → extract pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FetchLimits:
    """Byte ceiling and wall-clock budget applied to a single outbound fetch."""

    max_bytes: int
    timeout: float


@dataclass
class FetchedResource:
    """A fully buffered HTTP response that stayed within its :class:`FetchLimits`."""

    url: str
    status_code: int
    headers: dict[str, str]
    content: bytes
    encoding: str | None = None

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    @property
    def text(self) -> str:
        """Decode the body with the declared charset, falling back to UTF-8."""
        return self.content.decode(self.encoding or "utf-8", errors="replace")


@dataclass
class ReaderResult:
    """Readable content extracted from a page, sanitized and ready to serve."""

    title: str
    source_url: str
    content_html: str


@dataclass
class LinkCandidate:
    """A same-site anchor offered when a page has no readable content."""

    title: str
    url: str
    score: int = 0


@dataclass
class LinksResult:
    source_url: str
    links: list[LinkCandidate] = field(default_factory=list)


@dataclass
class PdfResult:
    """Plain text pulled from a remote PDF."""

    text: str
    truncated: bool
    bytes: int


@dataclass
class ProxiedAsset:
    """An upstream asset ready to be re-served from the mirror's origin."""

    status_code: int
    content_type: str
    content: bytes
