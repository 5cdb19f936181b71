"""Remote PDF detection and text extraction.

Downloads go through :class:`~mirror.scraper.fetcher.BoundedFetcher` with the
PDF ceiling (10MB by default) and are decoded with ``pypdf``.  A PDF with no
text layer (e.g. a scan) yields an empty string, which is a valid result.
"""

from __future__ import annotations

import io
import logging
import re
from urllib.parse import urlsplit

from mirror.config import settings
from mirror.errors import FetchError, UnreadableDocument
from mirror.scraper.fetcher import BoundedFetcher, pdf_limits
from mirror.scraper.models import FetchLimits, PdfResult

logger = logging.getLogger(__name__)

_PDF_ACCEPT = "application/pdf,*/*;q=0.8"
_PDF_PATH_RE = re.compile(r"\.pdf$", re.IGNORECASE)


def looks_like_pdf(url: str) -> bool:
    """Extension heuristic on the URL path."""
    return bool(_PDF_PATH_RE.search(urlsplit(url).path))


def decode_pdf_text(data: bytes) -> str:
    """Return all text extracted from the PDF bytes in *data* using ``pypdf``."""
    import pypdf  # noqa: PLC0415 (lazy import keeps startup fast)
    from pypdf.errors import PyPdfError  # noqa: PLC0415

    pages: list[str] = []
    try:
        reader = pypdf.PdfReader(io.BytesIO(data))
        for page in reader.pages:
            text = page.extract_text() or ""
            if text.strip():
                pages.append(text)
    except PyPdfError as exc:
        logger.warning("pypdf could not parse document: %s", exc)
        raise UnreadableDocument("PDF") from exc

    return "\n\n".join(pages)


class PdfExtractor:
    """Probe and extract text from remote PDFs."""

    def __init__(
        self,
        fetcher: BoundedFetcher | None = None,
        *,
        limits: FetchLimits | None = None,
        max_chars: int | None = None,
    ) -> None:
        self._fetcher = fetcher or BoundedFetcher()
        self._limits = limits or pdf_limits()
        self._max_chars = max_chars if max_chars is not None else settings.pdf_max_chars

    def is_pdf_resource(self, url: str) -> bool:
        """HEAD-probe *url* for a PDF content type.

        Falls back to :func:`looks_like_pdf` when the probe fails for any
        reason, including a non-2xx answer.
        """
        try:
            head = self._fetcher.head(url, self._limits, accept=_PDF_ACCEPT)
        except FetchError as exc:
            logger.debug("PDF probe of %s failed (%s); using extension", url, exc)
            return looks_like_pdf(url)
        return "application/pdf" in head.content_type.lower()

    def extract(self, url: str) -> PdfResult:
        """Download *url* and return its text, truncated to ``max_chars``.

        Raises:
            FetchError: Download failed or exceeded the PDF ceiling.
        """
        resource = self._fetcher.fetch(url, self._limits, accept=_PDF_ACCEPT)
        text = decode_pdf_text(resource.content).replace("\r\n", "\n").strip()
        truncated = len(text) > self._max_chars
        if truncated:
            text = text[: self._max_chars]
        logger.info(
            "Extracted %d char(s) from %s (%d bytes, truncated=%s)",
            len(text), url, len(resource.content), truncated,
        )
        return PdfResult(text=text, truncated=truncated, bytes=len(resource.content))
