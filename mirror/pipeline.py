"""Request-level pipeline: one method per serving mode.

Modes
-----
full page  validate → fetch → rewrite assets/links → translate body → HTML
reader     validate → fetch → extract → rewrite → translate → sanitize
pdf        validate → bounded download → text
links      validate → fetch → rank same-site anchors
asset      validate (+ allow-list) → fetch → rewrite CSS → passthrough

Every step runs sequentially within the calling thread.  The parsed tree is
owned by the call and discarded once serialised.  Errors propagate as
:class:`~mirror.errors.MirrorError` subclasses for the boundary to render.
"""

from __future__ import annotations

import logging
import threading

from bs4 import BeautifulSoup

from mirror.config import Settings, settings
from mirror.errors import InvalidInput
from mirror.rewrite.css import rewrite_css
from mirror.rewrite.html import parse_html, rewrite_assets, rewrite_document, rewrite_navigation
from mirror.scraper.extractor import extract_reader_content
from mirror.scraper.fetcher import BoundedFetcher, asset_limits, page_limits
from mirror.scraper.hosts import HostGuard, HostPolicy
from mirror.scraper.links import LinkScorer
from mirror.scraper.models import LinksResult, PdfResult, ProxiedAsset, ReaderResult
from mirror.scraper.pdf import PdfExtractor, looks_like_pdf
from mirror.scraper.sanitizer import ReaderSanitizer
from mirror.translation.orchestrator import translate_single, translate_tree
from mirror.translation.providers import Translator, build_translator

logger = logging.getLogger(__name__)

_HTML_ACCEPT = "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8"
_ASSET_ACCEPT = "text/css,text/html,application/javascript,image/*,*/*;q=0.8"


class MirrorPipeline:
    """Serve remote resources through the mirror.

    Every collaborator can be injected; omitted ones are built from
    *cfg*.  The translator is built lazily so a missing credential only fails
    requests that actually translate.
    """

    def __init__(
        self,
        *,
        cfg: Settings = settings,
        fetcher: BoundedFetcher | None = None,
        translator: Translator | None = None,
        guard: HostGuard | None = None,
        sanitizer: ReaderSanitizer | None = None,
        scorer: LinkScorer | None = None,
        pdf: PdfExtractor | None = None,
    ) -> None:
        self._cfg = cfg
        self._fetcher = fetcher or BoundedFetcher()
        self._translator = translator
        self._guard = guard or HostGuard(HostPolicy.from_settings(cfg))
        self._sanitizer = sanitizer or ReaderSanitizer()
        self._scorer = scorer or LinkScorer()
        self._pdf = pdf or PdfExtractor(self._fetcher)

    @property
    def translator(self) -> Translator:
        if self._translator is None:
            self._translator = build_translator(self._cfg)
        return self._translator

    # ------------------------------------------------------------------
    # Input validation
    # ------------------------------------------------------------------

    def resolve_lang(self, lang: str | None) -> str:
        """Return the requested target language, or the default when absent.

        Raises:
            InvalidInput: *lang* is not one of the configured languages.
        """
        if lang is None or not lang.strip():
            return self._cfg.default_target_lang
        if not self._cfg.is_supported_lang(lang.strip()):
            raise InvalidInput(f"Unsupported language: {lang!r}.")
        return lang.strip().lower()

    def _fetch_page(self, url: str, cancel: threading.Event | None) -> str:
        resource = self._fetcher.fetch(
            url, page_limits(self._cfg), accept=_HTML_ACCEPT, cancel=cancel
        )
        return resource.text

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def translate_page(
        self,
        raw_url: str | None,
        lang: str | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> str:
        """Full-page mode: return the rewritten, translated document."""
        url = self._guard.check_url(raw_url)
        target = self.resolve_lang(lang)
        soup = parse_html(self._fetch_page(url, cancel))

        rewrite_document(soup, url, target)
        translate_tree(
            soup.body or soup,
            self.translator,
            target,
            batch_size=self._cfg.translation_batch_size,
            cancel=cancel,
        )
        return str(soup)

    def reader(
        self,
        raw_url: str | None,
        lang: str | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> ReaderResult:
        """Reader mode: return the translated, sanitized main content."""
        url = self._guard.check_url(raw_url)
        target = self.resolve_lang(lang)
        extracted = extract_reader_content(self._fetch_page(url, cancel), url)
        logger.info("Reader extraction for %s used %r strategy", url, extracted.strategy)

        fragment = BeautifulSoup(extracted.content_html, "html.parser")
        rewrite_assets(fragment, extracted.base_url)
        rewrite_navigation(fragment, extracted.base_url, target)
        translate_tree(
            fragment,
            self.translator,
            target,
            batch_size=self._cfg.translation_batch_size,
            cancel=cancel,
        )
        title = translate_single(extracted.title, self.translator, target)
        return ReaderResult(
            title=title,
            source_url=url,
            content_html=self._sanitizer.sanitize(str(fragment)),
        )

    def links(self, raw_url: str | None) -> LinksResult:
        """Links-fallback mode: ranked same-site links, possibly empty."""
        url = self._guard.check_url(raw_url)
        html = self._fetch_page(url, None)
        return LinksResult(source_url=url, links=self._scorer.rank(html, url))

    def pdf_text(self, raw_url: str | None) -> PdfResult:
        url = self._guard.check_url(raw_url)
        return self._pdf.extract(url)

    def resolve_mode(self, raw_url: str | None) -> str:
        """Return ``"pdf"`` if the target is a PDF, else ``"html"``."""
        url = self._guard.check_url(raw_url)
        if looks_like_pdf(url) or self._pdf.is_pdf_resource(url):
            return "pdf"
        return "html"

    def proxy_asset(self, raw_url: str | None) -> ProxiedAsset:
        """Asset-proxy mode: allow-listed passthrough with CSS rewriting."""
        url = self._guard.check_url(raw_url, require_allow_list=True)
        resource = self._fetcher.fetch(url, asset_limits(self._cfg), accept=_ASSET_ACCEPT)
        content_type = resource.content_type or "application/octet-stream"
        content = resource.content
        if "text/css" in content_type.lower():
            content = rewrite_css(resource.text, resource.url).encode("utf-8")
            content_type = "text/css; charset=utf-8"
        return ProxiedAsset(
            status_code=resource.status_code,
            content_type=content_type,
            content=content,
        )
