"""Scraper package: bounded fetch, host checks and content extraction."""

from mirror.scraper.extractor import extract_reader_content
from mirror.scraper.fetcher import BoundedFetcher
from mirror.scraper.hosts import HostGuard, HostPolicy
from mirror.scraper.links import LinkScorer
from mirror.scraper.models import (
    FetchedResource,
    FetchLimits,
    LinkCandidate,
    LinksResult,
    PdfResult,
    ReaderResult,
)
from mirror.scraper.pdf import PdfExtractor
from mirror.scraper.sanitizer import ReaderSanitizer

__all__ = [
    "BoundedFetcher",
    "FetchLimits",
    "FetchedResource",
    "HostGuard",
    "HostPolicy",
    "LinkCandidate",
    "LinkScorer",
    "LinksResult",
    "PdfExtractor",
    "PdfResult",
    "ReaderResult",
    "ReaderSanitizer",
    "extract_reader_content",
]
