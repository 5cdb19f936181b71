"""Size- and time-bounded HTTP fetcher for remote pages, PDFs and assets.

The byte ceiling is enforced against the live stream: a ``Content-Length``
header larger than the ceiling fails fast, but the running counter is what
actually stops the download, since the header may be absent or wrong.
The byte ceiling, the wall-clock deadline and cancellation are all checked
after every network read, however small.

Redirects are followed transparently and intermediate hosts are not checked
against :class:`~mirror.scraper.hosts.HostGuard`.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

import httpx

from mirror.config import Settings, settings
from mirror.errors import (
    FetchTimeout,
    RequestCancelled,
    ResourceExceeded,
    UpstreamError,
    UpstreamUnreachable,
)
from mirror.scraper.models import FetchedResource, FetchLimits

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": "translated-mirror/1.0 (+https://localhost)",
}


def page_limits(cfg: Settings = settings) -> FetchLimits:
    """Limits for HTML documents (2MB / 8s by default)."""
    return FetchLimits(max_bytes=cfg.page_max_bytes, timeout=cfg.page_fetch_timeout)


def pdf_limits(cfg: Settings = settings) -> FetchLimits:
    """Limits for PDF downloads (10MB by default)."""
    return FetchLimits(max_bytes=cfg.pdf_max_bytes, timeout=cfg.pdf_fetch_timeout)


def asset_limits(cfg: Settings = settings) -> FetchLimits:
    """Limits for asset-proxy passthrough."""
    return FetchLimits(max_bytes=cfg.asset_max_bytes, timeout=cfg.asset_fetch_timeout)


class BoundedFetcher:
    """Download remote resources without ever exceeding a :class:`FetchLimits`.

    A *transport* can be injected so tests can stream bodies through
    ``httpx.MockTransport``; *clock* drives the wall-clock deadline.
    """

    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._transport = transport
        self._clock = clock

    def fetch(
        self,
        url: str,
        limits: FetchLimits,
        *,
        method: str = "GET",
        accept: str | None = None,
        cancel: threading.Event | None = None,
    ) -> FetchedResource:
        """Fetch *url* and return the buffered response.

        Raises:
            UpstreamError: The server answered with a non-2xx status.
            UpstreamUnreachable: DNS, connection or protocol failure.
            FetchTimeout: The wall-clock budget in *limits* ran out.
            ResourceExceeded: The body grew past ``limits.max_bytes``.
            RequestCancelled: *cancel* was set while streaming.
        """
        headers = dict(_DEFAULT_HEADERS)
        if accept:
            headers["Accept"] = accept

        deadline = self._clock() + limits.timeout
        logger.debug("%s %s (max %d bytes, %gs)", method, url, limits.max_bytes, limits.timeout)
        try:
            with httpx.Client(
                headers=headers,
                timeout=limits.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                with client.stream(method, url) as response:
                    if not response.is_success:
                        raise UpstreamError(response.status_code)

                    if method != "HEAD":
                        _check_declared_length(response, limits)

                    chunks: list[bytes] = []
                    total = 0
                    for chunk in response.iter_bytes():
                        if cancel is not None and cancel.is_set():
                            raise RequestCancelled()
                        if self._clock() > deadline:
                            logger.warning("Fetch of %s exceeded %gs", url, limits.timeout)
                            raise FetchTimeout(limits.timeout)
                        total += len(chunk)
                        if total > limits.max_bytes:
                            logger.warning(
                                "Fetch of %s aborted after %d bytes (limit %d)",
                                url, total, limits.max_bytes,
                            )
                            raise ResourceExceeded(limits.max_bytes)
                        chunks.append(chunk)

                    fetched = FetchedResource(
                        url=str(response.url),
                        status_code=response.status_code,
                        headers={k.lower(): v for k, v in response.headers.items()},
                        content=b"".join(chunks),
                        encoding=response.charset_encoding,
                    )
        except httpx.TimeoutException as exc:
            raise FetchTimeout(limits.timeout) from exc
        except httpx.HTTPError as exc:
            logger.warning("Fetch of %s failed: %s", url, exc)
            raise UpstreamUnreachable(url) from exc

        logger.info("Fetched %s (%d bytes)", fetched.url, len(fetched.content))
        return fetched

    def head(self, url: str, limits: FetchLimits, *, accept: str | None = None) -> FetchedResource:
        """Issue a HEAD request; the returned resource has an empty body."""
        return self.fetch(url, limits, method="HEAD", accept=accept)


def _check_declared_length(response: httpx.Response, limits: FetchLimits) -> None:
    declared = response.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limits.max_bytes:
        logger.warning("Declared length %s exceeds limit %d", declared, limits.max_bytes)
        raise ResourceExceeded(limits.max_bytes)
