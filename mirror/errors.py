"""Error taxonomy shared by every pipeline stage.

Each exception carries the HTTP status it maps to at the request boundary and
a short, human-readable message.  The API layer renders ``str(exc)`` verbatim,
so messages must never contain stack traces, credentials or document bodies.
"""

from __future__ import annotations


class MirrorError(Exception):
    """Base class for every failure the request boundary knows how to render."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Input / host validation
# ---------------------------------------------------------------------------

class InvalidInput(MirrorError):
    status_code = 400


class HostBlocked(MirrorError):
    status_code = 403

    def __init__(self, hostname: str) -> None:
        super().__init__("Host blocked for security reasons.")
        self.hostname = hostname


class HostNotAllowed(MirrorError):
    status_code = 403

    def __init__(self, hostname: str) -> None:
        super().__init__("Host not allowed: the asset proxy only serves allow-listed hosts.")
        self.hostname = hostname


# ---------------------------------------------------------------------------
# Outbound fetch
# ---------------------------------------------------------------------------

class FetchError(MirrorError):
    status_code = 502


class UpstreamUnreachable(FetchError):
    def __init__(self, url: str) -> None:
        super().__init__("Could not reach the remote resource.")
        self.url = url


class UpstreamError(FetchError):
    def __init__(self, status: int) -> None:
        super().__init__(f"Remote server answered with status {status}.")
        self.status = status


class ResourceExceeded(FetchError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Remote resource exceeds {_human_bytes(limit)}.")
        self.limit = limit


class FetchTimeout(FetchError):
    def __init__(self, seconds: float) -> None:
        super().__init__(f"Remote resource did not respond within {seconds:g}s.")
        self.seconds = seconds


class RequestCancelled(FetchError):
    def __init__(self) -> None:
        super().__init__("Request cancelled.")


class UnreadableDocument(FetchError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Could not read the downloaded {kind}.")
        self.kind = kind


# ---------------------------------------------------------------------------
# Translation service
# ---------------------------------------------------------------------------

class TranslationError(MirrorError):
    status_code = 502


class TranslationConfigMissing(TranslationError):
    status_code = 500

    def __init__(self, variable: str) -> None:
        super().__init__(f"Translation service is not configured ({variable} is not set).")
        self.variable = variable


class TranslationServiceError(TranslationError):
    def __init__(self, detail: str, status: int | None = None) -> None:
        prefix = f"Translation service error ({status})" if status else "Translation service error"
        super().__init__(f"{prefix}: {detail}")
        self.status = status
        self.detail = detail


def _human_bytes(limit: int) -> str:
    mb = limit / (1024 * 1024)
    if mb >= 1 and mb == int(mb):
        return f"{int(mb)}MB"
    return f"{limit} bytes"
