"""Text-translation providers.

Providers
---------
``deepl`` (default)
    Calls the DeepL REST API at ``/v2/translate`` with a whole batch of text
    runs in a single request.  Requires ``DEEPL_API_KEY``; free-tier keys
    (suffix ``:fx``) are routed to the free endpoint unless ``DEEPL_API_URL``
    overrides it.

``prefix``
    Offline provider that tags every run with the target language, e.g.
    ``[ES] Hello``.  Useful for demos and for checking rewrites end to end
    without spending API quota.

All providers share one interface: ``translate(texts, target_lang)`` returns
one string per input, in input order.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from mirror.config import Settings, settings
from mirror.errors import TranslationConfigMissing, TranslationServiceError

logger = logging.getLogger(__name__)

_DEEPL_PRO_URL = "https://api.deepl.com"
_DEEPL_FREE_URL = "https://api-free.deepl.com"


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class Translator(ABC):
    """Abstract base class for a batch text-translation service."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name."""

    @abstractmethod
    def translate(self, texts: list[str], target_lang: str) -> list[str]:
        """Return one translation per entry of *texts*, in the same order.

        Raises:
            TranslationError: The service is misconfigured or failed.
        """


# ---------------------------------------------------------------------------
# DeepL
# ---------------------------------------------------------------------------

class DeepLTranslator(Translator):
    """DeepL REST API client.

    The response is returned as-is; checking that its length matches the
    request is the orchestrator's job.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = "",
        timeout: float = 20.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise TranslationConfigMissing("DEEPL_API_KEY")
        self._api_key = api_key
        default_url = _DEEPL_FREE_URL if api_key.endswith(":fx") else _DEEPL_PRO_URL
        self._api_url = (api_url or default_url).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "DeepL"

    def translate(self, texts: list[str], target_lang: str) -> list[str]:
        if not texts:
            return []
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(
                    f"{self._api_url}/v2/translate",
                    headers={"Authorization": f"DeepL-Auth-Key {self._api_key}"},
                    json={"text": texts, "target_lang": target_lang.upper()},
                )
        except httpx.HTTPError as exc:
            logger.error("[DeepL] request failed: %s", exc)
            raise TranslationServiceError("could not reach the translation service") from exc

        if not response.is_success:
            detail = _error_detail(response)
            logger.error("[DeepL] HTTP %d: %s", response.status_code, detail)
            raise TranslationServiceError(detail, status=response.status_code)

        try:
            translations = response.json()["translations"]
            return [str(item.get("text", "")) for item in translations]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise TranslationServiceError("malformed response from translation service") from exc


def _error_detail(response: httpx.Response) -> str:
    try:
        message = response.json().get("message")
    except (ValueError, AttributeError):
        message = None
    return str(message or response.reason_phrase or "request rejected")


# ---------------------------------------------------------------------------
# Prefix (offline)
# ---------------------------------------------------------------------------

class PrefixTranslator(Translator):
    """Marks text with the target language instead of translating it."""

    @property
    def name(self) -> str:
        return "Prefix"

    def translate(self, texts: list[str], target_lang: str) -> list[str]:
        prefix = f"[{target_lang.upper()}] "
        return [f"{prefix}{text}" for text in texts]


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def build_translator(cfg: Settings = settings) -> Translator:
    """Return the provider selected by ``settings.translation_provider``.

    Raises:
        TranslationConfigMissing: DeepL is selected but no key is configured.
    """
    if cfg.translation_provider == "prefix":
        return PrefixTranslator()
    return DeepLTranslator(
        cfg.deepl_api_key,
        api_url=cfg.deepl_api_url,
        timeout=cfg.translation_timeout,
    )
