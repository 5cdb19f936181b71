"""Centralised settings for the translated-mirror backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip().lower() for item in value.split(",") if item.strip())


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Translation service
    # ------------------------------------------------------------------
    translation_provider: str = field(
        default_factory=lambda: os.environ.get("TRANSLATION_PROVIDER", "deepl")
    )
    deepl_api_key: str = field(
        default_factory=lambda: os.environ.get("DEEPL_API_KEY", "")
    )
    deepl_api_url: str = field(
        default_factory=lambda: os.environ.get("DEEPL_API_URL", "")
    )
    translation_timeout: float = field(
        default_factory=lambda: float(os.environ.get("TRANSLATION_TIMEOUT", "20.0"))
    )
    translation_batch_size: int = field(
        default_factory=lambda: int(os.environ.get("TRANSLATION_BATCH_SIZE", "30"))
    )
    default_target_lang: str = field(
        default_factory=lambda: os.environ.get("DEFAULT_TARGET_LANG", "es")
    )
    allowed_target_langs: tuple[str, ...] = field(
        default_factory=lambda: _csv(os.environ.get("ALLOWED_TARGET_LANGS", "es,pt,fr"))
    )

    # ------------------------------------------------------------------
    # Outbound fetch limits
    # ------------------------------------------------------------------
    page_fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_FETCH_TIMEOUT", "8.0"))
    )
    page_max_bytes: int = field(
        default_factory=lambda: int(os.environ.get("PAGE_MAX_BYTES", str(2 * 1024 * 1024)))
    )
    pdf_fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PDF_FETCH_TIMEOUT", "30.0"))
    )
    pdf_max_bytes: int = field(
        default_factory=lambda: int(os.environ.get("PDF_MAX_BYTES", str(10 * 1024 * 1024)))
    )
    pdf_max_chars: int = field(
        default_factory=lambda: int(os.environ.get("PDF_MAX_CHARS", "60000"))
    )
    asset_fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("ASSET_FETCH_TIMEOUT", "15.0"))
    )
    asset_max_bytes: int = field(
        default_factory=lambda: int(os.environ.get("ASSET_MAX_BYTES", str(15 * 1024 * 1024)))
    )

    # ------------------------------------------------------------------
    # Asset proxy allow-list
    # ------------------------------------------------------------------
    proxy_allowed_hosts: tuple[str, ...] = field(
        default_factory=lambda: _csv(os.environ.get("PROXY_ALLOWED_HOSTS", "example.com"))
    )
    proxy_allowed_suffixes: tuple[str, ...] = field(
        default_factory=lambda: _csv(
            os.environ.get(
                "PROXY_ALLOWED_SUFFIXES", ".wikipedia.org,.wikimedia.org,.bbc.com"
            )
        )
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    def is_supported_lang(self, lang: str) -> bool:
        """Return ``True`` if *lang* is one of the configured target languages."""
        return lang.lower() in self.allowed_target_langs


def configure_logging(level: str | None = None) -> None:
    """Install the root handler once; later calls only adjust the level."""
    logging.basicConfig(format=_LOG_FORMAT)
    logging.getLogger().setLevel((level or settings.log_level).upper())


# Module-level singleton, import this everywhere:
#   from mirror.config import settings
settings = Settings()
