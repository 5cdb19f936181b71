"""Translation providers and DOM translation orchestration."""

from mirror.translation.orchestrator import translate_single, translate_tree
from mirror.translation.providers import (
    DeepLTranslator,
    PrefixTranslator,
    Translator,
    build_translator,
)

__all__ = [
    "DeepLTranslator",
    "PrefixTranslator",
    "Translator",
    "build_translator",
    "translate_single",
    "translate_tree",
]
