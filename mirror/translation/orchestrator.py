"""Collect translatable text from a DOM tree and write translations back.

Walk → batch → write-back
-------------------------
1. ``collect_text_runs`` visits the tree depth-first.  Elements are
   ``bs4.Tag`` and text leaves are ``bs4.NavigableString``; comments,
   doctypes and CDATA (``PreformattedString``) are never text.  The visitor
   carries a ``blocked`` flag so a whole subtree under ``<script>``,
   ``<code>`` etc. is skipped.
2. Runs are sent in ordered batches of at most ``batch_size``.  Each batch's
   response must contain exactly one result per input.
3. Each text node is replaced by ``leading + translation.strip() + trailing``.

A failing batch raises before touching any of its own nodes, but batches that
already succeeded stay written: translation is best-effort, not atomic.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass

from bs4 import NavigableString, PageElement, Tag
from bs4.element import PreformattedString

from mirror.errors import RequestCancelled, TranslationServiceError
from mirror.translation.providers import Translator

logger = logging.getLogger(__name__)

DEFAULT_SKIP_TAGS = frozenset({"script", "style", "noscript", "code", "pre", "kbd", "samp"})
DEFAULT_BATCH_SIZE = 30

_URL_LIKE_RE = re.compile(r"^(?:https?://|www\.|mailto:|tel:|ftp://)", re.IGNORECASE)


@dataclass
class TextRun:
    """One text leaf queued for translation, split around its whitespace."""

    node: NavigableString
    leading: str
    core: str
    trailing: str


def looks_like_url(text: str) -> bool:
    return bool(_URL_LIKE_RE.match(text))


def split_whitespace(text: str) -> tuple[str, str, str]:
    """Split *text* into ``(leading, core, trailing)``."""
    core = text.strip()
    if not core:
        return text, "", ""
    start = text.find(core)
    return text[:start], core, text[start + len(core):]


def collect_text_runs(
    root: PageElement, skip_tags: frozenset[str] = DEFAULT_SKIP_TAGS
) -> list[TextRun]:
    """Return the translatable text runs under *root* in document order."""
    runs: list[TextRun] = []
    stack: list[tuple[PageElement, bool]] = [(root, False)]
    while stack:
        node, blocked = stack.pop()
        if isinstance(node, Tag):
            blocked = blocked or node.name in skip_tags
            if blocked:
                continue
            stack.extend((child, blocked) for child in reversed(node.contents))
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            leading, core, trailing = split_whitespace(str(node))
            if not core or looks_like_url(core):
                continue
            runs.append(TextRun(node=node, leading=leading, core=core, trailing=trailing))
    return runs


def _batches(runs: list[TextRun], size: int) -> list[list[TextRun]]:
    return [runs[i:i + size] for i in range(0, len(runs), size)]


def translate_runs(
    runs: list[TextRun],
    translator: Translator,
    target_lang: str,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    cancel: threading.Event | None = None,
) -> int:
    """Translate *runs* batch by batch and write results into the tree.

    Returns the number of text nodes replaced.

    Raises:
        TranslationServiceError: A batch came back with the wrong number of
            results, or the provider failed.
        TranslationConfigMissing: The provider is not configured.
        RequestCancelled: *cancel* was set; later batches are not sent.
    """
    written = 0
    batches = _batches(runs, batch_size)
    for index, batch in enumerate(batches, start=1):
        if cancel is not None and cancel.is_set():
            logger.info("Translation cancelled before batch %d/%d", index, len(batches))
            raise RequestCancelled()
        results = translator.translate([run.core for run in batch], target_lang)
        if len(results) != len(batch):
            logger.error(
                "[%s] batch %d returned %d result(s) for %d input(s)",
                translator.name, index, len(results), len(batch),
            )
            raise TranslationServiceError(
                f"expected {len(batch)} translations, got {len(results)}"
            )
        for run, translated in zip(batch, results):
            translated = (translated or "").strip()
            if not translated:
                continue
            run.node.replace_with(NavigableString(f"{run.leading}{translated}{run.trailing}"))
            written += 1
    logger.info(
        "[%s] translated %d/%d run(s) in %d batch(es)",
        translator.name, written, len(runs), len(batches),
    )
    return written


def translate_tree(
    root: PageElement,
    translator: Translator,
    target_lang: str,
    *,
    skip_tags: frozenset[str] = DEFAULT_SKIP_TAGS,
    batch_size: int = DEFAULT_BATCH_SIZE,
    cancel: threading.Event | None = None,
) -> int:
    """Translate every visible text leaf under *root* in place."""
    runs = collect_text_runs(root, skip_tags)
    return translate_runs(runs, translator, target_lang, batch_size=batch_size, cancel=cancel)


def translate_single(text: str, translator: Translator, target_lang: str) -> str:
    """Translate one string, keeping its surrounding whitespace.

    Blank and URL-like input is returned untouched, as is any empty result.
    """
    leading, core, trailing = split_whitespace(text)
    if not core or looks_like_url(core):
        return text
    results = translator.translate([core], target_lang)
    if len(results) != 1:
        raise TranslationServiceError(f"expected 1 translation, got {len(results)}")
    translated = (results[0] or "").strip()
    return f"{leading}{translated}{trailing}" if translated else text
