"""Reduce reader-mode HTML to an allow-listed tag and attribute set."""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import BeautifulSoup, Comment, Tag

_REMOVED_TAGS = frozenset({
    "script", "style", "iframe", "object", "embed", "form", "button", "input",
    "textarea", "select", "link", "meta", "base", "noscript", "template", "svg",
    "math", "frame", "frameset", "applet",
})
_ALLOWED_TAGS = frozenset({
    "h1", "h2", "h3", "h4", "h5", "h6",
    "p", "br", "hr", "blockquote", "pre", "code",
    "ul", "ol", "li", "dl", "dt", "dd",
    "table", "caption", "thead", "tbody", "tfoot", "tr", "th", "td", "colgroup", "col",
    "a", "em", "strong", "b", "i", "u", "s", "sub", "sup", "small", "mark",
    "abbr", "cite", "q", "del", "ins", "time", "span",
    "figure", "figcaption", "picture", "source", "img",
})
_ALLOWED_ATTRS = frozenset({
    "href", "src", "srcset", "sizes", "alt", "title", "width", "height",
    "colspan", "rowspan", "scope", "headers", "datetime", "lang", "dir",
})
_URL_ATTRS = frozenset({"href", "src"})


@dataclass(frozen=True)
class SanitizerPolicy:
    removed_tags: frozenset[str] = _REMOVED_TAGS
    allowed_tags: frozenset[str] = _ALLOWED_TAGS
    allowed_attrs: frozenset[str] = _ALLOWED_ATTRS
    url_attrs: frozenset[str] = _URL_ATTRS


class ReaderSanitizer:
    """Strip executable content from an HTML fragment.

    Dangerous elements are dropped with their content, unknown elements are
    unwrapped (content kept), and attributes are reduced to the allow-list.
    Sanitizing an already sanitized fragment is a no-op.
    """

    def __init__(self, policy: SanitizerPolicy | None = None) -> None:
        self._policy = policy or SanitizerPolicy()

    def sanitize(self, fragment_html: str) -> str:
        soup = BeautifulSoup(fragment_html, "html.parser")

        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()

        for node in soup.find_all(list(self._policy.removed_tags)):
            if not node.decomposed:
                node.decompose()

        for node in soup.find_all(True):
            if node.name not in self._policy.allowed_tags:
                node.unwrap()
            else:
                self._clean_attrs(node)

        return str(soup).strip()

    def _clean_attrs(self, node: Tag) -> None:
        for name in list(node.attrs):
            value = node.attrs[name]
            lowered = name.lower()
            if lowered.startswith("on") or lowered not in self._policy.allowed_attrs:
                del node.attrs[name]
                continue
            if lowered in self._policy.url_attrs and _is_javascript_url(value):
                del node.attrs[name]


def _is_javascript_url(value: object) -> bool:
    if isinstance(value, list):
        value = " ".join(value)
    compact = "".join(str(value).split()).lower()
    return compact.startswith("javascript:")
