"""HTML sanitizer — allow-list policy for rendered article bodies.

Security boundary. Whatever the allow-lists below contain, the output never
carries:
- ``<script>``/``<style>`` elements or their content
- event-handler attributes (``on*``) or ``style`` attributes
- URLs with a scheme other than http, https or mailto

Each round has two passes:
  1. BeautifulSoup drops elements whose content is executable or not meant
     to be read as text (script, style, iframe, ...), subtree included.
  2. bleach applies the element / attribute / scheme allow-lists. Disallowed
     elements are unwrapped (their text is kept, escaped); disallowed
     attributes and URLs are removed; comments are dropped.

Removing an element can leave neighbouring whitespace-only strings that the
next parse merges into one, so rounds repeat until the output is stable. The
result is therefore a fixed point: sanitizing it again returns it unchanged.
"""

from __future__ import annotations

import warnings

import bleach
from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

ALLOWED_TAGS: frozenset[str] = frozenset(
    [
        "h1", "h2", "h3", "h4", "h5", "h6",
        "p", "br", "hr",
        "ul", "ol", "li",
        "a", "img",
        "code", "pre", "blockquote",
        "strong", "em", "b", "i", "del", "s",
        "table", "thead", "tbody", "tfoot", "tr", "th", "td",
        "div", "span",
        "dl", "dt", "dd",
        "sup", "sub",
        "input",
    ]
)

ALLOWED_ATTRIBUTES: dict[str, list[str]] = {
    "*": ["class", "id"],
    "a": ["href", "target", "rel"],
    "img": ["src", "alt", "width", "height", "loading"],
    "input": ["type", "checked", "disabled"],
    "td": ["align", "colspan", "rowspan"],
    "th": ["align", "colspan", "rowspan"],
}

ALLOWED_PROTOCOLS: frozenset[str] = frozenset(["https", "http", "mailto"])

# Removed with their whole subtree before the allow-list runs.
_DROP_WITH_CONTENT = [
    "script", "style", "iframe", "object", "embed", "noscript",
    "template", "textarea", "select", "head", "title",
]

# Attributes that can never be allowed, whatever the tables above say.
_FORBIDDEN_ATTRIBUTES = frozenset(["style", "srcdoc", "formaction"])

# Upper bound on extra rounds. Typical input is stable after the second.
_MAX_ROUNDS = 32

_cleaner = bleach.sanitizer.Cleaner(
    tags=ALLOWED_TAGS,
    attributes=lambda tag, name, value: _allow_attribute(tag, name),
    protocols=ALLOWED_PROTOCOLS,
    strip=True,
    strip_comments=True,
)


def sanitize_html(html: str) -> str:
    """Return *html* reduced to the allow-listed subset. Never raises."""
    if not html:
        return ""
    result = _sanitize_round(html)
    for _ in range(_MAX_ROUNDS):
        again = _sanitize_round(result)
        if again == result:
            break
        result = again
    return result


def _sanitize_round(html: str) -> str:
    with warnings.catch_warnings():
        # Short fragments such as "index.md" are legitimate input here.
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(_DROP_WITH_CONTENT):
        tag.decompose()
    return _cleaner.clean(str(soup))


def _allow_attribute(tag: str, name: str) -> bool:
    name = name.lower()
    if name.startswith("on") or name in _FORBIDDEN_ATTRIBUTES:
        return False
    return name in ALLOWED_ATTRIBUTES["*"] or name in ALLOWED_ATTRIBUTES.get(tag, ())
