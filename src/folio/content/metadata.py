"""Metadata builder — header fields plus body fallbacks.

Field rules (a rule only applies when the value before it is absent):

  title        header ``title`` → slug
  date         header ``date`` (native date or YYYY-MM-DD string) → None
  tags         header ``tags`` when it is a list → ()
  description  header ``description`` → header ``summary`` → first paragraph (200)
  summary      header ``summary`` → first paragraph (300)

Header values are read through ``_get_str`` / ``_get_list``: a missing key or a
value of the wrong shape yields the default, never an exception.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any

from folio.content.models import Metadata

logger = logging.getLogger(__name__)

DESCRIPTION_MAX = 200
SUMMARY_MAX = 300
ELLIPSIS = "..."

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Lines that are never paragraph text: headings, code fences, rules, table rows.
_BLOCK_PREFIXES = ("#", "```", "---", "|")

# Inline markdown reduced to plain text, applied in order.
_INLINE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*(.+?)\*\*"), r"\1"),
    (re.compile(r"\*(.+?)\*"), r"\1"),
    (re.compile(r"`(.+?)`"), r"\1"),
    (re.compile(r"\[(.+?)]\(.+?\)"), r"\1"),
)


def build_metadata(slug: str, fields: dict[str, Any], body: str) -> Metadata:
    """Build a complete Metadata record for *slug*."""
    summary = _get_str(fields, "summary")
    description = _get_str(fields, "description")

    if description is None:
        description = summary
    if description is None:
        description = extract_first_paragraph(body, DESCRIPTION_MAX)
    if summary is None:
        summary = extract_first_paragraph(body, SUMMARY_MAX)

    thumbnail = _get_str(fields, "thumbnail")
    if thumbnail is None:
        thumbnail = _get_str(fields, "thumbnailUrl")

    return Metadata(
        slug=slug,
        title=_get_str(fields, "title", slug) or slug,
        date=parse_date(fields.get("date"), slug=slug),
        tags=tuple(_get_list(fields, "tags")),
        category=_get_str(fields, "category"),
        summary=summary,
        description=description,
        thumbnail=thumbnail,
    )


def parse_date(value: Any, *, slug: str = "") -> date | None:
    """Return *value* as a date, or None if it is absent or unparseable.

    Header dates arrive as strings and must be exactly ``YYYY-MM-DD``, with no
    surrounding whitespace and a real calendar day. Native ``date``/``datetime``
    values from other callers are accepted as-is.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if _ISO_DATE_RE.fullmatch(value):
            try:
                return date.fromisoformat(value)
            except ValueError:
                pass
        logger.warning("Invalid date format in %s: %r", slug or "<unknown>", value)
        return None
    if value is not None:
        logger.debug("Ignoring non-date value for date in %s: %r", slug, value)
    return None


def extract_first_paragraph(body: str, max_length: int) -> str | None:
    """Return the first paragraph of *body* as plain text, or None.

    Leading blank, heading, fence, rule and table lines are skipped; once text
    has been collected, the next such line ends the paragraph. The result is
    cut to *max_length* characters plus an ellipsis.
    """
    parts: list[str] = []
    length = 0

    for line in body.split("\n"):
        text = line.strip()
        if not text or text.startswith(_BLOCK_PREFIXES):
            if parts:
                break
            continue
        parts.append(text)
        length += len(text) + 1  # trailing separator counts toward the limit
        if length >= max_length:
            break

    result = " ".join(parts).strip()
    for pattern, repl in _INLINE_PATTERNS:
        result = pattern.sub(repl, result)

    if len(result) > max_length:
        result = result[:max_length] + ELLIPSIS
    return result or None


# ---------------------------------------------------------------------------
# Header accessors
# ---------------------------------------------------------------------------


def _get_str(fields: dict[str, Any], key: str, default: str | None = None) -> str | None:
    value = fields.get(key)
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return default
    return str(value)


def _get_list(fields: dict[str, Any], key: str) -> list[str]:
    value = fields.get(key)
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]
