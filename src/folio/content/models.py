"""Domain models for the folio content pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class RawDocument:
    slug: str
    header_text: str
    body_text: str


@dataclass(frozen=True)
class Metadata:
    """Summary of one article, as held by the index.

    ``tags`` keeps the header order; ``tags`` and ``category`` are compared
    case-insensitively by the index, but stored with their original spelling.
    """

    slug: str
    title: str
    date: date | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    category: str | None = None
    summary: str | None = None
    description: str | None = None
    thumbnail: str | None = None  # opaque path or URL, never fetched

    def has_tag(self, tag: str) -> bool:
        needle = tag.casefold()
        return any(t.casefold() == needle for t in self.tags)

    def in_category(self, category: str | None) -> bool:
        if category is None or self.category is None:
            return False
        return self.category.casefold() == category.casefold()


@dataclass(frozen=True)
class RenderedDetail:
    meta: Metadata
    safe_html: str
