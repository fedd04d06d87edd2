"""In-memory content index.

``load()`` reads every item from a ContentSource, extracts metadata and
publishes the result as one immutable snapshot:

  posts    all Metadata, newest first, undated last, ties in source order
  by_slug  slug → Metadata
  bodies   slug → markdown body, rendered lazily by ``get_detail()``

Publishing is a single attribute assignment, so a reader that grabbed the
previous snapshot keeps a consistent view while a reload runs. Writers are
serialized by a lock; readers never lock.

Usage:
    index = ContentIndex(DirectorySource(Path("content/posts")))
    index.load()
    detail = index.get_detail("binary-search")
"""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import PurePath
from types import MappingProxyType

from folio.content.frontmatter import FrontMatterError, parse_header, split_front_matter
from folio.content.metadata import build_metadata
from folio.content.models import Metadata, RawDocument, RenderedDetail
from folio.content.render import render_markdown
from folio.content.sanitize import sanitize_html
from folio.content.sources import ContentSource

logger = logging.getLogger(__name__)

DEFAULT_RELATED_LIMIT = 3


@dataclass(frozen=True)
class _Snapshot:
    posts: tuple[Metadata, ...] = ()
    by_slug: Mapping[str, Metadata] = field(default_factory=lambda: MappingProxyType({}))
    bodies: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass
class LoadReport:
    """Outcome of one ``load()``: indexed count plus skipped items and reasons."""

    loaded: int = 0
    skipped: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped


def render_safe_html(body: str) -> str:
    """Render *body* to HTML and sanitize it."""
    return sanitize_html(render_markdown(body))


class ContentIndex:
    """Query API over the articles of one ContentSource.

    Args:
        source: Where articles are read from.
        render_cache_size: When > 0, memoize rendered HTML keyed by body
            text (at most this many entries). 0 renders on every request.
    """

    def __init__(self, source: ContentSource, *, render_cache_size: int = 0) -> None:
        if render_cache_size < 0:
            raise ValueError("render_cache_size must be >= 0")
        self.source = source
        self._snapshot = _Snapshot()
        self._write_lock = threading.Lock()
        self._render: Callable[[str], str] = render_safe_html
        if render_cache_size:
            self._render = functools.lru_cache(maxsize=render_cache_size)(render_safe_html)

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self) -> LoadReport:
        """Rebuild the index from the source and publish it.

        Raises:
            ContentSourceError: if the source cannot be enumerated. The
                previously published snapshot stays in place.
        """
        with self._write_lock:
            report = LoadReport()
            posts: list[Metadata] = []
            by_slug: dict[str, Metadata] = {}
            bodies: dict[str, str] = {}

            for name in self.source.names():
                try:
                    doc = self._read_document(name)
                    fields = parse_header(doc.header_text)
                except (OSError, UnicodeDecodeError, FrontMatterError) as exc:
                    logger.warning("Failed to parse post: %s - %s", name, exc)
                    report.skipped.append((name, str(exc)))
                    continue

                if doc.slug in by_slug:
                    logger.warning("Duplicate slug %r from %s; keeping the first", doc.slug, name)
                    report.skipped.append((name, f"duplicate slug '{doc.slug}'"))
                    continue

                meta = build_metadata(doc.slug, fields, doc.body_text)
                posts.append(meta)
                by_slug[doc.slug] = meta
                bodies[doc.slug] = doc.body_text
                logger.info("Loaded post: %s", doc.slug)

            posts.sort(key=_newest_first)
            self._snapshot = _Snapshot(
                posts=tuple(posts),
                by_slug=MappingProxyType(by_slug),
                bodies=MappingProxyType(bodies),
            )
            report.loaded = len(posts)

        logger.info("Loaded %d markdown posts from %s", report.loaded, self.source.describe())
        return report

    reload = load

    def _read_document(self, name: str) -> RawDocument:
        header, body = split_front_matter(self.source.read(name))
        return RawDocument(slug=PurePath(name).stem, header_text=header, body_text=body)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> tuple[Metadata, ...]:
        return self._snapshot.posts

    def list_by_category(self, category: str | None) -> tuple[Metadata, ...]:
        """Posts whose category equals *category*, ignoring case."""
        return tuple(m for m in self._snapshot.posts if m.in_category(category))

    def list_by_tag(self, tag: str | None) -> tuple[Metadata, ...]:
        """Posts carrying *tag*, ignoring case."""
        if tag is None:
            return ()
        return tuple(m for m in self._snapshot.posts if m.has_tag(tag))

    def get(self, slug: str) -> Metadata | None:
        return self._snapshot.by_slug.get(slug)

    def get_detail(self, slug: str) -> RenderedDetail | None:
        """Metadata plus sanitized HTML for *slug*, or None if unknown."""
        snap = self._snapshot
        meta = snap.by_slug.get(slug)
        body = snap.bodies.get(slug)
        if meta is None or body is None:
            return None
        return RenderedDetail(meta=meta, safe_html=self._render(body))

    def get_related(
        self,
        category: str | None,
        exclude_slug: str | None,
        limit: int = DEFAULT_RELATED_LIMIT,
    ) -> tuple[Metadata, ...]:
        """Up to *limit* posts in *category*, excluding *exclude_slug*."""
        if category is None or limit <= 0:
            return ()
        related: list[Metadata] = []
        for meta in self._snapshot.posts:
            if meta.slug == exclude_slug or not meta.in_category(category):
                continue
            related.append(meta)
            if len(related) >= limit:
                break
        return tuple(related)

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    def count(self) -> int:
        return len(self._snapshot.posts)

    def count_by_category(self, category: str | None) -> int:
        return len(self.list_by_category(category))

    def categories(self) -> list[tuple[str, int]]:
        """``(category, post count)`` pairs, most used first."""
        return _tally(m.category for m in self._snapshot.posts if m.category)

    def tags(self) -> list[tuple[str, int]]:
        """``(tag, post count)`` pairs, most used first."""
        return _tally(
            tag for m in self._snapshot.posts for tag in _unique_casefolded(m.tags)
        )


def _newest_first(meta: Metadata) -> tuple[bool, int]:
    if meta.date is None:
        return (True, 0)
    return (False, -meta.date.toordinal())


def _unique_casefolded(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        key = value.casefold()
        if key not in seen:
            seen.add(key)
            unique.append(value)
    return unique


def _tally(values: Iterable[str]) -> list[tuple[str, int]]:
    """Count *values* case-insensitively, labelled by the first spelling seen."""
    labels: dict[str, str] = {}
    counts: dict[str, int] = {}
    for value in values:
        key = value.casefold()
        labels.setdefault(key, value)
        counts[key] = counts.get(key, 0) + 1
    return sorted(
        ((labels[k], n) for k, n in counts.items()),
        key=lambda pair: (-pair[1], pair[0].casefold()),
    )
