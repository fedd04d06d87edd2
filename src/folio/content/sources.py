"""Content sources — where the index reads raw articles from.

A source lists item names and reads one item at a time, so that a single
unreadable item can be skipped without losing the others.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path


class ContentSourceError(OSError):
    """Raised when the content source as a whole cannot be enumerated."""


class ContentSource(ABC):
    """Abstract base for all content sources."""

    @abstractmethod
    def names(self) -> list[str]:
        """Return item names (``<slug>.<ext>``) in a stable order.

        Raises:
            ContentSourceError: if the source itself is unreachable.
        """

    @abstractmethod
    def read(self, name: str) -> str:
        """Return the text of item *name*.

        Raises:
            OSError: if the item cannot be read.
            UnicodeDecodeError: if the item is not valid text.
        """

    def describe(self) -> str:
        return type(self).__name__


class DirectorySource(ContentSource):
    """Files matching *pattern* directly under *root*, sorted by file name."""

    def __init__(self, root: Path, pattern: str = "*.md", encoding: str = "utf-8") -> None:
        if not pattern:
            raise ValueError("pattern must not be empty")
        self.root = Path(root)
        self.pattern = pattern
        self.encoding = encoding

    def names(self) -> list[str]:
        if not self.root.is_dir():
            raise ContentSourceError(f"content directory not found: {self.root}")
        return sorted(p.name for p in self.root.glob(self.pattern) if p.is_file())

    def read(self, name: str) -> str:
        return (self.root / name).read_text(encoding=self.encoding)

    def describe(self) -> str:
        return f"{self.root}/{self.pattern}"


class MemorySource(ContentSource):
    """In-process items; order follows the mapping's insertion order."""

    def __init__(self, items: Mapping[str, str]) -> None:
        self._items = dict(items)

    def names(self) -> list[str]:
        return list(self._items)

    def read(self, name: str) -> str:
        try:
            return self._items[name]
        except KeyError:
            raise FileNotFoundError(name) from None

    def describe(self) -> str:
        return f"<memory: {len(self._items)} items>"
