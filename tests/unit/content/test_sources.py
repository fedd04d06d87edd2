"""Tests for content/sources.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio.content.sources import ContentSourceError, DirectorySource, MemorySource


# ------------------------------------------------------------------
# DirectorySource
# ------------------------------------------------------------------


def test_directory_names_sorted(tmp_path: Path) -> None:
    for name in ["zebra.md", "alpha.md", "middle.md"]:
        (tmp_path / name).write_text("x", encoding="utf-8")
    assert DirectorySource(tmp_path).names() == ["alpha.md", "middle.md", "zebra.md"]


def test_directory_pattern_filters(tmp_path: Path) -> None:
    (tmp_path / "post.md").write_text("x", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    (tmp_path / "sub.md").mkdir()
    assert DirectorySource(tmp_path).names() == ["post.md"]
    assert DirectorySource(tmp_path, pattern="*.txt").names() == ["notes.txt"]


def test_directory_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(ContentSourceError, match="not found"):
        DirectorySource(tmp_path / "nope").names()


def test_directory_read_uses_encoding(tmp_path: Path) -> None:
    (tmp_path / "a.md").write_bytes("café".encode("latin-1"))
    assert DirectorySource(tmp_path, encoding="latin-1").read("a.md") == "café"
    with pytest.raises(UnicodeDecodeError):
        DirectorySource(tmp_path).read("a.md")


def test_directory_empty_pattern_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="pattern"):
        DirectorySource(tmp_path, pattern="")


def test_content_source_error_is_oserror() -> None:
    assert issubclass(ContentSourceError, OSError)


# ------------------------------------------------------------------
# MemorySource
# ------------------------------------------------------------------


def test_memory_preserves_insertion_order() -> None:
    source = MemorySource({"b.md": "B", "a.md": "A"})
    assert source.names() == ["b.md", "a.md"]
    assert source.read("a.md") == "A"


def test_memory_missing_item_raises_oserror() -> None:
    with pytest.raises(OSError):
        MemorySource({}).read("ghost.md")


def test_memory_copies_mapping() -> None:
    items = {"a.md": "A"}
    source = MemorySource(items)
    items["b.md"] = "B"
    assert source.names() == ["a.md"]
