"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_POSTS: dict[str, str] = {
    "alpha.md": (
        "---\n"
        "title: Alpha post\n"
        "date: 2025-01-20\n"
        "category: Spring\n"
        "tags: [Spring Boot, Docker]\n"
        "---\n"
        "## Intro\n\n"
        "Alpha **body** text.\n\n"
        "<script>alert(1)</script>\n"
    ),
    "beta.md": (
        "---\n"
        "title: Beta post\n"
        "date: 2025-01-15\n"
        "category: SPRING\n"
        "tags: [docker]\n"
        "summary: Beta summary.\n"
        "---\n"
        "Beta body.\n"
    ),
    "gamma.md": (
        "---\n"
        "title: Gamma post\n"
        "date: 2025-02-01\n"
        "category: Database\n"
        "tags: [PostgreSQL]\n"
        "---\n"
        "Gamma body.\n"
    ),
    "delta.md": "# Delta\n\nUndated post without front matter.\n",
}


def write_posts(directory: Path, posts: dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, text in posts.items():
        (directory / name).write_text(text, encoding="utf-8")
    return directory


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Directory with four sample posts: three dated, one without front matter."""
    return write_posts(tmp_path / "posts", SAMPLE_POSTS)
