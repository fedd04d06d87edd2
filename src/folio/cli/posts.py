"""folio post commands.

Commands:
  folio list [--category C] [--tag T]   — posts in index order
  folio show <slug> [--html]            — one post, rendered, plus related posts
  folio related <slug> [--limit N]      — posts sharing the slug's category
  folio categories                      — categories with post counts
  folio tags                            — tags with post counts
  folio check                           — load every post and report failures
"""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Annotated

import typer
from bs4 import BeautifulSoup
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from folio.cli.errors import (
    err_config_invalid,
    err_content_dir_missing,
    err_post_not_found,
    warn_skipped_posts,
)
from folio.config import ConfigError, FolioConfig, load_config
from folio.content.index import ContentIndex, LoadReport
from folio.content.models import Metadata
from folio.content.sources import ContentSourceError, DirectorySource

console = Console()

ContentDirOption = Annotated[
    Path | None,
    typer.Option("--content-dir", "-d", help="Directory of markdown posts (overrides config)."),
]


# ---------------------------------------------------------------------------
# Index bootstrap
# ---------------------------------------------------------------------------


def _open_index(content_dir: Path | None) -> tuple[ContentIndex, FolioConfig, LoadReport]:
    """Load config, build the index and load it; exit 1 on fatal errors."""
    try:
        cfg = load_config()
    except ConfigError as exc:
        console.print(err_config_invalid(str(exc)))
        raise typer.Exit(1)

    if content_dir is not None:
        cfg.content.dir = str(content_dir)

    source = DirectorySource(cfg.content_dir, cfg.content.pattern, cfg.content.encoding)
    index = ContentIndex(source, render_cache_size=cfg.render.cache_size)
    try:
        report = index.load()
    except ContentSourceError:
        console.print(err_content_dir_missing(str(cfg.content_dir)))
        raise typer.Exit(1)
    return index, cfg, report


def _posts_table(posts: tuple[Metadata, ...], title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Date")
    table.add_column("Slug", style="bold")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Tags")
    for meta in posts:
        table.add_row(
            meta.date.isoformat() if meta.date else "[dim]—[/]",
            escape(meta.slug),
            escape(meta.title),
            escape(meta.category or ""),
            escape(", ".join(meta.tags)),
        )
    return table


def _not_found(index: ContentIndex, slug: str) -> typer.Exit:
    slugs = [m.slug for m in index.list_all()]
    console.print(err_post_not_found(slug, difflib.get_close_matches(slug, slugs, n=3)))
    return typer.Exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def list_cmd(
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Only posts in this category (case-insensitive)."),
    ] = None,
    tag: Annotated[
        str | None,
        typer.Option("--tag", "-t", help="Only posts with this tag (case-insensitive)."),
    ] = None,
    content_dir: ContentDirOption = None,
) -> None:
    """List posts, newest first."""
    index, _, _ = _open_index(content_dir)

    posts = index.list_all()
    title = "Posts"
    if category is not None:
        posts = index.list_by_category(category)
        title = f"Category: {escape(category)}"
    if tag is not None and category is None:
        posts = index.list_by_tag(tag)
        title = f"Tag: {escape(tag)}"
    elif tag is not None:
        posts = tuple(m for m in posts if m.has_tag(tag))
        title = f"{title} · tag: {escape(tag)}"

    if not posts:
        console.print("[yellow]No posts found.[/]")
        raise typer.Exit(0)

    console.print(_posts_table(posts, title))
    console.print(f"\n  {len(posts)}/{index.count()} posts")


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug (file name without .md).")],
    html: Annotated[
        bool,
        typer.Option("--html", help="Print the sanitized HTML instead of plain text."),
    ] = False,
    content_dir: ContentDirOption = None,
) -> None:
    """Show one post with its metadata and related posts."""
    index, cfg, _ = _open_index(content_dir)

    detail = index.get_detail(slug)
    if detail is None:
        raise _not_found(index, slug)

    meta = detail.meta
    lines = [
        f"Title:     [bold]{escape(meta.title)}[/]",
        f"Date:      {meta.date.isoformat() if meta.date else '(none)'}",
        f"Category:  {escape(meta.category or '(none)')}",
        f"Tags:      {escape(', '.join(meta.tags) or '(none)')}",
    ]
    if meta.description:
        lines.append(f"\n{escape(meta.description)}")
    console.print(Panel("\n".join(lines), title=f"[bold]{escape(meta.slug)}[/]", expand=False))

    if html:
        typer.echo(detail.safe_html)
    else:
        text = BeautifulSoup(detail.safe_html, "html.parser").get_text("\n").strip()
        console.print(text, markup=False, highlight=False)

    related = index.get_related(meta.category, meta.slug, cfg.related.limit)
    if related:
        console.print("\n[bold]Related posts[/]")
        for other in related:
            console.print(f"  • {escape(other.slug)}  [dim]{escape(other.title)}[/]")


def related_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug to find related posts for.")],
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", min=1, help="Maximum number of posts (default: related.limit)."),
    ] = None,
    content_dir: ContentDirOption = None,
) -> None:
    """List posts in the same category as SLUG."""
    index, cfg, _ = _open_index(content_dir)

    meta = index.get(slug)
    if meta is None:
        raise _not_found(index, slug)

    if meta.category is None:
        console.print(f"[yellow]'{escape(slug)}' has no category — no related posts.[/]")
        raise typer.Exit(0)

    related = index.get_related(meta.category, meta.slug, limit or cfg.related.limit)
    if not related:
        console.print(f"[yellow]No other posts in category '{escape(meta.category)}'.[/]")
        raise typer.Exit(0)

    console.print(_posts_table(related, f"Related to {escape(slug)}"))


def categories_cmd(content_dir: ContentDirOption = None) -> None:
    """List categories with their post counts."""
    index, _, _ = _open_index(content_dir)
    _print_counts(index.categories(), "Category")


def tags_cmd(content_dir: ContentDirOption = None) -> None:
    """List tags with their post counts."""
    index, _, _ = _open_index(content_dir)
    _print_counts(index.tags(), "Tag")


def _print_counts(pairs: list[tuple[str, int]], label: str) -> None:
    if not pairs:
        console.print(f"[yellow]No {label.lower()} found.[/]")
        raise typer.Exit(0)
    table = Table(show_header=True, header_style="bold")
    table.add_column(label, style="bold")
    table.add_column("Posts", justify="right")
    for name, count in pairs:
        table.add_row(escape(name), str(count))
    console.print(table)


def check_cmd(content_dir: ContentDirOption = None) -> None:
    """Load every post and report the ones that fail to parse."""
    index, cfg, report = _open_index(content_dir)

    undated = sum(1 for m in index.list_all() if m.date is None)
    console.print(f"[green]✓[/] Loaded [bold]{report.loaded}[/] posts from {escape(str(cfg.content_dir))}")
    if undated:
        console.print(f"  [yellow]{undated} without a date[/] (sorted last)")
    if not report.ok:
        console.print(warn_skipped_posts(report.skipped))
        raise typer.Exit(1)
