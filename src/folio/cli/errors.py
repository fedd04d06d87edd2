"""folio rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from folio.cli.errors import err_post_not_found
    console.print(err_post_not_found("binary-search"))
    raise typer.Exit(1)
"""

from __future__ import annotations

from rich.markup import escape


def err_content_dir_missing(path: str) -> str:
    """Content directory does not exist."""
    return (
        f"[red]Error:[/] Content directory not found: '{escape(path)}'\n"
        "  Create it and add posts as <slug>.md, or point folio at another directory:\n"
        "    folio list --content-dir <path>   (or set content.dir in folio.yaml)"
    )


def err_post_not_found(slug: str, suggestions: list[str] | None = None) -> str:
    """No post with *slug* in the index."""
    msg = f"[red]Error:[/] Post not found: '{escape(slug)}'\n"
    if suggestions:
        msg += f"  Did you mean: {escape(', '.join(suggestions))}\n"
    return msg + "  Run:  folio list  to see all slugs."


def err_config_invalid(detail: str) -> str:
    """Config file or FOLIO_* variable holds an invalid value."""
    return (
        f"[red]Error:[/] Invalid configuration: {escape(detail)}\n"
        "  Fix the value in folio.yaml (or ~/.folio/config.yaml) and run the command again."
    )


def warn_skipped_posts(skipped: list[tuple[str, str]]) -> str:
    """Some posts could not be parsed and were left out of the index."""
    lines = "\n".join(f"    {escape(name)}: {escape(reason)}" for name, reason in skipped)
    return (
        f"[yellow]⚠[/] {len(skipped)} post(s) skipped:\n"
        f"{lines}\n"
        "  Fix the front matter of these files, then run:  folio check"
    )
