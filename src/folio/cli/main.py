"""folio CLI entry point."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from folio.cli.posts import (
    categories_cmd,
    check_cmd,
    list_cmd,
    related_cmd,
    show_cmd,
    tags_cmd,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"folio {_installed_version()}")
        raise typer.Exit()


def _installed_version() -> str:
    try:
        return importlib.metadata.version("folio")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _configure_logging(verbose: bool) -> None:
    """Route library log records through rich on stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app = typer.Typer(
    name="folio",
    help=(
        "folio — markdown content index.\n\n"
        "  folio list    Posts newest first, filtered by --category / --tag.\n"
        "  folio show    One post, sanitized and rendered, with related posts."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every loaded post."),
    ] = False,
) -> None:
    """folio — markdown content index."""
    _configure_logging(verbose)


app.command("list")(list_cmd)
app.command("show")(show_cmd)
app.command("related")(related_cmd)
app.command("categories")(categories_cmd)
app.command("tags")(tags_cmd)
app.command("check")(check_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed folio version."""
    typer.echo(f"folio {_installed_version()}")


if __name__ == "__main__":
    app()
