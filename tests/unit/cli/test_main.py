"""Tests for folio CLI entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from folio.cli.main import app

runner = CliRunner()


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.startswith("folio ")


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "folio" in result.output


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for cmd in ["list", "show", "related", "categories", "tags", "check"]:
        assert cmd in result.output


def test_verbose_sets_log_level(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("folio.config._GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml")
    posts = tmp_path / "posts"
    posts.mkdir()

    runner.invoke(app, ["--verbose", "check", "--content-dir", str(posts)])
    assert logging.getLogger().level == logging.INFO
    runner.invoke(app, ["check", "--content-dir", str(posts)])
    assert logging.getLogger().level == logging.WARNING
