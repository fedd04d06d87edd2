"""Tests for folio config loader."""

from __future__ import annotations

import warnings
from pathlib import Path

import pytest
import yaml

from folio.config import ConfigError, FolioConfig, load_config


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_yaml(path: Path, data: dict) -> None:
    path.write_text(yaml.dump(data), encoding="utf-8")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FOLIO_CONTENT_DIR", raising=False)
    monkeypatch.delenv("FOLIO_RELATED_LIMIT", raising=False)


# ---------------------------------------------------------------------------
# Defaults (no config files present)
# ---------------------------------------------------------------------------


def test_load_config_defaults_no_files(tmp_path: Path) -> None:
    """No config files → all hardcoded defaults."""
    missing_global = tmp_path / "nonexistent" / "config.yaml"
    cfg = load_config(project_dir=tmp_path, global_config_path=missing_global)

    assert cfg.content.dir == "content/posts"
    assert cfg.content.pattern == "*.md"
    assert cfg.content.encoding == "utf-8"
    assert cfg.related.limit == 3
    assert cfg.render.cache_size == 0


def test_content_dir_property_expands_user() -> None:
    cfg = FolioConfig()
    cfg.content.dir = "~/blog"
    assert cfg.content_dir == Path.home() / "blog"


# ---------------------------------------------------------------------------
# Layering
# ---------------------------------------------------------------------------


def test_load_config_global_overrides_defaults(tmp_path: Path) -> None:
    global_cfg = tmp_path / "config.yaml"
    _write_yaml(global_cfg, {"related": {"limit": 5}})

    cfg = load_config(project_dir=tmp_path, global_config_path=global_cfg)
    assert cfg.related.limit == 5
    assert cfg.content.dir == "content/posts"


def test_load_config_global_empty_file(tmp_path: Path) -> None:
    """Empty global config file → defaults (no crash)."""
    global_cfg = tmp_path / "config.yaml"
    global_cfg.write_text("", encoding="utf-8")

    cfg = load_config(project_dir=tmp_path, global_config_path=global_cfg)
    assert cfg.related.limit == 3


def test_load_config_project_overrides_global(tmp_path: Path) -> None:
    global_cfg = tmp_path / "global.yaml"
    _write_yaml(global_cfg, {"content": {"dir": "global/posts", "pattern": "*.markdown"}})
    _write_yaml(tmp_path / "folio.yaml", {"content": {"dir": "site/posts"}})

    cfg = load_config(project_dir=tmp_path, global_config_path=global_cfg)
    assert cfg.content.dir == "site/posts"
    # Deep merge keeps the global pattern
    assert cfg.content.pattern == "*.markdown"


def test_load_config_env_overrides_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_yaml(tmp_path / "folio.yaml", {"content": {"dir": "site/posts"}, "related": {"limit": 2}})
    monkeypatch.setenv("FOLIO_CONTENT_DIR", "/srv/posts")
    monkeypatch.setenv("FOLIO_RELATED_LIMIT", "7")

    cfg = load_config(project_dir=tmp_path, global_config_path=tmp_path / "none.yaml")
    assert cfg.content.dir == "/srv/posts"
    assert cfg.related.limit == 7


def test_load_config_render_cache(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "folio.yaml", {"render": {"cache_size": 128}})
    cfg = load_config(project_dir=tmp_path, global_config_path=tmp_path / "none.yaml")
    assert cfg.render.cache_size == 128


def test_load_config_empty_section_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "folio.yaml").write_text("related:\n", encoding="utf-8")
    cfg = load_config(project_dir=tmp_path, global_config_path=tmp_path / "none.yaml")
    assert cfg.related.limit == 3


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def test_unknown_key_warns(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "folio.yaml", {"database": {"url": "x"}})
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        load_config(project_dir=tmp_path, global_config_path=tmp_path / "none.yaml")
    assert any("database" in str(w.message) for w in caught)


@pytest.mark.parametrize(
    "data, match",
    [
        ({"related": {"limit": "many"}}, "related.limit"),
        ({"related": {"limit": -1}}, "related.limit"),
        ({"related": {"limit": True}}, "related.limit"),
        ({"render": {"cache_size": -5}}, "render.cache_size"),
        ({"content": {"pattern": ""}}, "content.pattern"),
        ({"content": "posts/"}, "content"),
    ],
)
def test_invalid_values_raise(tmp_path: Path, data: dict, match: str) -> None:
    _write_yaml(tmp_path / "folio.yaml", data)
    with pytest.raises(ConfigError, match=match):
        load_config(project_dir=tmp_path, global_config_path=tmp_path / "none.yaml")


def test_invalid_env_limit_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOLIO_RELATED_LIMIT", "lots")
    with pytest.raises(ConfigError, match="FOLIO_RELATED_LIMIT"):
        load_config(project_dir=tmp_path, global_config_path=tmp_path / "none.yaml")


def test_non_mapping_file_raises(tmp_path: Path) -> None:
    (tmp_path / "folio.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(project_dir=tmp_path, global_config_path=tmp_path / "none.yaml")


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / "folio.yaml").write_text("content: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid YAML"):
        load_config(project_dir=tmp_path, global_config_path=tmp_path / "none.yaml")


def test_config_error_is_value_error() -> None:
    assert issubclass(ConfigError, ValueError)
