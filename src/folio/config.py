"""folio configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site — not in this module)
  2. Environment variables  (FOLIO_CONTENT_DIR, FOLIO_RELATED_LIMIT)
  3. Per-project folio.yaml  (in the working directory)
  4. Global ~/.folio/config.yaml
  5. Hardcoded defaults

All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_DIR: Path = Path.home() / ".folio"
_GLOBAL_CONFIG_PATH: Path = _GLOBAL_CONFIG_DIR / "config.yaml"
_PROJECT_CONFIG_NAME: str = "folio.yaml"

# Known top-level sections; anything else produces a warning
_KNOWN_SECTIONS: frozenset[str] = frozenset(["content", "related", "render"])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file or environment variable holds an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class ContentCfg:
    """Where articles live (folio.yaml: content:).

    Attributes:
        dir: Directory holding the article files; relative paths resolve
            against the working directory.
        pattern: Glob matched directly under ``dir``.
        encoding: Text encoding of the article files.
    """

    dir: str = "content/posts"
    pattern: str = "*.md"
    encoding: str = "utf-8"


@dataclass
class RelatedCfg:
    """Related-post suggestions (folio.yaml: related:)."""

    limit: int = 3


@dataclass
class RenderCfg:
    """Detail rendering (folio.yaml: render:).

    ``cache_size`` 0 renders on every request; a positive value memoizes that
    many rendered bodies.
    """

    cache_size: int = 0


@dataclass
class FolioConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    content: ContentCfg = field(default_factory=ContentCfg)
    related: RelatedCfg = field(default_factory=RelatedCfg)
    render: RenderCfg = field(default_factory=RenderCfg)

    @property
    def content_dir(self) -> Path:
        return Path(self.content.dir).expanduser()


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


def _as_int(value: Any, key: str, *, minimum: int = 0) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None
    if number < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {number}")
    return number


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data[name] or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {section!r}")
    return section


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file '{path}' is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level.")
    return data


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _cfg_from_dict(data: dict[str, Any]) -> FolioConfig:
    """Build a *FolioConfig* from a merged raw YAML dict."""
    cfg = FolioConfig()

    if "content" in data:
        c = _section(data, "content")
        cfg.content = ContentCfg(
            dir=str(c.get("dir", cfg.content.dir)),
            pattern=str(c.get("pattern", cfg.content.pattern)),
            encoding=str(c.get("encoding", cfg.content.encoding)),
        )
        if not cfg.content.pattern.strip():
            raise ConfigError("content.pattern must not be empty")

    if "related" in data:
        r = _section(data, "related")
        cfg.related = RelatedCfg(
            limit=_as_int(r.get("limit", cfg.related.limit), "related.limit"),
        )

    if "render" in data:
        rd = _section(data, "render")
        cfg.render = RenderCfg(
            cache_size=_as_int(rd.get("cache_size", cfg.render.cache_size), "render.cache_size"),
        )

    return cfg


def _apply_env_overrides(cfg: FolioConfig) -> FolioConfig:
    """Apply FOLIO_* environment variable overrides (layer 2)."""
    if content_dir := os.environ.get("FOLIO_CONTENT_DIR"):
        cfg.content.dir = content_dir
    if limit := os.environ.get("FOLIO_RELATED_LIMIT"):
        cfg.related.limit = _as_int(limit, "FOLIO_RELATED_LIMIT")
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> FolioConfig:
    """Load and return a merged *FolioConfig*.

    Applies layers in order: global → per-project → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Directory to search for *folio.yaml*. Defaults to CWD.
        global_config_path: Override the global config path (for testing).

    Returns:
        Fully merged *FolioConfig* with env var overrides applied.

    Raises:
        ConfigError: If a config file is not a YAML mapping or holds an
            invalid value.
    """
    global_path = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    # Layer 1: global config
    if global_path.exists():
        raw_global = _read_yaml(global_path)
        _warn_unknown_keys(raw_global, global_path)
        merged = _deep_merge(merged, raw_global)

    # Layer 2: per-project config
    project_cfg_path = search_dir / _PROJECT_CONFIG_NAME
    if project_cfg_path.exists():
        raw_project = _read_yaml(project_cfg_path)
        _warn_unknown_keys(raw_project, project_cfg_path)
        merged = _deep_merge(merged, raw_project)

    cfg = _cfg_from_dict(merged)

    # Layer 3: env var overrides
    return _apply_env_overrides(cfg)
