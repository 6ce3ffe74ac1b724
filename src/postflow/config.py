"""Unified configuration loaded from .postflow.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".postflow.toml"
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "postflow" / "config.toml"


class SiteConfig(BaseModel):
    """[site] section."""

    content_dir: str = "content/posts"
    authors_dir: str = "data/authors"


class GeneratorConfig(BaseModel):
    """[generator] section — the external static-site generator CLI."""

    command: str = "hugo"
    build_args: list[str] = Field(default_factory=lambda: ["--minify"])
    preview_args: list[str] = Field(default_factory=lambda: ["--buildDrafts"])
    serve_args: list[str] = Field(default_factory=lambda: ["server"])
    timeout: int = 300


class DefaultsConfig(BaseModel):
    """[defaults] section."""

    author: str = ""


class PostflowConfig(BaseModel):
    """Top-level configuration model."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    def content_path(self, root: Path | None = None) -> Path:
        """Resolve the content directory against ``root`` (default: CWD)."""
        return (root or Path(".")) / self.site.content_dir

    def authors_path(self, root: Path | None = None) -> Path:
        """Resolve the authors directory against ``root`` (default: CWD)."""
        return (root or Path(".")) / self.site.authors_dir


def load_config(
    path: str | Path | None = None,
    search_dir: Path | None = None,
) -> PostflowConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .postflow.toml in ``search_dir`` (default: CWD)
    3. ~/.config/postflow/config.toml

    Then overlay environment variables.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for candidate in ((search_dir or Path(".")) / CONFIG_FILENAME, GLOBAL_CONFIG_PATH):
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break

    config = PostflowConfig.model_validate(data) if data else PostflowConfig()
    return _apply_env_vars(config)


def merge_cli_overrides(config: PostflowConfig, **cli_kwargs: object) -> PostflowConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only values that are not None override the config.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "content_dir": ("site", "content_dir"),
        "authors_dir": ("site", "authors_dir"),
        "generator": ("generator", "command"),
        "author": ("defaults", "author"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = value

    return PostflowConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: PostflowConfig) -> PostflowConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "POSTFLOW_CONTENT_DIR": ("site", "content_dir"),
        "POSTFLOW_AUTHORS_DIR": ("site", "authors_dir"),
        "POSTFLOW_GENERATOR": ("generator", "command"),
        "POSTFLOW_AUTHOR": ("defaults", "author"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    timeout_raw = os.environ.get("POSTFLOW_GENERATOR_TIMEOUT")
    if timeout_raw is not None:
        try:
            data["generator"]["timeout"] = int(timeout_raw)
        except ValueError:
            logger.warning("Ignoring non-integer POSTFLOW_GENERATOR_TIMEOUT=%r", timeout_raw)

    return PostflowConfig.model_validate(data)
