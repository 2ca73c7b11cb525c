"""
kernel/config.py -- Project paths and settings loading.

All path constants and the settings file reader live here. The CLI
imports from this file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

# .grapher/ directory structure
GRAPHER_DIR = ".grapher"
CONFIG_FILE = "config.yaml"


def grapher_dir(project_root: Path) -> Path:
    """Return the .grapher directory path for a project."""
    return project_root / GRAPHER_DIR


def config_file(project_root: Path) -> Path:
    """Return the config.yaml path."""
    return grapher_dir(project_root) / CONFIG_FILE


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

CONSOLE_BACKENDS = ("auto", "rich", "plain")


class ConfigError(ValueError):
    """Raised when a settings file cannot be turned into Settings."""


@dataclass(frozen=True)
class Settings:
    """User-tunable settings read from config.yaml."""

    console_backend: str = "auto"
    log_level: str = "WARNING"
    log_file: str | None = None


def _settings_from_dict(d: dict[str, Any]) -> Settings:
    defaults = Settings()

    backend = str(d.get("console_backend", defaults.console_backend))
    if backend not in CONSOLE_BACKENDS:
        raise ConfigError(
            f"console_backend must be one of {', '.join(CONSOLE_BACKENDS)}, got '{backend}'"
        )

    level = str(d.get("log_level", defaults.log_level)).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"unknown log_level '{level}'")

    log_file = d.get("log_file", defaults.log_file)
    if log_file is not None:
        log_file = str(log_file)

    return Settings(
        console_backend=backend,
        log_level=level,
        log_file=log_file,
    )


def load_settings(path: Path) -> Settings:
    """Load settings from a YAML file. Missing file yields the defaults.

    Raises:
        ConfigError: The file cannot be read, is not valid YAML, is not
            a mapping, or holds a bad value.
    """
    if not path.exists():
        return Settings()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"cannot parse {path}: {exc}") from exc

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at top level")
    return _settings_from_dict(data)
