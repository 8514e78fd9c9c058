"""Settings loaded from an optional YAML config file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "inventory_reporter.yaml"
USER_CONFIG = Path.home() / ".config" / "inventory_reporter" / "config.yaml"


class SSHSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str | None = None
    port: int = Field(default=22, ge=1, le=65535)
    key_filename: str | None = None
    # Connect timeout, seconds.
    timeout: int = Field(default=30, gt=0)
    command_timeout: int = Field(default=60, gt=0)
    auto_add_host_keys: bool = True


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    targets: list[str] = Field(default_factory=list)
    export_dir: str | None = None
    json_depth: int = Field(default=4, ge=1)
    ssh: SSHSettings = Field(default_factory=SSHSettings)


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid config file: {path} (expected YAML mapping)")
    return raw


def load_settings(explicit_path: str | None = None) -> Settings:
    """Locate and load settings. Falls back to built-in defaults.

    Search order: *explicit_path*, ``./inventory_reporter.yaml``,
    ``~/.config/inventory_reporter/config.yaml``.
    """
    candidates: list[Path] = []
    if explicit_path:
        candidates.append(Path(explicit_path))
    candidates += [Path(CONFIG_FILENAME), USER_CONFIG]
    for path in candidates:
        if not path.is_file():
            continue
        try:
            settings = Settings.model_validate(_read_yaml(path))
        except (yaml.YAMLError, ValidationError) as exc:
            raise ConfigError(f"Invalid config file: {path}: {exc}") from exc
        if settings.ssh.key_filename:
            settings.ssh.key_filename = str(Path(settings.ssh.key_filename).expanduser())
        logger.info("Loaded settings from %s", path)
        return settings
    return Settings()
