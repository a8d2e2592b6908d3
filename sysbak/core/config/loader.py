"""
Configuration loader — reads sysbak.yml into a validated model.

The file is optional. Without one, sysbak works in the current
directory with the defaults below. Relative paths in the file are
resolved against the directory that contains it.

    backup_dir: SysBackup
    catalog_file: package_list.json
    elevation: [sudo]
    audit: true
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sysbak.core.errors import ConfigError
from sysbak.core.persistence.audit import DEFAULT_AUDIT_FILE
from sysbak.core.persistence.catalog_file import DEFAULT_BACKUP_DIR, DEFAULT_CATALOG_FILE

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "sysbak.yml"


class SysbakConfig(BaseModel):
    """Validated sysbak settings."""

    model_config = ConfigDict(extra="forbid")

    root: Path = Field(default_factory=Path.cwd, exclude=True)
    backup_dir: str = DEFAULT_BACKUP_DIR
    catalog_file: str = DEFAULT_CATALOG_FILE
    elevation: list[str] = Field(default_factory=lambda: ["sudo"])
    audit: bool = True

    @property
    def backup_path(self) -> Path:
        return self.root / self.backup_dir

    @property
    def catalog_path(self) -> Path:
        return self.backup_path / self.catalog_file

    @property
    def audit_path(self) -> Path:
        return self.backup_path / DEFAULT_AUDIT_FILE


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for sysbak.yml starting from the given directory, walking up.

    Returns:
        Path to sysbak.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> SysbakConfig:
    """Load sysbak settings.

    Args:
        path: Explicit path to sysbak.yml. If None, searches upward and
            falls back to defaults rooted at the current directory.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found — using defaults", CONFIG_FILE)
            return SysbakConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return SysbakConfig.model_validate({**data, "root": path.parent.resolve()})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
