"""Picker configuration: defaults, JSON config file, environment overrides."""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from .dirlist import SELECTION_POLICIES, SELECT_TOP
from .search import DEFAULT_FILTER, available_filters
from .status import DEFAULT_IDLE_LABEL
from .viewport import DEFAULT_RESERVED_ROWS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "dir-sessions" / "config.json"
CACHE_DIR = Path.home() / ".cache" / "dir-sessions"
DEFAULT_LOG_PATH = CACHE_DIR / "dir-sessions.log"

ENV_ROOTS = "DIR_SESSIONS_ROOTS"
ENV_SOURCE = "DIR_SESSIONS_SOURCE"


class ConfigError(ValueError):
    """Raised for configuration values the picker cannot use."""


@dataclass
class PickerConfig:
    """Settings for directory discovery, session lookup and list layout."""

    # Discovery
    roots: list[str] = field(default_factory=lambda: [str(Path.home() / "projects")])
    max_depth: int = 1
    show_hidden: bool = False

    # Sessions
    session_source: str = "zellij"
    refresh_interval: float = 2.0

    # List behaviour
    default_selection: str = SELECT_TOP
    reserved_rows: int = DEFAULT_RESERVED_ROWS
    pad_short_lists: bool = False
    idle_label: str = DEFAULT_IDLE_LABEL
    filter_name: str = DEFAULT_FILTER

    def validate(self) -> "PickerConfig":
        if self.default_selection not in SELECTION_POLICIES:
            raise ConfigError(
                f"default_selection must be one of {', '.join(SELECTION_POLICIES)}, "
                f"got {self.default_selection!r}"
            )
        if self.filter_name not in available_filters():
            raise ConfigError(
                f"filter_name must be one of {', '.join(available_filters())}, got {self.filter_name!r}"
            )
        if self.reserved_rows < 0:
            raise ConfigError(f"reserved_rows must not be negative, got {self.reserved_rows}")
        if self.max_depth < 1:
            raise ConfigError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.refresh_interval <= 0:
            raise ConfigError(f"refresh_interval must be positive, got {self.refresh_interval}")
        return self


def _from_dict(data: dict, config_path: Path) -> PickerConfig:
    known = {f.name for f in fields(PickerConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning(f"Ignoring unknown keys in {config_path}: {unknown}")
    values = {k: v for k, v in data.items() if k in known}
    if isinstance(values.get("roots"), str):
        values["roots"] = [values["roots"]]
    try:
        return PickerConfig(**values)
    except TypeError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e


def apply_env(config: PickerConfig, environ: Optional[dict] = None) -> PickerConfig:
    """Override config values from DIR_SESSIONS_* environment variables."""
    environ = os.environ if environ is None else environ

    roots = environ.get(ENV_ROOTS)
    if roots:
        config.roots = [r for r in roots.split(os.pathsep) if r]

    source = environ.get(ENV_SOURCE)
    if source:
        config.session_source = source

    return config


def load_config(path: Optional[Path] = None, environ: Optional[dict] = None) -> PickerConfig:
    """Load configuration from a JSON file, then apply environment overrides.

    A missing file gives the defaults. An unreadable or malformed file is
    logged and also gives the defaults.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    config = PickerConfig()

    if config_path.exists():
        try:
            with open(config_path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to read config file {config_path}: {e}")
            data = {}
        if not isinstance(data, dict):
            logger.warning(f"Config file {config_path} does not contain an object")
            data = {}
        config = _from_dict(data, config_path)

    return apply_env(config, environ).validate()
