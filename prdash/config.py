"""Configuration loading and paths for prdash."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .columns import ViewColumns
from .exceptions import ConfigError
from .models import QueryFilters

APP_NAME = "prdash"

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(h|m|s)")


def get_config_dir() -> Path:
    """Get ``$XDG_CONFIG_HOME/prdash``, falling back to ``~/.config/prdash``."""
    root = os.environ.get("XDG_CONFIG_HOME")
    if root:
        return Path(root) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    return get_config_dir() / "config.yaml"


def get_log_path() -> Path:
    """Get ``$XDG_STATE_HOME/prdash/prdash.log``, falling back to ``~/.local/state``."""
    root = os.environ.get("XDG_STATE_HOME")
    base = Path(root) if root else Path.home() / ".local" / "state"
    return base / APP_NAME / f"{APP_NAME}.log"


def parse_interval(value: Any) -> float | None:
    """Parse a refresh interval.

    Accepts a number of seconds or a duration string such as ``"90s"``,
    ``"5m"`` or ``"1h30m"``. ``None``, ``0`` and ``""`` mean no
    auto-refresh.

    Raises:
        ConfigError: If the value is negative or not a recognised duration.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ConfigError(f"invalid interval: {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = str(value).strip().lower()
        try:
            seconds = float(text)
        except ValueError:
            parts = _DURATION_PART.findall(text)
            if not parts or "".join(n + u for n, u in parts) != text:
                raise ConfigError(f"invalid interval: {value!r}") from None
            scale = {"h": 3600, "m": 60, "s": 1}
            seconds = sum(float(n) * scale[u] for n, u in parts)
    if seconds < 0:
        raise ConfigError(f"invalid interval: {value!r}")
    return seconds or None


def _parse_flag(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


@dataclass
class DashboardConfig:
    include_drafts: bool = False
    include_closed: bool = False
    interval: float | None = None
    repositories: list[str] = field(default_factory=list)
    view_columns: ViewColumns = field(default_factory=ViewColumns)

    @property
    def filters(self) -> QueryFilters:
        return QueryFilters(
            include_drafts=self.include_drafts,
            include_closed=self.include_closed,
            repositories=tuple(self.repositories),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DashboardConfig:
        """Build from a parsed config mapping.

        Raises:
            ConfigError: For a malformed interval or repository list.
            UnknownColumn: If a view lists an unknown column.
        """
        repositories = data.get("repositories") or []
        if not isinstance(repositories, list):
            raise ConfigError("repositories must be a list")
        for key in ("default_view", "wide_view"):
            if data.get(key) is not None and not isinstance(data[key], list):
                raise ConfigError(f"{key} must be a list of column names")
        return cls(
            include_drafts=_parse_flag(data, "include_drafts"),
            include_closed=_parse_flag(data, "include_closed"),
            interval=parse_interval(data.get("interval")),
            repositories=[str(r) for r in repositories],
            view_columns=ViewColumns.from_names(
                data.get("default_view"), data.get("wide_view")
            ),
        )


def load_config(path: Path | None = None, required: bool = False) -> DashboardConfig:
    """Load the dashboard configuration file.

    Args:
        path: Config file path (defaults to ``get_config_path()``)
        required: If True, a missing file is an error instead of defaults

    Raises:
        ConfigError: If the file is unreadable, not YAML, or not a mapping.
        UnknownColumn: If a view lists an unknown column.
    """
    if path is None:
        path = get_config_path()
    path = Path(os.path.expandvars(str(path))).expanduser()

    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return DashboardConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"failed to load {path}: {e}") from e

    if data is None:
        return DashboardConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return DashboardConfig.from_dict(data)
