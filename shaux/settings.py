"""Settings manager for shaux settings.yaml files.

Manages three-scope settings system:
- User global (~/.shaux/settings.yaml)
- Project (.shaux/settings.yaml)
- Local (.shaux/settings.local.yaml)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

import yaml

from .checks import DEFAULT_MAXSIZE

logger = logging.getLogger(__name__)


@dataclass
class ToolkitSettings:
    """Typed view over the merged settings.

    Attributes:
        log_level: Console/JSONL log level name
        log_path: JSONL log file, or None for no file sink
        maxsize: Default upper bound for file_assert
        aliases: Host shell aliases known to `require`
        functions: Host shell functions known to `require`
    """

    log_level: str = "WARNING"
    log_path: str | None = None
    maxsize: int = DEFAULT_MAXSIZE
    aliases: dict[str, str] = field(default_factory=dict)
    functions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, settings: dict[str, Any]) -> ToolkitSettings:
        """Load typed settings from a merged settings dictionary.

        Settings format:
        ```yaml
        logging:
          level: INFO
          path: ./shaux.log.jsonl
        file_assert:
          maxsize: 4294967296
        shell:
          aliases:
            ll: ls -al
          functions: [mountie, umountie]
        ```

        Invalid values are logged and replaced by defaults.
        """
        defaults = cls()
        logging_cfg = _section(settings, "logging")
        shell_cfg = _section(settings, "shell")

        maxsize = _section(settings, "file_assert").get("maxsize", defaults.maxsize)
        if isinstance(maxsize, bool) or not isinstance(maxsize, int) or maxsize < 0:
            logger.warning(f"Ignoring invalid file_assert.maxsize: {maxsize!r}")
            maxsize = defaults.maxsize

        aliases = shell_cfg.get("aliases") or {}
        if not isinstance(aliases, dict):
            logger.warning("Ignoring shell.aliases: expected a mapping")
            aliases = {}

        functions = shell_cfg.get("functions") or []
        if not isinstance(functions, list):
            logger.warning("Ignoring shell.functions: expected a list")
            functions = []

        return cls(
            log_level=str(logging_cfg.get("level", defaults.log_level)).upper(),
            log_path=logging_cfg.get("path"),
            maxsize=maxsize,
            aliases={str(k): str(v) for k, v in aliases.items()},
            functions=[str(f) for f in functions],
        )


def _section(settings: dict[str, Any], key: str) -> dict[str, Any]:
    value = settings.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning(f"Ignoring settings section {key}: expected a mapping, got {value!r}")
        return {}
    return value


class SettingsManager:
    """Manages settings across user/project/local scopes."""

    def __init__(self, shaux_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            shaux_dir: Base directory for project/local settings (for testing).
                       If None, uses .shaux in current directory.
            user_dir: Base directory for user settings (for testing).
                      If None, uses ~/.shaux.
        """
        if shaux_dir is None:
            shaux_dir = Path(".shaux")
        if user_dir is None:
            user_dir = Path.home() / ".shaux"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = shaux_dir / "settings.yaml"
        self.local_settings_file = shaux_dir / "settings.local.yaml"

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. User settings
        2. Project settings
        3. Local settings
        """
        merged: dict[str, Any] = {}
        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            data = self._read_settings(path)
            if data:
                merged = self._deep_merge(merged, data)
        return merged

    def load(self) -> ToolkitSettings:
        return ToolkitSettings.from_dict(self.get_merged_settings())

    def set_value(self, dotted_key: str, value: Any, scope: str = "local") -> None:
        """Set a dotted key (e.g. "file_assert.maxsize") in one scope's file.

        Args:
            dotted_key: Key path separated by dots
            value: Value to store
            scope: "user", "project", or "local"
        """
        file_map = {
            "user": self.user_settings_file,
            "project": self.project_settings_file,
            "local": self.local_settings_file,
        }
        if scope not in file_map:
            raise ValueError(f"Unknown scope '{scope}'")

        update: dict[str, Any] = value
        for part in reversed(dotted_key.split(".")):
            update = {part: update}

        self._update_settings(file_map[scope], update)
        logger.info(f"Set {dotted_key} in {scope} settings")

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Returns:
            Settings dict or None if file doesn't exist or cannot be parsed
        """
        if not path.exists():
            return None

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings in {path}: top level is not a mapping")
            return None
        return data

    def _write_settings(self, path: Path, settings: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(settings, f, default_flow_style=False, sort_keys=False)

    def _update_settings(self, path: Path, updates: dict[str, Any]) -> None:
        existing = self._read_settings(path) or {}
        self._write_settings(path, self._deep_merge(existing, updates))

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries; overlay takes precedence."""
        result = base.copy()

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
