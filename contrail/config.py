"""Configuration loading for contrail (TOML)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .logging import get_logger

_MISSING = object()

logger = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed or holds a malformed value."""


@dataclass(frozen=True)
class Config:
    """Read-only view over a parsed configuration document.

    Values are addressed by dotted paths such as ``global.modules`` or
    ``cwd.output.bg``. Getters return the supplied default when a key is
    absent and raise :class:`ConfigError` when it is present with the wrong
    type.
    """

    data: Mapping[str, Any] = field(default_factory=dict)
    source: Optional[Path] = None

    def get(self, path: str, default: Any = None) -> Any:
        value = self._lookup(path)
        return default if value is _MISSING else value

    def has(self, path: str) -> bool:
        return self._lookup(path) is not _MISSING

    def section(self, path: str) -> "Config":
        """Return the table at ``path`` as its own Config (empty when absent)."""
        value = self._lookup(path)
        if value is _MISSING:
            return Config(source=self.source)
        if not isinstance(value, dict):
            raise ConfigError(f"{self._where(path)} must be a table")
        return Config(data=value, source=self.source)

    def get_str(self, path: str, default: Optional[str] = None) -> Optional[str]:
        value = self._lookup(path)
        if value is _MISSING:
            return default
        if not isinstance(value, str):
            raise ConfigError(f"{self._where(path)} must be a string, got {_type_name(value)}")
        return value

    def get_int(self, path: str, default: Optional[int] = None) -> Optional[int]:
        value = self._lookup(path)
        if value is _MISSING:
            return default
        # bool is an int subclass; TOML keeps them distinct so we do too.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{self._where(path)} must be an integer, got {_type_name(value)}")
        return value

    def get_bool(self, path: str, default: Optional[bool] = None) -> Optional[bool]:
        value = self._lookup(path)
        if value is _MISSING:
            return default
        if not isinstance(value, bool):
            raise ConfigError(f"{self._where(path)} must be a boolean, got {_type_name(value)}")
        return value

    def get_array(self, path: str) -> Optional[List[Any]]:
        value = self._lookup(path)
        if value is _MISSING:
            return None
        if not isinstance(value, list):
            raise ConfigError(f"{self._where(path)} must be an array, got {_type_name(value)}")
        return list(value)

    def get_str_list(self, path: str) -> Optional[List[str]]:
        items = self.get_array(path)
        if items is None:
            return None
        result: List[str] = []
        for index, item in enumerate(items):
            if not isinstance(item, str):
                raise ConfigError(
                    f"{self._where(path)}[{index}] must be a string, got {_type_name(item)}"
                )
            result.append(item)
        return result

    # ------------------------------------------------------------------
    # Internals

    def _lookup(self, path: str) -> Any:
        node: Any = self.data
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def _where(self, path: str) -> str:
        if self.source is not None:
            return f"'{path}' in {self.source.name}"
        return f"'{path}'"


def load_config(config_path: Path | None) -> Config:
    """Load configuration from disk.

    A missing path, or a path that does not exist, yields an empty
    configuration so every module falls back to its defaults.
    """
    if config_path is None:
        return Config()

    config_file = config_path.expanduser()
    if not config_file.exists():
        logger.debug("Config file %s not found; using defaults", config_file)
        return Config(source=config_file)

    data = _read_config(config_file)
    logger.debug("Loaded config from %s", config_file)
    return Config(data=data, source=config_file)


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "table"
    return type(value).__name__


__all__ = ["Config", "ConfigError", "load_config"]
