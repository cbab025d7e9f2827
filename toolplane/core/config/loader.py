"""
Configuration loader — reads layer files and command-line overrides.

Layer files are YAML (JSON is accepted too, as a YAML subset). Each
file yields one plain mapping; merging and validation happen in the
resolver, never here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Config filenames searched for, in order, in each directory
CONFIG_FILES = ("toolplane.yml", ".toolplane.yml")


class ConfigError(Exception):
    """Raised when configuration is missing, unreadable, or invalid."""


class ConfigShapeError(ConfigError):
    """Raised when a configuration layer does not fit the schema.

    ``path`` is the dotted key path of the offending value
    (empty for the layer itself).
    """

    def __init__(self, message: str, path: str = "", layer: str = ""):
        self.path = path
        self.layer = layer
        where = f"{layer}: " if layer else ""
        at = f"'{path}': " if path else ""
        super().__init__(f"{where}{at}{message}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a config file starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the first config file found, or None.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        for name in CONFIG_FILES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_layer(path: Path) -> dict[str, Any]:
    """Load one configuration layer from a YAML or JSON file.

    An empty file is an empty layer.

    Raises:
        ConfigError: If the file is missing, unreadable, or not valid YAML.
        ConfigShapeError: If the document is not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config layer from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigShapeError(
            f"expected a mapping, got {type(data).__name__}", layer=str(path),
        )
    return data


def parse_overrides(assignments: list[str] | tuple[str, ...]) -> dict[str, Any]:
    """Turn ``KEY.PATH=VALUE`` strings into a nested override layer.

    Values are parsed as YAML scalars, so ``true`` becomes a bool and
    ``[a, b]`` a list. Later assignments win.

    Example::

        parse_overrides(["features.lsp=false", "shell_binary=zsh"])
        # {"features": {"lsp": False}, "shell_binary": "zsh"}

    Raises:
        ConfigError: On a malformed assignment.
    """
    layer: dict[str, Any] = {}
    for item in assignments:
        key, sep, raw_value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"Invalid override {item!r}: expected KEY=VALUE")
        parts = key.split(".")
        if any(not p for p in parts):
            raise ConfigError(f"Invalid override key {key!r}")

        try:
            value = yaml.safe_load(raw_value) if raw_value.strip() else ""
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid override value for {key!r}: {e}") from e

        node = layer
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    return layer
