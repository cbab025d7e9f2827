"""
Layer assembly — gather the three configuration layers for a command.

    defaults    compiled-in (``default_layer``)
    user        explicit file, else an auto-discovered toolplane.yml
    invocation  optional file, then ``--set KEY=VALUE`` overrides
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from toolplane.core.config.loader import find_config_file, load_layer, parse_overrides
from toolplane.core.config.resolver import check_layer_shape, deep_merge
from toolplane.core.data.defaults import default_layer

logger = logging.getLogger(__name__)


@dataclass
class ConfigLayers:
    """The raw layers plus where they came from."""

    defaults: dict[str, Any] = field(default_factory=dict)
    user: dict[str, Any] = field(default_factory=dict)
    invocation: dict[str, Any] = field(default_factory=dict)
    sources: list[str] = field(default_factory=list)

    def as_tuple(self) -> tuple[dict, dict, dict]:
        return self.defaults, self.user, self.invocation


def gather_layers(
    user_path: Path | None = None,
    invocation_path: Path | None = None,
    overrides: list[str] | tuple[str, ...] = (),
    discover: bool = True,
) -> ConfigLayers:
    """Load the three layers for one command.

    Args:
        user_path: User layer file. If None and ``discover`` is set,
            searches upward from the cwd for toolplane.yml.
        invocation_path: Invocation layer file.
        overrides: ``KEY.PATH=VALUE`` strings, applied on top of the
            invocation file.
        discover: Whether to auto-discover the user layer.

    Raises:
        ConfigError: If a file cannot be read or parsed, or an
            override is malformed.
    """
    layers = ConfigLayers(defaults=default_layer(), sources=["<defaults>"])

    if user_path is None and discover:
        user_path = find_config_file()
    if user_path is not None:
        layers.user = load_layer(user_path)
        layers.sources.append(str(user_path))

    if invocation_path is not None:
        layers.invocation = load_layer(invocation_path)
        layers.sources.append(str(invocation_path))

    if overrides:
        # --set values sit on top of the invocation file, which must be
        # well-formed on its own
        check_layer_shape(layers.invocation, str(invocation_path or "invocation"))
        layers.invocation = deep_merge(layers.invocation, parse_overrides(overrides))
        layers.sources.append("<--set>")

    logger.debug("Config layers: %s", layers.sources)
    return layers
