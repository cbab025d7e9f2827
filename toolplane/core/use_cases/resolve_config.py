"""
Resolve-config use case — merge the layers and report the result or the error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from toolplane.core.config.loader import ConfigError
from toolplane.core.config.resolver import resolve
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.use_cases.layers import gather_layers


@dataclass
class ResolveResult:
    """Result of resolving configuration."""

    config: ResolvedConfig | None = None
    sources: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error, "sources": self.sources}
        assert self.config is not None
        return self.config.to_dict()


def resolve_config(
    layer_paths: list[Path] | tuple[Path, ...] = (),
    overrides: list[str] | tuple[str, ...] = (),
    discover: bool = True,
) -> ResolveResult:
    """Resolve defaults, then up to two layer files, then ``--set`` overrides.

    The first file is the user layer, the second the invocation layer.
    With no files, the user layer is auto-discovered when ``discover``
    is set.
    """
    result = ResolveResult()
    if len(layer_paths) > 2:
        result.error = f"At most two layer files are accepted, got {len(layer_paths)}"
        return result

    user_path = layer_paths[0] if layer_paths else None
    invocation_path = layer_paths[1] if len(layer_paths) > 1 else None

    try:
        layers = gather_layers(
            user_path=user_path,
            invocation_path=invocation_path,
            overrides=overrides,
            discover=discover,
        )
        result.sources = layers.sources
        result.config = resolve(*layers.as_tuple())
    except ConfigError as e:
        result.error = str(e)

    return result
