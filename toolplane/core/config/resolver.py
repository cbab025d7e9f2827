"""
Configuration resolver — three-layer deep merge into a ResolvedConfig.

Precedence, lowest to highest::

    defaults  <  user overrides  <  invocation overrides

Merge rules:
    - Two mappings under the same key are merged recursively, so an
      override of one nested key keeps its untouched siblings.
    - Anything else (scalar, list, or a type mismatch) is replaced
      wholesale by the higher layer. Lists are never concatenated,
      and a scalar or list overriding a mapping drops the mapping.

Every layer is shape-checked against the schema in
``toolplane.core.models.config`` before merging, so a bad value is
reported with the layer and key path it came from. Resolution is pure:
inputs are never mutated, and identical inputs give identical output.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from enum import Enum
from functools import lru_cache
from typing import Any, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from toolplane.core.config.loader import ConfigShapeError
from toolplane.core.models.config import ResolvedConfig

logger = logging.getLogger(__name__)

LAYER_NAMES = ("defaults", "user", "invocation")


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` onto ``base`` and return a new dict.

    Neither argument is modified; nested values are deep-copied.
    """
    merged: dict[str, Any] = {key: copy.deepcopy(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        elif isinstance(value, Mapping):
            merged[key] = deep_merge({}, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve(
    defaults: Mapping[str, Any] | None,
    user_overrides: Mapping[str, Any] | None = None,
    invocation_overrides: Mapping[str, Any] | None = None,
) -> ResolvedConfig:
    """Resolve three configuration layers into one ResolvedConfig.

    Absent (None) or empty layers leave the lower layers intact.

    Raises:
        ConfigShapeError: If any layer violates the schema. No partial
            result is produced.
    """
    layers = (defaults, user_overrides, invocation_overrides)
    for name, layer in zip(LAYER_NAMES, layers):
        check_layer_shape(layer, name)

    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged = deep_merge(merged, layer)

    try:
        config = ResolvedConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigShapeError(f"invalid resolved configuration: {e}") from e

    logger.debug(
        "Resolved config: shell=%s features=%s",
        config.shell_binary,
        {c.value: v for c, v in config.features.items()},
    )
    return config


# ── Shape checking ──────────────────────────────────────────────


def check_layer_shape(layer: Any, layer_name: str = "") -> None:
    """Check one raw layer against the configuration schema.

    Only keys that are present are checked; a layer may be partial.
    Values are checked strictly: ``"yes"`` is not a bool and ``1`` is
    not a string.

    Raises:
        ConfigShapeError: On the first violation found.
    """
    if layer is None:
        return
    if not isinstance(layer, Mapping):
        raise ConfigShapeError(
            f"expected a mapping, got {type(layer).__name__}", layer=layer_name,
        )
    _check_section(layer, ResolvedConfig, "", layer_name)


def _check_section(
    data: Mapping[Any, Any],
    model: type[BaseModel],
    prefix: str,
    layer_name: str,
) -> None:
    for key, value in data.items():
        path = f"{prefix}{key}"
        field = model.model_fields.get(key) if isinstance(key, str) else None
        if field is None:
            raise ConfigShapeError("unknown key", path=path, layer=layer_name)

        annotation = field.annotation
        origin = get_origin(annotation)
        if origin is dict:
            _check_mapping(value, annotation, path, layer_name)
        elif origin is None and isinstance(annotation, type) and issubclass(annotation, BaseModel):
            if not isinstance(value, Mapping):
                raise ConfigShapeError(
                    f"expected a mapping, got {type(value).__name__}",
                    path=path, layer=layer_name,
                )
            _check_section(value, annotation, f"{path}.", layer_name)
        else:
            _check_value(value, annotation, path, layer_name)


def _check_mapping(value: Any, annotation: Any, path: str, layer_name: str) -> None:
    if not isinstance(value, Mapping):
        raise ConfigShapeError(
            f"expected a mapping, got {type(value).__name__}",
            path=path, layer=layer_name,
        )
    key_type, value_type = get_args(annotation)
    allowed: set[str] | None = None
    if isinstance(key_type, type) and issubclass(key_type, Enum):
        allowed = {member.value for member in key_type}

    for key, item in value.items():
        if allowed is not None and key not in allowed:
            raise ConfigShapeError(
                f"unknown key (expected one of: {', '.join(sorted(allowed))})",
                path=f"{path}.{key}", layer=layer_name,
            )
        if not isinstance(key, str):
            raise ConfigShapeError(
                f"keys must be strings, got {type(key).__name__}",
                path=f"{path}.{key}", layer=layer_name,
            )
        _check_value(item, value_type, f"{path}.{key}", layer_name)


def _check_value(value: Any, annotation: Any, path: str, layer_name: str) -> None:
    if annotation is Any:
        return
    try:
        _adapter(annotation).validate_python(value, strict=True)
    except ValidationError:
        raise ConfigShapeError(
            f"expected {_type_label(annotation)}, got {type(value).__name__}",
            path=path, layer=layer_name,
        ) from None


@lru_cache(maxsize=None)
def _adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def _type_label(annotation: Any) -> str:
    origin = get_origin(annotation)
    if origin is list:
        (item,) = get_args(annotation)
        return f"a list of {_type_label(item)}"
    return getattr(annotation, "__name__", str(annotation))
