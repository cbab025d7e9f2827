"""Adapters — activators for external collaborators.

Public re-exports for convenient access.
"""

from toolplane.adapters.base import ActivationError, Activator, RequestActivator
from toolplane.adapters.mock import MockActivator
from toolplane.adapters.registry import ActivatorRegistry
from toolplane.adapters.shell import (
    CompletionActivator,
    FormatterActivator,
    LinterActivator,
    LspActivator,
    TreesitterActivator,
)


def default_registry(mock_mode: bool = False) -> ActivatorRegistry:
    """A registry with the built-in activator for every capability."""
    registry = ActivatorRegistry(mock_mode=mock_mode)
    for activator in (
        LspActivator(),
        FormatterActivator(),
        LinterActivator(),
        TreesitterActivator(),
        CompletionActivator(),
    ):
        registry.register(activator)
    return registry


__all__ = [
    "ActivationError",
    "Activator",
    "ActivatorRegistry",
    "MockActivator",
    "RequestActivator",
    "default_registry",
]
