"""
Feature gate — which capabilities are enabled by configuration.

Pure lookup over ``features``; missing flags are off. Activation is
the orchestrator's job, never the gate's.
"""

from __future__ import annotations

from toolplane.core.models.capability import CAPABILITIES, Capability, FeatureActivation
from toolplane.core.models.config import ResolvedConfig


def gate(config: ResolvedConfig) -> list[FeatureActivation]:
    """One FeatureActivation per capability, in fixed capability order."""
    return [
        FeatureActivation(capability=cap, active=config.is_enabled(cap))
        for cap in CAPABILITIES
    ]


def active_capabilities(config: ResolvedConfig) -> list[Capability]:
    """Just the enabled capabilities, in order."""
    return [a.capability for a in gate(config) if a.active]
