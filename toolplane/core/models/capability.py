"""
Capability model — the closed set of pluggable feature categories.

Each capability is backed by one external collaborator (a language
server, a formatter binary, ...). The set is fixed: there is no
string-keyed dispatch anywhere else in the codebase.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Capability(str, Enum):
    """A pluggable feature category."""

    LSP = "lsp"
    FORMATTER = "formatter"
    LINTER = "linter"
    TREESITTER = "treesitter"
    COMPLETION = "completion"


# Fixed gating/activation order.
CAPABILITIES: tuple[Capability, ...] = (
    Capability.LSP,
    Capability.FORMATTER,
    Capability.LINTER,
    Capability.TREESITTER,
    Capability.COMPLETION,
)


class FeatureActivation(BaseModel):
    """Whether a capability is enabled for the current setup pass."""

    model_config = ConfigDict(frozen=True)

    capability: Capability
    active: bool = False


class CapabilityRequest(BaseModel):
    """Typed hand-off to an external collaborator.

    Describes how the collaborator should be launched or configured.
    The orchestrator builds it; the embedding host acts on it.
    """

    capability: Capability
    command: list[str] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)
    filetypes: list[str] = Field(default_factory=list)
