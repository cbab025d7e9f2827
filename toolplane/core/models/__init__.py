"""
Domain models — Pydantic types for toolplane.

All models are re-exported here for convenient access:

    from toolplane.core.models import Capability, DependencySet, ResolvedConfig
"""

from toolplane.core.models.capability import (
    CAPABILITIES,
    Capability,
    CapabilityRequest,
    FeatureActivation,
)
from toolplane.core.models.config import (
    CompletionSettings,
    FormatterSettings,
    LinterSettings,
    LspSettings,
    ResolvedConfig,
    ToolSettings,
    TreesitterSettings,
)
from toolplane.core.models.receipt import Receipt
from toolplane.core.models.tool import (
    DependencySet,
    InstallInstruction,
    PackageManagerCandidate,
    ProbeResult,
    ToolDescriptor,
)

__all__ = [
    # capability.py
    "CAPABILITIES",
    "Capability",
    "CapabilityRequest",
    # config.py
    "CompletionSettings",
    # tool.py
    "DependencySet",
    "FeatureActivation",
    "FormatterSettings",
    "InstallInstruction",
    "LinterSettings",
    "LspSettings",
    "PackageManagerCandidate",
    "ProbeResult",
    # receipt.py
    "Receipt",
    "ResolvedConfig",
    "ToolDescriptor",
    "ToolSettings",
    "TreesitterSettings",
]
