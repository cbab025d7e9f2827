"""
Tool descriptors and package-manager candidates.

Pure data. ``PACKAGE_MANAGERS`` is ordered: the first candidate whose
executable is on PATH wins.
"""

from __future__ import annotations

from toolplane.core.models.capability import Capability
from toolplane.core.models.tool import PackageManagerCandidate, ToolDescriptor

# ── Tools probed on every setup pass ────────────────────────────

REQUIRED_TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(name="bash"),
    ToolDescriptor(name="shellcheck"),
    ToolDescriptor(name="shfmt"),
    ToolDescriptor(name="bash-language-server"),
)

# ── Which tools each capability needs before it can activate ────

CAPABILITY_TOOLS: dict[Capability, tuple[str, ...]] = {
    Capability.LSP: ("bash-language-server",),
    Capability.FORMATTER: ("shfmt",),
    Capability.LINTER: ("shellcheck",),
    Capability.TREESITTER: (),   # grammar is installed by the host editor
    Capability.COMPLETION: (),
}

# ── Package managers, in detection order ────────────────────────

PACKAGE_MANAGERS: tuple[PackageManagerCandidate, ...] = (
    PackageManagerCandidate(name="brew", detection_command="brew"),
    PackageManagerCandidate(name="apt", detection_command="apt-get"),
    PackageManagerCandidate(name="dnf", detection_command="dnf"),
    PackageManagerCandidate(name="npm", detection_command="npm"),
)
