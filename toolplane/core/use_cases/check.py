"""
Check use case — which required tools are present, and how to get the rest.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from toolplane.core.data.tools import REQUIRED_TOOLS
from toolplane.core.models.tool import (
    DependencySet,
    InstallInstruction,
    PackageManagerCandidate,
    ToolDescriptor,
)
from toolplane.core.services.dependencies import build_dependency_set
from toolplane.core.services.install_advisor import advise
from toolplane.core.services.package_manager import PackageManagerDetector
from toolplane.core.services.probe import ToolProbe


@dataclass
class CheckResult:
    """Result of a dependency check."""

    dependencies: DependencySet = field(default_factory=DependencySet)
    package_manager: PackageManagerCandidate | None = None
    instructions: list[InstallInstruction] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.dependencies.all_found

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "package_manager": self.package_manager.name if self.package_manager else None,
            "dependencies": self.dependencies.to_dict(),
            "missing": self.dependencies.missing,
            "instructions": [i.to_dict() for i in self.instructions],
        }


def run_check(
    tools: Sequence[ToolDescriptor | str] = REQUIRED_TOOLS,
    probe: ToolProbe | None = None,
    max_workers: int = 4,
) -> CheckResult:
    """Probe the required tools and build install advice for the gaps."""
    probe = probe or ToolProbe()
    manager = PackageManagerDetector(probe=probe).detect()
    deps = build_dependency_set(tools, probe, max_workers)
    return CheckResult(
        dependencies=deps,
        package_manager=manager,
        instructions=advise(deps, manager),
    )
