"""
Orchestrator — one setup pass over the shell tooling.

Flow:
    detect package manager → resolve config → probe tools
        → advise on gaps → gate features → activate collaborators

Missing tools never abort the pass: capabilities whose tools are
present are activated, the rest are skipped and reported through the
advisory sink. Only a malformed configuration is fatal.

The orchestrator keeps no state between passes; every pass re-probes
the host and re-resolves the configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from toolplane.adapters.registry import ActivatorRegistry
from toolplane.core.config.resolver import resolve
from toolplane.core.data.tools import CAPABILITY_TOOLS, REQUIRED_TOOLS
from toolplane.core.models.capability import Capability, FeatureActivation
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.receipt import Receipt
from toolplane.core.models.tool import (
    DependencySet,
    InstallInstruction,
    PackageManagerCandidate,
    ToolDescriptor,
)
from toolplane.core.services.dependencies import build_dependency_set
from toolplane.core.services.feature_gate import gate
from toolplane.core.services.install_advisor import LoggingPresenter, Presenter, advise
from toolplane.core.services.package_manager import PackageManagerDetector
from toolplane.core.services.probe import ToolProbe

logger = logging.getLogger(__name__)


@dataclass
class SetupResult:
    """Everything one setup pass produced."""

    config: ResolvedConfig
    dependencies: DependencySet
    package_manager: PackageManagerCandidate | None = None
    instructions: list[InstallInstruction] = field(default_factory=list)
    activations: list[FeatureActivation] = field(default_factory=list)
    receipts: list[Receipt] = field(default_factory=list)

    @property
    def activated(self) -> list[Capability]:
        return [r.capability for r in self.receipts if r.ok]

    @property
    def failed(self) -> list[Capability]:
        return [r.capability for r in self.receipts if r.failed]

    @property
    def skipped(self) -> list[Capability]:
        return [r.capability for r in self.receipts if r.skipped]

    @property
    def status(self) -> str:
        if not self.failed and not self.skipped:
            return "ok"
        if self.activated:
            return "partial"
        return "failed" if self.failed else "degraded"

    def receipt(self, capability: Capability) -> Receipt | None:
        for r in self.receipts:
            if r.capability == capability:
                return r
        return None

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "package_manager": self.package_manager.name if self.package_manager else None,
            "dependencies": self.dependencies.to_dict(),
            "instructions": [i.to_dict() for i in self.instructions],
            "features": {a.capability.value: a.active for a in self.activations},
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
            "config": self.config.to_dict(),
        }


class Orchestrator:
    """Sequences a setup pass.

    Args:
        registry: Activators, one per capability.
        probe: Probe shared by dependency and package-manager checks.
        detector: Package-manager detector (default: built on ``probe``).
        presenter: Advisory sink, called only when something is missing.
        tools: Tools probed on every pass.
        max_workers: Concurrent probes.
    """

    def __init__(
        self,
        registry: ActivatorRegistry,
        probe: ToolProbe | None = None,
        detector: PackageManagerDetector | None = None,
        presenter: Presenter | None = None,
        tools: Sequence[ToolDescriptor | str] = REQUIRED_TOOLS,
        max_workers: int = 4,
    ):
        self.registry = registry
        self.probe = probe or ToolProbe()
        self.detector = detector or PackageManagerDetector(probe=self.probe)
        self.presenter = presenter or LoggingPresenter()
        self.tools = tuple(tools)
        self.max_workers = max_workers

    def run(
        self,
        defaults: Mapping[str, Any] | None,
        user_overrides: Mapping[str, Any] | None = None,
        invocation_overrides: Mapping[str, Any] | None = None,
    ) -> SetupResult:
        """Run one setup pass.

        Raises:
            ConfigShapeError: If any configuration layer is malformed.
                Nothing is activated in that case.
        """
        manager = self.detector.detect()
        config = resolve(defaults, user_overrides, invocation_overrides)

        deps = build_dependency_set(self.tools, self.probe, self.max_workers)

        instructions = advise(deps, manager)
        if instructions:
            self.presenter(instructions)

        activations = gate(config)
        receipts = [
            self._activate(a.capability, config, deps)
            for a in activations if a.active
        ]

        result = SetupResult(
            config=config,
            dependencies=deps,
            package_manager=manager,
            instructions=instructions,
            activations=activations,
            receipts=receipts,
        )
        logger.info(
            "Setup %s: activated=%s skipped=%s failed=%s",
            result.status,
            [c.value for c in result.activated],
            [c.value for c in result.skipped],
            [c.value for c in result.failed],
        )
        return result

    def _activate(
        self,
        capability: Capability,
        config: ResolvedConfig,
        deps: DependencySet,
    ) -> Receipt:
        needed = dict.fromkeys(
            (*CAPABILITY_TOOLS.get(capability, ()), *self.registry.requires(capability))
        )
        missing = [t for t in needed if not deps.is_found(t)]
        if missing:
            logger.info("Skipping %s: missing %s", capability.value, ", ".join(missing))
            return Receipt.skip(capability, missing=missing)
        return self.registry.activate(capability, config, deps)
