"""
Syntax-tree activator — hands grammar and highlight options to the host.

Nothing is launched: the host's tree-sitter integration installs the
grammars and applies the options as given.
"""

from __future__ import annotations

import copy

from toolplane.adapters.base import RequestActivator
from toolplane.core.models.capability import Capability, CapabilityRequest
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.receipt import Receipt
from toolplane.core.models.tool import DependencySet


class TreesitterActivator(RequestActivator):

    @property
    def capability(self) -> Capability:
        return Capability.TREESITTER

    def build_request(
        self, config: ResolvedConfig, deps: DependencySet,
    ) -> CapabilityRequest:
        ts = config.tools.treesitter
        settings = copy.deepcopy(ts.options)
        settings["ensure_installed"] = list(ts.ensure_installed)
        return CapabilityRequest(
            capability=self.capability,
            settings=settings,
            filetypes=["sh", "bash"],
        )

    def activate(self, config: ResolvedConfig, deps: DependencySet) -> Receipt:
        receipt = super().activate(config, deps)
        receipt.output = "grammars: " + ", ".join(config.tools.treesitter.ensure_installed)
        return receipt
