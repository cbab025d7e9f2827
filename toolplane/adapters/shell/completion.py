"""
Completion activator — completion sources and snippets.
"""

from __future__ import annotations

from toolplane.adapters.base import RequestActivator
from toolplane.core.models.capability import Capability, CapabilityRequest
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.receipt import Receipt
from toolplane.core.models.tool import DependencySet

# Source backed by the language server
LSP_SOURCE = "nvim_lsp"


class CompletionActivator(RequestActivator):
    """Completion sources for shell buffers.

    The language-server source is only offered when the server is
    both enabled and installed.
    """

    @property
    def capability(self) -> Capability:
        return Capability.COMPLETION

    def build_request(
        self, config: ResolvedConfig, deps: DependencySet,
    ) -> CapabilityRequest:
        comp = config.tools.completion
        lsp_ready = (
            config.is_enabled(Capability.LSP)
            and deps.is_found("bash-language-server")
        )
        sources = [s for s in comp.sources if s != LSP_SOURCE or lsp_ready]
        priorities = {s: comp.priorities[s] for s in sources if s in comp.priorities}
        return CapabilityRequest(
            capability=self.capability,
            settings={
                "sources": sources,
                "priorities": priorities,
                "snippets": comp.snippets,
            },
            filetypes=["sh", "bash", "zsh"],
        )

    def activate(self, config: ResolvedConfig, deps: DependencySet) -> Receipt:
        receipt = super().activate(config, deps)
        receipt.output = "sources: " + ", ".join(receipt.request.settings["sources"])
        return receipt
