"""
Linter activator — shellcheck diagnostics.
"""

from __future__ import annotations

from toolplane.adapters.base import RequestActivator
from toolplane.core.models.capability import Capability, CapabilityRequest
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.tool import DependencySet


class LinterActivator(RequestActivator):

    @property
    def capability(self) -> Capability:
        return Capability.LINTER

    @property
    def requires(self) -> tuple[str, ...]:
        return ("shellcheck",)

    def build_request(
        self, config: ResolvedConfig, deps: DependencySet,
    ) -> CapabilityRequest:
        lint = config.tools.linter
        return CapabilityRequest(
            capability=self.capability,
            command=[self.executable(deps, "shellcheck"), *lint.extra_args],
            settings={
                "diagnostics_format": lint.diagnostics_format,
                "lint_on_save": config.lint_on_save,
            },
            filetypes=list(lint.filetypes),
        )
