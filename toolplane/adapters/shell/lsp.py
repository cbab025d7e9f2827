"""
Language server activator — bash-language-server.

Builds the launch command and the ``bashIde`` settings block: the
shellcheck path comes from the dependency set, the dialect from the
configured shell binary.
"""

from __future__ import annotations

import copy

from toolplane.adapters.base import ActivationError, RequestActivator
from toolplane.core.models.capability import Capability, CapabilityRequest
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.tool import DependencySet

SERVER = "bash-language-server"


class LspActivator(RequestActivator):
    """Launch request for bash-language-server."""

    @property
    def capability(self) -> Capability:
        return Capability.LSP

    @property
    def requires(self) -> tuple[str, ...]:
        return (SERVER,)

    def build_request(
        self, config: ResolvedConfig, deps: DependencySet,
    ) -> CapabilityRequest:
        lsp = config.tools.lsp
        command = list(lsp.command) or [SERVER, "start"]
        if command[0] == SERVER:
            command[0] = self.executable(deps, SERVER)

        settings = copy.deepcopy(lsp.settings)
        bash_ide = settings.setdefault("bashIde", {})
        if not isinstance(bash_ide, dict):
            raise ActivationError(
                f"tools.lsp.settings.bashIde must be a mapping, "
                f"got {type(bash_ide).__name__}"
            )

        # Empty when shellcheck is missing, so the server never spawns it
        bash_ide["shellcheckPath"] = deps.path("shellcheck") or ""
        bash_ide["shellDialect"] = config.shell_dialect

        settings["client"] = {
            "documentFormatting": config.format_on_save,
            "lintDiagnostics": (
                config.is_enabled(Capability.LINTER) and deps.is_found("shellcheck")
            ),
            "snippetSupport": True,
        }

        return CapabilityRequest(
            capability=self.capability,
            command=command,
            settings=settings,
            filetypes=["sh", "bash", "zsh"],
        )
