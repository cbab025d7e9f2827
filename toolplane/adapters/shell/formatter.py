"""
Formatter activator — shfmt.
"""

from __future__ import annotations

from toolplane.adapters.base import RequestActivator
from toolplane.core.models.capability import Capability, CapabilityRequest
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.tool import DependencySet


class FormatterActivator(RequestActivator):
    """shfmt invocation built from ``tools.formatter``.

    bash and zsh scripts are both formatted with the bash dialect
    (shfmt has no zsh mode).
    """

    @property
    def capability(self) -> Capability:
        return Capability.FORMATTER

    @property
    def requires(self) -> tuple[str, ...]:
        return ("shfmt",)

    def build_request(
        self, config: ResolvedConfig, deps: DependencySet,
    ) -> CapabilityRequest:
        fmt = config.tools.formatter
        args = list(fmt.extra_args)
        shell = config.shell_binary.rsplit("/", 1)[-1]
        if shell in ("bash", "zsh") and "-ln" not in args:
            args += ["-ln", "bash"]

        return CapabilityRequest(
            capability=self.capability,
            command=[self.executable(deps, "shfmt"), *args],
            settings={"format_on_save": config.format_on_save},
            filetypes=list(fmt.filetypes),
        )
