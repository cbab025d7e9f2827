"""
Test doubles shared across test modules.
"""

from __future__ import annotations

import threading

from toolplane.core.models.tool import ProbeResult, ToolDescriptor
from toolplane.core.services.probe import ProbeInfrastructureError, ToolProbe

# Every required tool plus apt, as found on a typical Debian host
ALL_TOOLS = {
    "bash": "/usr/bin/bash",
    "shellcheck": "/usr/bin/shellcheck",
    "shfmt": "/usr/local/bin/shfmt",
    "bash-language-server": "/usr/local/bin/bash-language-server",
    "apt-get": "/usr/bin/apt-get",
}


class FakeProbe(ToolProbe):
    """Probe that answers from a table instead of spawning a shell.

    Lookups are keyed by ``probe_command`` (``apt-get``, not ``apt``).
    """

    def __init__(
        self,
        found: dict[str, str] | None = None,
        broken: set[str] | frozenset[str] = frozenset(),
        timed_out: set[str] | frozenset[str] = frozenset(),
    ):
        super().__init__()
        self.found = dict(found or {})
        self.broken = set(broken)
        self.timed_out = set(timed_out)
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def probe(self, tool: str | ToolDescriptor) -> ProbeResult:
        descriptor = tool if isinstance(tool, ToolDescriptor) else ToolDescriptor(name=tool)
        command = descriptor.probe_command
        with self._lock:
            self.calls.append(command)

        if command in self.broken:
            raise ProbeInfrastructureError(f"cannot spawn shell for {command}")
        if command in self.timed_out:
            return ProbeResult.absent(descriptor, timed_out=True)
        if command in self.found:
            return ProbeResult(
                tool=descriptor, found=True, resolved_path=self.found[command],
            )
        return ProbeResult.absent(descriptor)
