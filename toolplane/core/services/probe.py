"""
Tool probe — is an executable on PATH, and where?

Read-only: runs ``command -v`` through the host shell and never touches
the filesystem. A missing tool is a normal result, not an error; only a
broken lookup mechanism (no shell to spawn) raises.
"""

from __future__ import annotations

import logging
import shlex
import subprocess

from toolplane.core.models.tool import ProbeResult, ToolDescriptor

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "sh"
DEFAULT_TIMEOUT = 2.0  # seconds, per probe


class ProbeInfrastructureError(Exception):
    """The lookup mechanism itself failed (e.g. the shell cannot be spawned).

    Distinct from a tool being absent, which is reported as
    ``ProbeResult(found=False)``.
    """


class ToolProbe:
    """Resolve tool names against the host's executable search path.

    Args:
        shell: Shell used to run ``command -v``.
        timeout: Per-probe timeout in seconds. A timed-out probe is
            reported as not found.
    """

    def __init__(self, shell: str = DEFAULT_SHELL, timeout: float = DEFAULT_TIMEOUT):
        self.shell = shell
        self.timeout = timeout

    def probe(self, tool: str | ToolDescriptor) -> ProbeResult:
        """Probe one tool.

        Raises:
            ValueError: If the tool name is empty.
            ProbeInfrastructureError: If the shell cannot be spawned.
        """
        descriptor = tool if isinstance(tool, ToolDescriptor) else _descriptor(tool)
        command = f"command -v {shlex.quote(descriptor.probe_command)}"

        try:
            r = subprocess.run(
                [self.shell, "-c", command],
                capture_output=True, text=True, timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(
                "Probe for %s timed out after %.1fs", descriptor.name, self.timeout,
            )
            return ProbeResult.absent(descriptor, timed_out=True)
        except OSError as exc:
            # FileNotFoundError / PermissionError: no usable shell
            raise ProbeInfrastructureError(
                f"cannot run {self.shell!r} to probe {descriptor.name}: {exc}"
            ) from exc

        lines = r.stdout.strip().splitlines()
        if r.returncode != 0 or not lines:
            logger.debug("Probe: %s not found", descriptor.name)
            return ProbeResult.absent(descriptor)

        path = lines[0].strip()
        logger.debug("Probe: %s → %s", descriptor.name, path)
        return ProbeResult(tool=descriptor, found=True, resolved_path=path)


def _descriptor(name: str) -> ToolDescriptor:
    if not name or not name.strip():
        raise ValueError("tool name must be non-empty")
    return ToolDescriptor(name=name.strip())
