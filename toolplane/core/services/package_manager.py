"""
Package manager detection — which manager should install missing tools?

Walks an ordered candidate list and returns the first whose executable
is present. Finding none is a valid outcome: callers fall back to the
universal install commands.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from toolplane.core.data.tools import PACKAGE_MANAGERS
from toolplane.core.models.tool import PackageManagerCandidate, ToolDescriptor
from toolplane.core.services.probe import ProbeInfrastructureError, ToolProbe

logger = logging.getLogger(__name__)


class PackageManagerDetector:
    """Detect the host's package manager.

    Args:
        candidates: Ordered candidates; the first match wins.
        probe: Probe used for each candidate (default: a new ToolProbe).
    """

    def __init__(
        self,
        candidates: Sequence[PackageManagerCandidate] = PACKAGE_MANAGERS,
        probe: ToolProbe | None = None,
    ):
        self.candidates = tuple(candidates)
        self.probe = probe or ToolProbe()

    def detect(self) -> PackageManagerCandidate | None:
        for candidate in self.candidates:
            descriptor = ToolDescriptor(
                name=candidate.name, probe_command=candidate.detection_command,
            )
            try:
                result = self.probe.probe(descriptor)
            except ProbeInfrastructureError as exc:
                logger.warning("Cannot check for %s: %s", candidate.name, exc)
                continue
            if result.found:
                logger.info("Detected package manager: %s", candidate.name)
                return candidate

        logger.info("No package manager detected")
        return None
