"""
Dependency set builder — probe a list of tools, concurrently.

Probes are independent, read-only lookups, so they fan out on a small
thread pool. The set is assembled only after every probe has finished
or timed out; its keys follow the requested order.
"""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Iterable

from toolplane.core.models.tool import DependencySet, ProbeResult, ToolDescriptor
from toolplane.core.services.probe import ProbeInfrastructureError, ToolProbe

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4
MAX_WORKERS = 8


def build_dependency_set(
    tools: Iterable[str | ToolDescriptor],
    probe: ToolProbe | None = None,
    max_workers: int = DEFAULT_WORKERS,
) -> DependencySet:
    """Probe every tool and return the aggregate DependencySet.

    A probe whose lookup mechanism fails is logged and recorded as
    ``found=False`` with ``error`` set; it never aborts the others.

    Args:
        tools: Tool names or descriptors. Duplicate names are probed once.
        probe: Probe to use (default: a new ToolProbe).
        max_workers: Pool size, clamped to 1..8.

    Returns:
        DependencySet whose keys are exactly the requested tool names.
    """
    probe = probe or ToolProbe()

    descriptors: dict[str, ToolDescriptor] = {}
    for tool in tools:
        d = tool if isinstance(tool, ToolDescriptor) else ToolDescriptor(name=tool)
        descriptors.setdefault(d.name, d)

    if not descriptors:
        return DependencySet()

    workers = max(1, min(max_workers, MAX_WORKERS, len(descriptors)))
    results: dict[str, ProbeResult] = {}

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {pool.submit(_probe_one, probe, d): d for d in descriptors.values()}
        for future in concurrent.futures.as_completed(futures):
            result = future.result()
            results[result.name] = result

    ordered = {name: results[name] for name in descriptors}
    missing = [n for n, r in ordered.items() if not r.found]
    if missing:
        logger.info("Missing tools: %s", ", ".join(missing))
    return DependencySet(results=ordered)


def _probe_one(probe: ToolProbe, descriptor: ToolDescriptor) -> ProbeResult:
    try:
        return probe.probe(descriptor)
    except ProbeInfrastructureError as exc:
        logger.warning("Probe failed for %s: %s", descriptor.name, exc)
        return ProbeResult.absent(descriptor, error=str(exc))
