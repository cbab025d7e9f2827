"""
Install advisor — remediation instructions for missing tools.

Turns a DependencySet plus the detected package manager into an
ordered list of install instructions, and renders them for a sink.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from toolplane.core.data.recipes import FALLBACK_MANAGER, INSTALL_RECIPES
from toolplane.core.models.tool import (
    DependencySet,
    InstallInstruction,
    PackageManagerCandidate,
)

logger = logging.getLogger(__name__)

# A sink for advisory output: console, notification, log, ...
Presenter = Callable[[Sequence[InstallInstruction]], None]

ADVISORY_HEADER = "Some required tools are missing. Please install:"


def advise(
    deps: DependencySet,
    manager: PackageManagerCandidate | str | None,
    recipes: Mapping[str, dict] = INSTALL_RECIPES,
    fallback_manager: str = FALLBACK_MANAGER,
) -> list[InstallInstruction]:
    """Build install instructions for every missing tool.

    For each missing tool, in DependencySet order, the detected
    manager's command is used; if it has none, the fallback manager's
    command. Tools with no recipe, or no usable command, are skipped.

    Returns:
        Instructions in the same order as the DependencySet. Empty when
        nothing is missing.
    """
    manager_name = manager.name if isinstance(manager, PackageManagerCandidate) else manager

    instructions: list[InstallInstruction] = []
    for tool in deps.missing:
        recipe = recipes.get(tool)
        if not recipe:
            logger.debug("No install recipe for %s", tool)
            continue

        commands: dict[str, str] = dict(recipe.get("install", {}))
        selected = _select(commands, manager_name, fallback_manager)
        if selected is None:
            logger.debug("No install command for %s via %s", tool, manager_name)
            continue

        chosen_manager, command = selected
        instructions.append(InstallInstruction(
            tool=tool,
            label=recipe.get("label", tool),
            per_manager_command=commands,
            manager=chosen_manager,
            command=command,
        ))

    return instructions


def _select(
    commands: Mapping[str, str],
    manager: str | None,
    fallback: str,
) -> tuple[str, str] | None:
    if manager and manager in commands:
        return manager, commands[manager]
    if fallback in commands:
        return fallback, commands[fallback]
    return None


def format_instructions(instructions: Sequence[InstallInstruction]) -> str:
    """Render instructions as advisory text. Empty string if none."""
    if not instructions:
        return ""
    lines = [ADVISORY_HEADER]
    for inst in instructions:
        lines.append(f"\n{inst.tool}:\n  {inst.command}")
    return "\n".join(lines)


class LoggingPresenter:
    """Default advisory sink: one WARNING log record per pass."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def __call__(self, instructions: Sequence[InstallInstruction]) -> None:
        text = format_instructions(instructions)
        if text:
            self._log.warning("%s", text)
