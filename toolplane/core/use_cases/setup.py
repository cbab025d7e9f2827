"""
Setup use case — one full orchestrator pass from the command line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from toolplane.adapters import default_registry
from toolplane.adapters.registry import ActivatorRegistry
from toolplane.core.config.loader import ConfigError
from toolplane.core.engine.orchestrator import Orchestrator, SetupResult
from toolplane.core.services.install_advisor import Presenter
from toolplane.core.services.probe import ToolProbe
from toolplane.core.use_cases.layers import gather_layers

logger = logging.getLogger(__name__)


@dataclass
class SetupRunResult:
    """Setup outcome, or the configuration error that prevented it."""

    setup: SetupResult | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.setup is not None
        return self.setup.to_dict()


def run_setup(
    config_path: Path | None = None,
    overrides: list[str] | tuple[str, ...] = (),
    mock_mode: bool = False,
    registry: ActivatorRegistry | None = None,
    probe: ToolProbe | None = None,
    presenter: Presenter | None = None,
) -> SetupRunResult:
    """Gather layers and run the orchestrator.

    Args:
        config_path: User layer file (default: auto-discover).
        overrides: ``KEY=VALUE`` invocation overrides.
        mock_mode: Activate every capability through the mock path.
        registry: Activator registry (default: built-in activators).
        probe: Tool probe (default: a new ToolProbe).
        presenter: Advisory sink (default: log at WARNING).
    """
    registry = registry or default_registry(mock_mode=mock_mode)
    if mock_mode:
        registry.set_mock_mode(True)

    try:
        layers = gather_layers(user_path=config_path, overrides=overrides)
        orchestrator = Orchestrator(registry, probe=probe, presenter=presenter)
        return SetupRunResult(setup=orchestrator.run(*layers.as_tuple()))
    except ConfigError as e:
        logger.error("Setup aborted: %s", e)
        return SetupRunResult(error=str(e))
