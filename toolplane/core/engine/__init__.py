"""Engine — the setup-pass orchestrator."""

from toolplane.core.engine.orchestrator import Orchestrator, SetupResult

__all__ = ["Orchestrator", "SetupResult"]
