"""
Activator registry — central dispatch for capability activation.

The orchestrator never calls activators directly. The registry looks
the activator up, runs it, and guarantees a Receipt back: a raising
activator becomes a failed receipt for its capability only.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from toolplane.adapters.base import ActivationError, Activator
from toolplane.core.models.capability import Capability
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.receipt import Receipt
from toolplane.core.models.tool import DependencySet

logger = logging.getLogger(__name__)


class ActivatorRegistry:
    """Registry and dispatcher for activators, keyed by capability.

    Features:
        - Register/unregister activators
        - Mock mode: every activation succeeds without touching activators
        - Activate a capability and always return a Receipt
    """

    def __init__(self, mock_mode: bool = False):
        self._activators: dict[Capability, Activator] = {}
        self._mock_mode = mock_mode

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool) -> None:
        self._mock_mode = enabled

    def register(self, activator: Activator) -> None:
        capability = activator.capability
        if capability in self._activators:
            logger.warning("Overwriting existing activator: %s", capability.value)
        self._activators[capability] = activator
        logger.debug("Registered activator: %s", capability.value)

    def unregister(self, capability: Capability) -> None:
        self._activators.pop(capability, None)

    def get(self, capability: Capability) -> Activator | None:
        return self._activators.get(capability)

    def list_capabilities(self) -> list[Capability]:
        return list(self._activators)

    def requires(self, capability: Capability) -> tuple[str, ...]:
        """Tools the registered activator needs (empty if none registered)."""
        activator = self._activators.get(capability)
        return activator.requires if activator else ()

    def activate(
        self,
        capability: Capability,
        config: ResolvedConfig,
        deps: DependencySet,
    ) -> Receipt:
        """Activate one capability. Never raises."""
        start = time.monotonic()

        if self._mock_mode:
            return Receipt.success(
                capability=capability,
                output=f"[mock] {capability.value} activated",
                metadata={"mock": True},
            )

        activator = self._activators.get(capability)
        if activator is None:
            return Receipt.failure(
                capability=capability,
                error=f"No activator registered for '{capability.value}'",
            )

        try:
            receipt = activator.activate(config, deps)
        except ActivationError as e:
            logger.warning("Activation failed for %s: %s", capability.value, e)
            receipt = Receipt.failure(capability=capability, error=str(e))
        except Exception as e:
            logger.error("Activator %s raised unexpectedly: %s", capability.value, e)
            receipt = Receipt.failure(
                capability=capability, error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - start) * 1000)
        return receipt

    def status(self) -> dict[str, dict[str, Any]]:
        """Registered activators and what they need."""
        return {
            cap.value: {
                "type": activator.__class__.__name__,
                "requires": list(activator.requires),
            }
            for cap, activator in self._activators.items()
        }
