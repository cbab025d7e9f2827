"""
Mock activator — test double for any capability.

Records every call and succeeds by default; can be told to fail or
to require tools.
"""

from __future__ import annotations

from toolplane.adapters.base import ActivationError, Activator
from toolplane.core.models.capability import Capability
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.receipt import Receipt
from toolplane.core.models.tool import DependencySet


class MockActivator(Activator):
    """Configurable activator for tests."""

    def __init__(
        self,
        capability: Capability,
        requires: tuple[str, ...] = (),
        error: str | None = None,
    ):
        self._capability = capability
        self._requires = tuple(requires)
        self._error = error
        self._calls: list[tuple[ResolvedConfig, DependencySet]] = []

    @property
    def capability(self) -> Capability:
        return self._capability

    @property
    def requires(self) -> tuple[str, ...]:
        return self._requires

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def calls(self) -> list[tuple[ResolvedConfig, DependencySet]]:
        return self._calls

    def set_failure(self, error: str = "Mock failure") -> None:
        self._error = error

    def activate(self, config: ResolvedConfig, deps: DependencySet) -> Receipt:
        self._calls.append((config, deps))
        if self._error:
            raise ActivationError(self._error)
        return Receipt.success(
            capability=self._capability,
            output="[mock] activated",
            metadata={"mock": True},
        )

    def reset(self) -> None:
        self._calls.clear()
        self._error = None
