"""
Activator base — the contract between the orchestrator and collaborators.

One activator per capability. The orchestrator only talks to
collaborators through this interface and never inspects their
protocol: it hands over the resolved config and the dependency set,
and gets a Receipt back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from toolplane.core.models.capability import Capability, CapabilityRequest
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.receipt import Receipt
from toolplane.core.models.tool import DependencySet


class ActivationError(Exception):
    """A collaborator could not be activated.

    Activators may raise this; the registry turns it into a failed
    receipt for that capability only.
    """


class Activator(ABC):
    """Abstract base class for capability activators.

    To add a collaborator:
        1. Subclass Activator
        2. Implement capability and activate (optionally requires)
        3. Register it in the ActivatorRegistry
    """

    @property
    @abstractmethod
    def capability(self) -> Capability:
        """The capability this activator serves."""

    @property
    def requires(self) -> tuple[str, ...]:
        """Tool names that must be found before activation."""
        return ()

    @abstractmethod
    def activate(self, config: ResolvedConfig, deps: DependencySet) -> Receipt:
        """Enable the collaborator for this session.

        Returns:
            A Receipt. Raise ActivationError on failure.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} capability={self.capability.value!r}>"


class RequestActivator(Activator):
    """Activator that hands a CapabilityRequest to the host.

    Subclasses only build the request; the receipt carries it in
    ``metadata["request"]``.
    """

    @abstractmethod
    def build_request(
        self, config: ResolvedConfig, deps: DependencySet,
    ) -> CapabilityRequest:
        """Describe how the collaborator should be launched."""

    @staticmethod
    def executable(deps: DependencySet, name: str) -> str:
        """Resolved path of a tool, or its bare name if it was not probed."""
        return deps.path(name) or name

    def activate(self, config: ResolvedConfig, deps: DependencySet) -> Receipt:
        request = self.build_request(config, deps)
        return Receipt.success(
            self.capability, output=" ".join(request.command), request=request,
        )
