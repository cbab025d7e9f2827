"""
Receipt model — the outcome of activating one capability.

Activators return receipts. Failures are captured here rather than
raised, so one broken collaborator never stops the others. A receipt
for an activated capability carries the CapabilityRequest handed to
the host; a skipped one names the tools that were missing.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from toolplane.core.models.capability import Capability, CapabilityRequest


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of one activation attempt.

    ``metadata`` is JSON-safe: ``request`` holds the dumped
    CapabilityRequest, ``missing`` the tools behind a skip.
    """

    capability: Capability
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @property
    def request(self) -> CapabilityRequest | None:
        """The request handed to the host, if one was built."""
        raw = self.metadata.get("request")
        return CapabilityRequest.model_validate(raw) if raw else None

    @property
    def missing(self) -> list[str]:
        return list(self.metadata.get("missing", []))

    @classmethod
    def success(
        cls,
        capability: Capability,
        output: str = "",
        request: CapabilityRequest | None = None,
        **kwargs: Any,
    ) -> Receipt:
        """An activated capability, optionally with the request it produced."""
        if request is not None:
            metadata = dict(kwargs.pop("metadata", {}))
            metadata["request"] = request.model_dump(mode="json")
            kwargs["metadata"] = metadata
        return cls(capability=capability, status="ok", output=output, **kwargs)

    @classmethod
    def failure(cls, capability: Capability, error: str, **kwargs: Any) -> Receipt:
        return cls(capability=capability, status="failed", error=error, **kwargs)

    @classmethod
    def skip(
        cls,
        capability: Capability,
        reason: str = "",
        missing: Sequence[str] = (),
        **kwargs: Any,
    ) -> Receipt:
        """A capability that was not activated.

        With ``missing`` and no ``reason``, the reason is ``missing: a, b``.
        """
        if missing:
            metadata = dict(kwargs.pop("metadata", {}))
            metadata["missing"] = list(missing)
            kwargs["metadata"] = metadata
            reason = reason or f"missing: {', '.join(missing)}"
        return cls(capability=capability, status="skipped", output=reason, **kwargs)
