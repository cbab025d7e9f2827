"""
Tool models — descriptors, probe results, and install instructions.

A ToolDescriptor says *what* to look for; a ProbeResult says what was
found on this host right now. Both are frozen: results are re-derived
on every setup pass, never cached or mutated.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ToolDescriptor(BaseModel):
    """A named external executable and the command used to find it."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    probe_command: str = ""   # defaults to name

    @model_validator(mode="before")
    @classmethod
    def _default_probe_command(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("probe_command"):
            data = {**data, "probe_command": data.get("name", "")}
        return data


class ProbeResult(BaseModel):
    """Outcome of probing one tool."""

    model_config = ConfigDict(frozen=True)

    tool: ToolDescriptor
    found: bool = False
    resolved_path: str | None = None
    timed_out: bool = False
    error: str | None = None    # probe infrastructure failure, if any

    @model_validator(mode="after")
    def _path_matches_found(self) -> ProbeResult:
        if self.found and not self.resolved_path:
            raise ValueError("found=True requires a resolved_path")
        if not self.found and self.resolved_path:
            raise ValueError("found=False must not carry a resolved_path")
        return self

    @property
    def name(self) -> str:
        return self.tool.name

    @classmethod
    def absent(cls, tool: ToolDescriptor, **kwargs: Any) -> ProbeResult:
        """A not-found result."""
        return cls(tool=tool, found=False, **kwargs)

    def to_dict(self) -> dict:
        data: dict = {"found": self.found, "path": self.resolved_path}
        if self.timed_out:
            data["timed_out"] = True
        if self.error:
            data["error"] = self.error
        return data


class DependencySet(BaseModel):
    """Probe results for a fixed set of tools.

    Every requested tool name is a key exactly once, including the
    ones that were not found. Keys keep the requested order.
    """

    model_config = ConfigDict(frozen=True)

    results: dict[str, ProbeResult] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.results)

    def __contains__(self, name: object) -> bool:
        return name in self.results

    def __getitem__(self, name: str) -> ProbeResult:
        return self.results[name]

    @property
    def names(self) -> list[str]:
        return list(self.results)

    @property
    def missing(self) -> list[str]:
        """Names of tools that were not found, in requested order."""
        return [n for n, r in self.results.items() if not r.found]

    @property
    def found(self) -> list[str]:
        return [n for n, r in self.results.items() if r.found]

    @property
    def all_found(self) -> bool:
        return not self.missing

    def is_found(self, name: str) -> bool:
        result = self.results.get(name)
        return result is not None and result.found

    def path(self, name: str) -> str | None:
        """Resolved path of a tool, or None if absent or unknown."""
        result = self.results.get(name)
        return result.resolved_path if result else None

    def to_dict(self) -> dict:
        return {name: r.to_dict() for name, r in self.results.items()}


class PackageManagerCandidate(BaseModel):
    """A package manager and the executable that reveals it."""

    model_config = ConfigDict(frozen=True)

    name: str
    detection_command: str


class InstallInstruction(BaseModel):
    """How to install one missing tool.

    ``per_manager_command`` is the full recipe table for the tool;
    ``command`` / ``manager`` is the entry selected for this host.
    """

    model_config = ConfigDict(frozen=True)

    tool: str
    label: str = ""
    per_manager_command: dict[str, str] = Field(default_factory=dict)
    manager: str | None = None
    command: str | None = None

    def to_dict(self) -> dict:
        return {
            "tool": self.tool,
            "label": self.label or self.tool,
            "manager": self.manager,
            "command": self.command,
        }
