"""
Configuration schema — the typed shape of a resolved configuration.

Layers (defaults, user, invocation) are plain mappings that must fit
this schema; the resolver merges them and validates the result into a
``ResolvedConfig``. Unknown keys are rejected everywhere except inside
the free-form ``settings`` / ``options`` mappings, which are handed to
collaborators untouched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from toolplane.core.models.capability import Capability


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class LspSettings(_Section):
    """bash-language-server launch command and ``bashIde`` settings."""

    command: list[str] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)


class FormatterSettings(_Section):
    """shfmt arguments."""

    extra_args: list[str] = Field(default_factory=list)
    filetypes: list[str] = Field(default_factory=list)


class LinterSettings(_Section):
    """shellcheck arguments and diagnostic formatting."""

    extra_args: list[str] = Field(default_factory=list)
    diagnostics_format: str = ""
    filetypes: list[str] = Field(default_factory=list)


class TreesitterSettings(_Section):
    ensure_installed: list[str] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)


class CompletionSettings(_Section):
    sources: list[str] = Field(default_factory=list)
    priorities: dict[str, int] = Field(default_factory=dict)
    snippets: bool = True


class ToolSettings(_Section):
    """Per-collaborator settings, one section per capability."""

    lsp: LspSettings = Field(default_factory=LspSettings)
    formatter: FormatterSettings = Field(default_factory=FormatterSettings)
    linter: LinterSettings = Field(default_factory=LinterSettings)
    treesitter: TreesitterSettings = Field(default_factory=TreesitterSettings)
    completion: CompletionSettings = Field(default_factory=CompletionSettings)


class ResolvedConfig(_Section):
    """The single configuration value produced by one resolve pass.

    ``features`` only holds the flags some layer actually set; use
    ``is_enabled`` to read a flag with the default applied.
    """

    shell_binary: str = "bash"
    format_on_save: bool = True
    lint_on_save: bool = True
    features: dict[Capability, bool] = Field(default_factory=dict)
    tools: ToolSettings = Field(default_factory=ToolSettings)

    def is_enabled(self, capability: Capability) -> bool:
        return self.features.get(capability, False)

    @property
    def shell_dialect(self) -> str:
        """Dialect name for parsers: ``zsh`` for zsh, ``bash`` otherwise."""
        name = self.shell_binary.rsplit("/", 1)[-1]
        return "zsh" if name == "zsh" else "bash"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
