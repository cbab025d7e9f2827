"""Shell tooling activators — language server, shfmt, shellcheck, grammar, completion."""

from toolplane.adapters.shell.completion import CompletionActivator
from toolplane.adapters.shell.formatter import FormatterActivator
from toolplane.adapters.shell.linter import LinterActivator
from toolplane.adapters.shell.lsp import LspActivator
from toolplane.adapters.shell.treesitter import TreesitterActivator

__all__ = [
    "CompletionActivator",
    "FormatterActivator",
    "LinterActivator",
    "LspActivator",
    "TreesitterActivator",
]
