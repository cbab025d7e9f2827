"""
Compiled-in defaults — the lowest-precedence configuration layer.

Every capability is enabled by default; per-tool settings carry the
shfmt style, shellcheck checks, and language-server settings that a
fresh install starts from.
"""

from __future__ import annotations

import copy
import os
from collections.abc import Mapping
from typing import Any

_SHELL_FILETYPES = ["sh", "bash", "zsh"]

_DEFAULTS: dict[str, Any] = {
    "format_on_save": True,
    "lint_on_save": True,
    "features": {
        "lsp": True,          # bash-language-server
        "formatter": True,    # shfmt
        "linter": True,       # shellcheck
        "treesitter": True,   # syntax highlighting
        "completion": True,
    },
    "tools": {
        "lsp": {
            "command": ["bash-language-server", "start"],
            "settings": {
                "bashIde": {
                    "globPattern": "**/*@(.sh|.inc|.bash|.command)",
                    "shellcheckPath": "shellcheck",
                    "enableExplainshell": True,
                },
            },
        },
        "formatter": {
            # indent 4, binary ops first, indent cases, space redirects,
            # keep padding, function braces on next line
            "extra_args": ["-i", "4", "-bn", "-ci", "-sr", "-kp", "-fn"],
            "filetypes": _SHELL_FILETYPES + [
                "profile", "bashrc", "zshrc", "bash_profile", "zprofile",
            ],
        },
        "linter": {
            "extra_args": ["--external-sources", "--enable=all"],
            "diagnostics_format": "[shellcheck] #{m} [#{c}]",
            "filetypes": _SHELL_FILETYPES,
        },
        "treesitter": {
            "ensure_installed": ["bash"],
            "options": {
                "highlight": {
                    "enable": True,
                    "additional_vim_regex_highlighting": False,
                },
                "indent": {"enable": True},
                "incremental_selection": {"enable": True},
                "textobjects": {
                    "select": {"enable": True, "lookahead": True},
                    "move": {"enable": True, "set_jumps": True},
                },
            },
        },
        "completion": {
            "sources": ["nvim_lsp", "luasnip", "path", "buffer"],
            "priorities": {"nvim_lsp": 1000, "luasnip": 750, "path": 500, "buffer": 250},
            "snippets": True,
        },
    },
}


def default_shell(environ: Mapping[str, str] | None = None) -> str:
    """The user's login shell name, falling back to ``bash``."""
    env = os.environ if environ is None else environ
    shell = env.get("SHELL", "").strip()
    return os.path.basename(shell) if shell else "bash"


def default_layer(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Build a fresh copy of the defaults layer.

    Args:
        environ: Environment to read ``SHELL`` from (default: os.environ).

    Returns:
        A new mapping; callers may mutate it freely.
    """
    layer = copy.deepcopy(_DEFAULTS)
    layer["shell_binary"] = default_shell(environ)
    return layer
